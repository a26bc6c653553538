"""Friend service - Business logic for friends"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Friend, User
from .repository import FriendRepository
from .schemas import FriendCreate, FriendResponse, FriendUpdate

logger = logging.getLogger(__name__)


def serialize_friend(friend: Friend) -> FriendResponse:
    return FriendResponse(
        id=friend.id,
        name=friend.name,
        phone=friend.phone,
        email=friend.email,
        group=friend.group,
        createdAt=friend.created_at,
    )


class FriendService:
    """Service layer for friend business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = FriendRepository()

    def get_friends(self, user: User) -> list[Friend]:
        return self.repo.get_friends(self.db, user.id)

    def get_groups(self, user: User) -> dict:
        return {"groups": self.repo.get_groups(self.db, user.id)}

    def get_friend(self, friend_id: int, user: User) -> Friend:
        friend = self.repo.get_friend_by_id(self.db, friend_id, user.id)
        if not friend:
            raise HTTPException(status_code=404, detail="Friend not found")
        return friend

    def create_friend(self, data: FriendCreate, user: User) -> Friend:
        friend = self.repo.create_friend(
            self.db,
            user.id,
            name=data.name,
            phone=data.phone,
            email=data.email,
            group=data.group,
        )
        logger.info(f"✅ Friend {friend.id} added for user {user.id}")
        return friend

    def update_friend(self, friend_id: int, data: FriendUpdate, user: User) -> Friend:
        friend = self.get_friend(friend_id, user)
        updates = data.model_dump(exclude_unset=True)
        if "name" in updates and not (updates["name"] or "").strip():
            raise HTTPException(status_code=400, detail="Friend name is required")
        return self.repo.update_friend(self.db, friend, **updates)

    def delete_friend(self, friend_id: int, user: User) -> dict:
        friend = self.get_friend(friend_id, user)
        self.repo.delete_friend(self.db, friend)
        return {"message": "Friend deleted"}
