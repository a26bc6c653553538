"""Friend repository - Database operations for friends"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Friend


class FriendRepository:
    """Repository for friend database operations"""

    @staticmethod
    def get_friends(db: Session, user_id: int) -> list[Friend]:
        return db.query(Friend).filter(Friend.user_id == user_id).order_by(Friend.name.asc()).all()

    @staticmethod
    def get_groups(db: Session, user_id: int) -> list[str]:
        """Distinct non-blank group names, alphabetical"""
        rows = (
            db.query(Friend.group)
            .filter(
                Friend.user_id == user_id,
                Friend.group.isnot(None),
                func.trim(Friend.group) != "",
            )
            .distinct()
            .order_by(Friend.group.asc())
            .all()
        )
        return [group for (group,) in rows]

    @staticmethod
    def get_friend_by_id(db: Session, friend_id: int, user_id: int) -> Optional[Friend]:
        return db.query(Friend).filter(Friend.id == friend_id, Friend.user_id == user_id).first()

    @staticmethod
    def count_owned(db: Session, friend_ids: list[int], user_id: int) -> int:
        """How many of the given friend IDs belong to the user"""
        return db.query(Friend).filter(Friend.id.in_(friend_ids), Friend.user_id == user_id).count()

    @staticmethod
    def create_friend(db: Session, user_id: int, **friend_data) -> Friend:
        friend = Friend(user_id=user_id, **friend_data)
        db.add(friend)
        db.commit()
        db.refresh(friend)
        return friend

    @staticmethod
    def update_friend(db: Session, friend: Friend, **updates) -> Friend:
        for key, value in updates.items():
            if value is not None and hasattr(friend, key):
                setattr(friend, key, value)

        db.commit()
        db.refresh(friend)
        return friend

    @staticmethod
    def delete_friend(db: Session, friend: Friend) -> None:
        db.delete(friend)
        db.commit()
