"""Friend router - FastAPI endpoints for friends"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import FriendCreate, FriendResponse, FriendUpdate
from .service import FriendService, serialize_friend

router = APIRouter(prefix="/friends", tags=["Friends"])


def get_friend_service(db: Session = Depends(get_db)) -> FriendService:
    """Dependency injection for FriendService"""
    return FriendService(db)


@router.get("", response_model=list[FriendResponse])
async def get_friends(
    current_user: User = Depends(get_current_user),
    service: FriendService = Depends(get_friend_service),
):
    return [serialize_friend(f) for f in service.get_friends(current_user)]


@router.get("/groups")
async def get_friend_groups(
    current_user: User = Depends(get_current_user),
    service: FriendService = Depends(get_friend_service),
):
    """Group names in use, for the group picker"""
    return service.get_groups(current_user)


@router.get("/{friend_id}", response_model=FriendResponse)
async def get_friend(
    friend_id: int,
    current_user: User = Depends(get_current_user),
    service: FriendService = Depends(get_friend_service),
):
    return serialize_friend(service.get_friend(friend_id, current_user))


@router.post("", response_model=FriendResponse, status_code=201)
async def create_friend(
    data: FriendCreate,
    current_user: User = Depends(get_current_user),
    service: FriendService = Depends(get_friend_service),
):
    return serialize_friend(service.create_friend(data, current_user))


@router.put("/{friend_id}", response_model=FriendResponse)
async def update_friend(
    friend_id: int,
    data: FriendUpdate,
    current_user: User = Depends(get_current_user),
    service: FriendService = Depends(get_friend_service),
):
    return serialize_friend(service.update_friend(friend_id, data, current_user))


@router.delete("/{friend_id}")
async def delete_friend(
    friend_id: int,
    current_user: User = Depends(get_current_user),
    service: FriendService = Depends(get_friend_service),
):
    """Remove a friend and every invitation they hold"""
    return service.delete_friend(friend_id, current_user)
