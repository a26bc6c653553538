"""Activity router - FastAPI endpoints for activity templates"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import ActivityCreate, ActivityResponse, ActivityUpdate
from .service import ActivityService, serialize_activity

router = APIRouter(prefix="/activities", tags=["Activities"])


def get_activity_service(db: Session = Depends(get_db)) -> ActivityService:
    """Dependency injection for ActivityService"""
    return ActivityService(db)


@router.get("", response_model=list[ActivityResponse])
async def get_activities(
    current_user: User = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
):
    """Get all activity templates with their values and instance counts"""
    return [serialize_activity(a) for a in service.get_activities(current_user)]


@router.get("/{activity_id}", response_model=ActivityResponse)
async def get_activity(
    activity_id: int,
    current_user: User = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
):
    return serialize_activity(service.get_activity(activity_id, current_user))


@router.post("", response_model=ActivityResponse, status_code=201)
async def create_activity(
    data: ActivityCreate,
    current_user: User = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
):
    return serialize_activity(service.create_activity(data, current_user))


@router.put("/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: int,
    data: ActivityUpdate,
    current_user: User = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
):
    return serialize_activity(service.update_activity(activity_id, data, current_user))


@router.delete("/{activity_id}")
async def delete_activity(
    activity_id: int,
    current_user: User = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
):
    """Delete a template together with its scheduled instances"""
    return service.delete_activity(activity_id, current_user)
