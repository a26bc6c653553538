"""Event instance router - FastAPI endpoints for scheduled events"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import InstanceCreate, InstanceResponse, InstanceUpdate
from .service import InstanceService, serialize_instance

router = APIRouter(prefix="/instances", tags=["Instances"])


def get_instance_service(db: Session = Depends(get_db)) -> InstanceService:
    """Dependency injection for InstanceService"""
    return InstanceService(db)


@router.get("", response_model=list[InstanceResponse])
async def get_instances(
    activityId: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    service: InstanceService = Depends(get_instance_service),
):
    return [serialize_instance(i) for i in service.get_instances(current_user, activityId)]


@router.get("/{instance_id}", response_model=InstanceResponse)
async def get_instance(
    instance_id: int,
    current_user: User = Depends(get_current_user),
    service: InstanceService = Depends(get_instance_service),
):
    return serialize_instance(service.get_instance(instance_id, current_user))


@router.get("/{instance_id}/google-calendar")
async def get_google_calendar_url(
    instance_id: int,
    current_user: User = Depends(get_current_user),
    service: InstanceService = Depends(get_instance_service),
):
    """Link that opens Google Calendar with the event pre-filled"""
    return service.get_google_calendar_url(instance_id, current_user)


@router.post("", response_model=InstanceResponse, status_code=201)
async def create_instance(
    data: InstanceCreate,
    current_user: User = Depends(get_current_user),
    service: InstanceService = Depends(get_instance_service),
):
    """Schedule an event from a template and invite friends to it"""
    return serialize_instance(service.create_instance(data, current_user))


@router.put("/{instance_id}", response_model=InstanceResponse)
async def update_instance(
    instance_id: int,
    data: InstanceUpdate,
    current_user: User = Depends(get_current_user),
    service: InstanceService = Depends(get_instance_service),
):
    return serialize_instance(service.update_instance(instance_id, data, current_user))


@router.delete("/{instance_id}")
async def delete_instance(
    instance_id: int,
    current_user: User = Depends(get_current_user),
    service: InstanceService = Depends(get_instance_service),
):
    return service.delete_instance(instance_id, current_user)


@router.delete("/{instance_id}/rsvp")
async def remove_rsvp(
    instance_id: int,
    friendId: Optional[int] = Query(None),
    rsvpId: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    service: InstanceService = Depends(get_instance_service),
):
    return service.remove_rsvp(instance_id, current_user, friend_id=friendId, rsvp_id=rsvpId)
