"""Saved location router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import LocationCreate, LocationResponse, LocationUpdate
from .service import LocationService, serialize_location

router = APIRouter(prefix="/locations", tags=["Locations"])


def get_location_service(db: Session = Depends(get_db)) -> LocationService:
    return LocationService(db)


@router.get("", response_model=list[LocationResponse])
async def get_locations(
    current_user: User = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    return [serialize_location(loc) for loc in service.get_locations(current_user)]


@router.post("", response_model=LocationResponse, status_code=201)
async def create_location(
    data: LocationCreate,
    current_user: User = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    return serialize_location(service.create_location(data, current_user))


@router.put("/{location_id}", response_model=LocationResponse)
async def update_location(
    location_id: int,
    data: LocationUpdate,
    current_user: User = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    return serialize_location(service.update_location(location_id, data, current_user))


@router.delete("/{location_id}")
async def delete_location(
    location_id: int,
    current_user: User = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    return service.delete_location(location_id, current_user)
