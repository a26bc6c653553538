"""Saved location service"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Location, User
from .repository import LocationRepository
from .schemas import LocationCreate, LocationResponse, LocationUpdate

logger = logging.getLogger(__name__)


def serialize_location(location: Location) -> LocationResponse:
    return LocationResponse(
        id=location.id,
        name=location.name,
        type=location.type,
        address=location.address,
        description=location.description,
        website=location.website,
        createdAt=location.created_at,
    )


class LocationService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = LocationRepository()

    def get_locations(self, user: User) -> list[Location]:
        return self.repo.get_locations(self.db, user.id)

    def get_location(self, location_id: int, user: User) -> Location:
        location = self.repo.get_location_by_id(self.db, location_id, user.id)
        if not location:
            raise HTTPException(status_code=404, detail="Location not found")
        return location

    def create_location(self, data: LocationCreate, user: User) -> Location:
        location = self.repo.create_location(self.db, user.id, **data.model_dump())
        logger.info(f"✅ Location {location.id} saved for user {user.id}")
        return location

    def update_location(self, location_id: int, data: LocationUpdate, user: User) -> Location:
        location = self.get_location(location_id, user)
        return self.repo.update_location(self.db, location, **data.model_dump(exclude_unset=True))

    def delete_location(self, location_id: int, user: User) -> dict:
        location = self.get_location(location_id, user)
        self.repo.delete_location(self.db, location)
        return {"message": "Location deleted"}
