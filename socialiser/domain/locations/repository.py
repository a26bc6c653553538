"""Saved location repository"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Location


class LocationRepository:
    @staticmethod
    def get_locations(db: Session, user_id: int) -> list[Location]:
        """Newest first"""
        return (
            db.query(Location)
            .filter(Location.user_id == user_id)
            .order_by(Location.created_at.desc(), Location.id.desc())
            .all()
        )

    @staticmethod
    def get_location_by_id(db: Session, location_id: int, user_id: int) -> Optional[Location]:
        return (
            db.query(Location)
            .filter(Location.id == location_id, Location.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_location(db: Session, user_id: int, **location_data) -> Location:
        location = Location(user_id=user_id, **location_data)
        db.add(location)
        db.commit()
        db.refresh(location)
        return location

    @staticmethod
    def update_location(db: Session, location: Location, **updates) -> Location:
        for key, value in updates.items():
            if value is not None and hasattr(location, key):
                setattr(location, key, value)

        db.commit()
        db.refresh(location)
        return location

    @staticmethod
    def delete_location(db: Session, location: Location) -> None:
        db.delete(location)
        db.commit()
