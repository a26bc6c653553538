"""Core value repository - Database operations for core values"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import CoreValue


class ValueRepository:
    """Repository for core value database operations"""

    @staticmethod
    def get_values(db: Session, user_id: int) -> list[CoreValue]:
        """Get all values for a user, alphabetically"""
        return db.query(CoreValue).filter(CoreValue.user_id == user_id).order_by(CoreValue.name.asc()).all()

    @staticmethod
    def get_value_by_id(db: Session, value_id: int, user_id: int) -> Optional[CoreValue]:
        return (
            db.query(CoreValue)
            .filter(CoreValue.id == value_id, CoreValue.user_id == user_id)
            .first()
        )

    @staticmethod
    def get_value_by_name(db: Session, name: str, user_id: int) -> Optional[CoreValue]:
        return (
            db.query(CoreValue)
            .filter(CoreValue.name == name, CoreValue.user_id == user_id)
            .first()
        )

    @staticmethod
    def count_owned(db: Session, value_ids: list[int], user_id: int) -> int:
        """How many of the given value IDs belong to the user"""
        return (
            db.query(CoreValue)
            .filter(CoreValue.id.in_(value_ids), CoreValue.user_id == user_id)
            .count()
        )

    @staticmethod
    def create_value(db: Session, user_id: int, **value_data) -> CoreValue:
        value = CoreValue(user_id=user_id, **value_data)
        db.add(value)
        db.commit()
        db.refresh(value)
        return value

    @staticmethod
    def update_value(db: Session, value: CoreValue, **updates) -> CoreValue:
        for key, new_value in updates.items():
            if new_value is not None and hasattr(value, key):
                setattr(value, key, new_value)

        db.commit()
        db.refresh(value)
        return value

    @staticmethod
    def delete_value(db: Session, value: CoreValue) -> None:
        db.delete(value)
        db.commit()
