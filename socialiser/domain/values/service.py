"""Core value service - Business logic for core values"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import CoreValue, User
from .repository import ValueRepository
from .schemas import ValueCreate, ValueResponse, ValueUpdate

logger = logging.getLogger(__name__)


def serialize_value(value: CoreValue) -> ValueResponse:
    return ValueResponse(
        id=value.id,
        name=value.name,
        description=value.description,
        createdAt=value.created_at,
    )


class ValueService:
    """Service layer for core value business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ValueRepository()

    def get_values(self, user: User) -> list[CoreValue]:
        return self.repo.get_values(self.db, user.id)

    def get_value(self, value_id: int, user: User) -> CoreValue:
        value = self.repo.get_value_by_id(self.db, value_id, user.id)
        if not value:
            raise HTTPException(status_code=404, detail="Value not found")
        return value

    def create_value(self, data: ValueCreate, user: User) -> CoreValue:
        if self.repo.get_value_by_name(self.db, data.name, user.id):
            raise HTTPException(status_code=400, detail="A value with this name already exists")

        value = self.repo.create_value(
            self.db, user.id, name=data.name, description=data.description
        )
        logger.info(f"✅ Core value {value.id} created for user {user.id}")
        return value

    def update_value(self, value_id: int, data: ValueUpdate, user: User) -> CoreValue:
        value = self.get_value(value_id, user)

        if data.name and data.name != value.name:
            if self.repo.get_value_by_name(self.db, data.name, user.id):
                raise HTTPException(status_code=400, detail="A value with this name already exists")

        return self.repo.update_value(self.db, value, name=data.name, description=data.description)

    def delete_value(self, value_id: int, user: User) -> dict:
        value = self.get_value(value_id, user)
        self.repo.delete_value(self.db, value)
        return {"message": "Value deleted"}
