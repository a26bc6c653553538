"""Activity template schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ..values.schemas import ValueResponse


class ActivityCreate(BaseModel):
    """Schema for creating an activity template"""

    name: str
    description: Optional[str] = None
    valueIds: list[int] = []

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Activity name is required")
        return v.strip()


class ActivityUpdate(BaseModel):
    """Schema for updating an activity template; valueIds replaces the links"""

    name: Optional[str] = None
    description: Optional[str] = None
    valueIds: Optional[list[int]] = None


class ActivityResponse(BaseModel):
    """Schema for activity template response"""

    id: int
    name: str
    description: Optional[str] = None
    values: list[ValueResponse] = []
    instanceCount: int = 0
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
