"""Core value schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class ValueCreate(BaseModel):
    """Schema for creating a core value"""

    name: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Value name is required")
        return v.strip()


class ValueUpdate(BaseModel):
    """Schema for updating a core value"""

    name: Optional[str] = None
    description: Optional[str] = None


class ValueResponse(BaseModel):
    """Schema for core value response"""

    id: int
    name: str
    description: Optional[str] = None
    createdAt: Optional[datetime] = None
