"""Saved location schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

DEFAULT_LOCATION_TYPE = "Venue"


class LocationCreate(BaseModel):
    name: str
    type: Optional[str] = DEFAULT_LOCATION_TYPE
    address: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Location name is required")
        return v.strip()

    @field_validator("type")
    @classmethod
    def default_type(cls, v):
        if v is None or not v.strip():
            return DEFAULT_LOCATION_TYPE
        return v.strip()


class LocationUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None


class LocationResponse(BaseModel):
    id: int
    name: str
    type: str
    address: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    createdAt: Optional[datetime] = None
