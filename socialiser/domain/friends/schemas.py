"""Friend schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_email

DEFAULT_PHONE = "000"


class FriendCreate(BaseModel):
    """Schema for adding a friend"""

    name: str
    phone: Optional[str] = DEFAULT_PHONE
    email: Optional[str] = None
    group: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Friend name is required")
        return v.strip()

    @field_validator("phone")
    @classmethod
    def default_phone(cls, v):
        if v is None or not v.strip():
            return DEFAULT_PHONE
        return v.strip()

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class FriendUpdate(BaseModel):
    """Schema for updating a friend"""

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    group: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class FriendResponse(BaseModel):
    """Schema for friend response"""

    id: int
    name: str
    phone: str
    email: Optional[str] = None
    group: Optional[str] = None
    createdAt: Optional[datetime] = None
