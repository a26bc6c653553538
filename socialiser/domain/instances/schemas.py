"""Event instance schemas - Pydantic models for validation"""

import datetime as dt
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from ..friends.schemas import FriendResponse

# Friend lists arrive as "invitedFriends" from the scheduler and "friendIds" from edit forms
FRIEND_IDS_ALIAS = AliasChoices("invitedFriends", "friendIds")

# Request key -> ActivityInstance column for the free-form descriptive fields
DESCRIPTIVE_COLUMNS = {
    "location": "location",
    "notes": "notes",
    "customTitle": "custom_title",
    "venue": "venue",
    "address": "address",
    "city": "city",
    "state": "state",
    "zipCode": "zip_code",
    "detailedDescription": "detailed_description",
    "requirements": "requirements",
    "contactInfo": "contact_info",
    "venueType": "venue_type",
    "priceInfo": "price_info",
    "capacity": "capacity",
    "eventUrl": "event_url",
}


class InstanceDetails(BaseModel):
    """Descriptive fields shared by create and update"""

    location: Optional[str] = None
    notes: Optional[str] = None
    customTitle: Optional[str] = None
    venue: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipCode: Optional[str] = None
    detailedDescription: Optional[str] = None
    requirements: Optional[str] = None
    contactInfo: Optional[str] = None
    venueType: Optional[str] = None
    priceInfo: Optional[str] = None
    capacity: Optional[int] = None
    eventUrl: Optional[str] = None


class InstanceCreate(InstanceDetails):
    """
    Schema for scheduling an event.

    activityId and datetime are optional here so the service can answer
    with its own 400 messages instead of a generic validation error.
    """

    activityId: Optional[int] = None
    datetime: Optional[str] = None
    endDate: Optional[str] = None
    isAllDay: bool = False
    allowExternalGuests: bool = True
    invitedFriends: list[int] = Field(default_factory=list, validation_alias=FRIEND_IDS_ALIAS)


class InstanceUpdate(InstanceDetails):
    """Partial update; only keys present in the body are applied"""

    datetime: Optional[str] = None
    endDate: Optional[str] = None
    isAllDay: Optional[bool] = None
    allowExternalGuests: Optional[bool] = None
    friendIds: Optional[list[int]] = Field(default=None, validation_alias=FRIEND_IDS_ALIAS)


class ParticipationResponse(BaseModel):
    id: int
    friendId: int
    status: str
    inviteToken: str
    respondedAt: Optional[dt.datetime] = None
    friend: Optional[FriendResponse] = None


class PublicRSVPResponse(BaseModel):
    id: int
    friendId: Optional[int] = None
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    createdAt: Optional[dt.datetime] = None


class InstanceActivity(BaseModel):
    id: int
    name: str
    description: Optional[str] = None


class InstanceResponse(InstanceDetails):
    """Schema for event instance response"""

    id: int
    activityId: int
    datetime: dt.datetime
    endDate: Optional[dt.datetime] = None
    isAllDay: bool = False
    allowExternalGuests: bool = True
    activity: Optional[InstanceActivity] = None
    participations: list[ParticipationResponse] = []
    publicRsvps: list[PublicRSVPResponse] = []
    createdAt: Optional[dt.datetime] = None
    updatedAt: Optional[dt.datetime] = None
