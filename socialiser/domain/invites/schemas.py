"""Invite and public RSVP schemas"""

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_email
from ..instances.schemas import InstanceActivity


class InviteRSVP(BaseModel):
    """A friend answering their personal invite link"""

    status: Literal["GOING", "MAYBE", "NOT_GOING"]


class PublicRSVPCreate(BaseModel):
    """An external guest answering the public event link"""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class InviteFriend(BaseModel):
    id: int
    name: str


class InviteGuest(BaseModel):
    name: str
    status: str


class InviteEvent(BaseModel):
    id: int
    datetime: dt.datetime
    endDate: Optional[dt.datetime] = None
    isAllDay: bool = False
    location: Optional[str] = None
    customTitle: Optional[str] = None
    venue: Optional[str] = None
    address: Optional[str] = None
    detailedDescription: Optional[str] = None
    priceInfo: Optional[str] = None
    eventUrl: Optional[str] = None
    activity: InstanceActivity
    hostName: Optional[str] = None


class InviteResponse(BaseModel):
    """What the person holding an invite token may see"""

    status: str
    respondedAt: Optional[dt.datetime] = None
    friend: InviteFriend
    event: InviteEvent
    guests: list[InviteGuest] = []


class PublicEventResponse(BaseModel):
    """Public view of an event; contact details of guests are never exposed"""

    id: int
    datetime: dt.datetime
    location: Optional[str] = None
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
    allowExternalGuests: bool = True
    activity: InstanceActivity
    participantCount: int = 0
    participantNames: list[str] = []


class PublicRSVPSummary(BaseModel):
    id: int
    name: str
    message: Optional[str] = None
    createdAt: Optional[dt.datetime] = None
