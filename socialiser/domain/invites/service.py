"""Invite service - RSVP tracking for friends and external guests"""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import ActivityInstance, Participation
from ..instances.schemas import InstanceActivity
from .repository import InviteRepository
from .schemas import (
    InviteEvent,
    InviteFriend,
    InviteGuest,
    InviteResponse,
    InviteRSVP,
    PublicEventResponse,
    PublicRSVPCreate,
    PublicRSVPSummary,
)

logger = logging.getLogger(__name__)


def _activity_summary(instance: ActivityInstance) -> InstanceActivity:
    return InstanceActivity(
        id=instance.activity.id,
        name=instance.activity.name,
        description=instance.activity.description,
    )


def serialize_invite(participation: Participation) -> InviteResponse:
    instance = participation.instance
    return InviteResponse(
        status=participation.status,
        respondedAt=participation.responded_at,
        friend=InviteFriend(id=participation.friend.id, name=participation.friend.name),
        event=InviteEvent(
            id=instance.id,
            datetime=instance.datetime,
            endDate=instance.end_date,
            isAllDay=instance.is_all_day,
            location=instance.location,
            customTitle=instance.custom_title,
            venue=instance.venue,
            address=instance.address,
            detailedDescription=instance.detailed_description,
            priceInfo=instance.price_info,
            eventUrl=instance.event_url,
            activity=_activity_summary(instance),
            hostName=instance.user.name if instance.user else None,
        ),
        guests=[
            InviteGuest(name=p.friend.name, status=p.status)
            for p in instance.participations
            if p.friend
        ],
    )


def serialize_public_event(instance: ActivityInstance) -> PublicEventResponse:
    return PublicEventResponse(
        id=instance.id,
        datetime=instance.datetime,
        location=instance.location,
        customTitle=instance.custom_title,
        venue=instance.venue,
        address=instance.address,
        city=instance.city,
        state=instance.state,
        zipCode=instance.zip_code,
        detailedDescription=instance.detailed_description,
        requirements=instance.requirements,
        contactInfo=instance.contact_info,
        venueType=instance.venue_type,
        priceInfo=instance.price_info,
        capacity=instance.capacity,
        allowExternalGuests=instance.allow_external_guests,
        activity=_activity_summary(instance),
        participantCount=len(instance.participations),
        participantNames=[p.friend.name for p in instance.participations if p.friend],
    )


class InviteService:
    """Public, token-addressed operations; no authenticated user involved"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InviteRepository()

    def get_invite(self, token: str) -> Participation:
        participation = self.repo.get_participation_by_token(self.db, token)
        if not participation:
            raise HTTPException(status_code=404, detail="Invite not found")
        return participation

    def respond(self, token: str, data: InviteRSVP) -> Participation:
        participation = self.get_invite(token)
        participation.status = data.status
        participation.responded_at = datetime.now(timezone.utc).replace(tzinfo=None)
        self.db.commit()
        self.db.refresh(participation)
        logger.info(
            f"✅ Friend {participation.friend_id} answered {data.status} "
            f"for instance {participation.instance_id}"
        )
        return participation

    def get_public_event(self, instance_id: int) -> ActivityInstance:
        instance = self.repo.get_instance(self.db, instance_id)
        if not instance:
            raise HTTPException(status_code=404, detail="Event not found")
        return instance

    def get_public_rsvps(self, instance_id: int) -> list[PublicRSVPSummary]:
        self.get_public_event(instance_id)
        return [
            PublicRSVPSummary(id=r.id, name=r.name, message=r.message, createdAt=r.created_at)
            for r in self.repo.get_public_rsvps(self.db, instance_id)
        ]

    def create_public_rsvp(self, instance_id: int, data: PublicRSVPCreate) -> dict:
        name = (data.name or "").strip()
        phone = (data.phone or "").strip() or None
        if not name or not (data.email or phone):
            raise HTTPException(
                status_code=400, detail="Name and either email or phone are required"
            )

        instance = self.get_public_event(instance_id)
        if not instance.allow_external_guests:
            raise HTTPException(status_code=403, detail="This event is not open to external guests")

        if instance.capacity and self.repo.count_public_rsvps(self.db, instance.id) >= instance.capacity:
            raise HTTPException(status_code=400, detail="Event is at capacity")

        message = (data.message or "").strip() or None
        rsvp = self.repo.create_public_rsvp(
            self.db, instance.id, name=name, email=data.email, phone=phone, message=message
        )
        logger.info(f"✅ Public RSVP {rsvp.id} recorded for instance {instance.id}")
        return {"success": True, "message": "RSVP submitted successfully", "id": rsvp.id}
