"""Invite router - public endpoints reached from shared links"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    InviteResponse,
    InviteRSVP,
    PublicEventResponse,
    PublicRSVPCreate,
    PublicRSVPSummary,
)
from .service import InviteService, serialize_invite, serialize_public_event

router = APIRouter(tags=["Invites"])


def get_invite_service(db: Session = Depends(get_db)) -> InviteService:
    return InviteService(db)


@router.get("/invites/{token}", response_model=InviteResponse)
async def get_invite(token: str, service: InviteService = Depends(get_invite_service)):
    """Show an invite to the friend holding its token"""
    return serialize_invite(service.get_invite(token))


@router.post("/invites/{token}/rsvp", response_model=InviteResponse)
async def respond_to_invite(
    token: str,
    data: InviteRSVP,
    service: InviteService = Depends(get_invite_service),
):
    return serialize_invite(service.respond(token, data))


@router.get("/public-events/{instance_id}", response_model=PublicEventResponse)
async def get_public_event(instance_id: int, service: InviteService = Depends(get_invite_service)):
    return serialize_public_event(service.get_public_event(instance_id))


@router.get("/public-events/{instance_id}/rsvp", response_model=list[PublicRSVPSummary])
async def get_public_rsvps(instance_id: int, service: InviteService = Depends(get_invite_service)):
    return service.get_public_rsvps(instance_id)


@router.post("/public-events/{instance_id}/rsvp")
async def create_public_rsvp(
    instance_id: int,
    data: PublicRSVPCreate,
    service: InviteService = Depends(get_invite_service),
):
    """External guest RSVP; needs a name plus an email or phone"""
    return service.create_public_rsvp(instance_id, data)
