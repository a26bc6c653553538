"""Event instance service - validates and writes scheduled events"""

import datetime as dt
import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import ActivityInstance, User
from ...shared.validators import parse_datetime
from ..activities.repository import ActivityRepository
from ..friends.repository import FriendRepository
from ..friends.service import serialize_friend
from .calendar import InvalidEventDatetimeError, google_calendar_url
from .repository import InstanceRepository
from .schemas import (
    DESCRIPTIVE_COLUMNS,
    InstanceActivity,
    InstanceCreate,
    InstanceResponse,
    InstanceUpdate,
    ParticipationResponse,
    PublicRSVPResponse,
)

logger = logging.getLogger(__name__)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _parse_end_date(raw: Optional[str]) -> Optional[dt.datetime]:
    if raw is None or not raw.strip():
        return None
    end = parse_datetime(raw)
    if end is None:
        raise HTTPException(status_code=400, detail="Invalid end date format")
    return end


def check_schedule(start: dt.datetime, end: Optional[dt.datetime], is_all_day: bool) -> None:
    """An all-day event may end on its start date, whatever the clock time"""
    if end is None:
        return
    too_early = end.date() < start.date() if is_all_day else end < start
    if too_early:
        raise HTTPException(status_code=400, detail="End date cannot be before start date")


def serialize_instance(instance: ActivityInstance) -> InstanceResponse:
    return InstanceResponse(
        id=instance.id,
        activityId=instance.activity_id,
        datetime=instance.datetime,
        endDate=instance.end_date,
        isAllDay=instance.is_all_day,
        allowExternalGuests=instance.allow_external_guests,
        **{key: getattr(instance, column) for key, column in DESCRIPTIVE_COLUMNS.items()},
        activity=(
            InstanceActivity(
                id=instance.activity.id,
                name=instance.activity.name,
                description=instance.activity.description,
            )
            if instance.activity
            else None
        ),
        participations=[
            ParticipationResponse(
                id=p.id,
                friendId=p.friend_id,
                status=p.status,
                inviteToken=p.invite_token,
                respondedAt=p.responded_at,
                friend=serialize_friend(p.friend) if p.friend else None,
            )
            for p in instance.participations
        ],
        publicRsvps=[
            PublicRSVPResponse(
                id=r.id,
                friendId=r.friend_id,
                name=r.name,
                email=r.email,
                phone=r.phone,
                message=r.message,
                createdAt=r.created_at,
            )
            for r in instance.public_rsvps
        ],
        createdAt=instance.created_at,
        updatedAt=instance.updated_at,
    )


class InstanceService:
    """Service layer for scheduling events and managing their guest lists"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InstanceRepository()
        self.activities = ActivityRepository()
        self.friends = FriendRepository()

    def _check_friend_ownership(self, friend_ids: list[int], user: User) -> list[int]:
        unique_ids = list(dict.fromkeys(friend_ids))
        if unique_ids and self.friends.count_owned(self.db, unique_ids, user.id) != len(unique_ids):
            logger.warning(f"⚠️ User {user.id} tried to invite friends they do not own: {unique_ids}")
            raise HTTPException(
                status_code=403, detail="Some friends do not belong to the authenticated user"
            )
        return unique_ids

    def get_instances(self, user: User, activity_id: Optional[int] = None) -> list[ActivityInstance]:
        return self.repo.get_instances(self.db, user.id, activity_id)

    def get_instance(self, instance_id: int, user: User) -> ActivityInstance:
        instance = self.repo.get_instance_by_id(self.db, instance_id, user.id)
        if not instance:
            raise HTTPException(status_code=404, detail="Instance not found")
        return instance

    def get_google_calendar_url(self, instance_id: int, user: User) -> dict:
        instance = self.get_instance(instance_id, user)
        try:
            return {"url": google_calendar_url(instance)}
        except InvalidEventDatetimeError as e:
            logger.error(f"❌ Cannot build calendar link for instance {instance.id}: {e}")
            raise HTTPException(
                status_code=500, detail="Failed to generate Google Calendar URL"
            ) from e

    def create_instance(self, data: InstanceCreate, user: User) -> ActivityInstance:
        """
        Validate a scheduling request fully, then write the instance and
        all of its participations in one transaction.
        """
        if not data.activityId or not (data.datetime or "").strip():
            raise HTTPException(status_code=400, detail="Activity ID and datetime are required")

        start = parse_datetime(data.datetime)
        if start is None:
            raise HTTPException(status_code=400, detail="Invalid datetime format")

        end = _parse_end_date(data.endDate)
        check_schedule(start, end, data.isAllDay)

        if not self.activities.get_activity_by_id(self.db, data.activityId, user.id):
            raise HTTPException(status_code=404, detail="Activity not found or access denied")

        friend_ids = self._check_friend_ownership(data.invitedFriends, user)

        details = {
            column: _blank_to_none(getattr(data, key)) for key, column in DESCRIPTIVE_COLUMNS.items()
        }

        try:
            instance = self.repo.create_instance(
                self.db,
                user.id,
                friend_ids,
                activity_id=data.activityId,
                datetime=start,
                end_date=end,
                is_all_day=data.isAllDay,
                allow_external_guests=data.allowExternalGuests,
                **details,
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Error creating instance for user {user.id}: {str(e)}")
            self.db.rollback()
            raise HTTPException(status_code=500, detail="Failed to create instance") from e

        logger.info(
            f"✅ Instance {instance.id} scheduled for activity {data.activityId} "
            f"with {len(friend_ids)} invited friend(s)"
        )
        return instance

    def update_instance(self, instance_id: int, data: InstanceUpdate, user: User) -> ActivityInstance:
        instance = self.get_instance(instance_id, user)
        updates = data.model_dump(exclude_unset=True)
        columns = {}

        start = instance.datetime
        if updates.get("datetime") is not None:
            start = parse_datetime(updates["datetime"])
            if start is None:
                raise HTTPException(status_code=400, detail="Invalid datetime format")
            columns["datetime"] = start

        end = instance.end_date
        if "endDate" in updates:
            end = _parse_end_date(updates["endDate"])
            columns["end_date"] = end

        is_all_day = instance.is_all_day
        if updates.get("isAllDay") is not None:
            is_all_day = updates["isAllDay"]
            columns["is_all_day"] = is_all_day

        if updates.get("allowExternalGuests") is not None:
            columns["allow_external_guests"] = updates["allowExternalGuests"]

        check_schedule(start, end, is_all_day)

        friend_ids = updates.get("friendIds")
        if friend_ids is not None:
            friend_ids = self._check_friend_ownership(friend_ids, user)

        for key, column in DESCRIPTIVE_COLUMNS.items():
            if key in updates:
                columns[column] = _blank_to_none(updates[key])

        try:
            return self.repo.update_instance(self.db, instance, columns, friend_ids)
        except SQLAlchemyError as e:
            logger.error(f"❌ Error updating instance {instance_id}: {str(e)}")
            self.db.rollback()
            raise HTTPException(status_code=500, detail="Failed to update instance") from e

    def delete_instance(self, instance_id: int, user: User) -> dict:
        instance = self.get_instance(instance_id, user)
        self.repo.delete_instance(self.db, instance)
        return {"message": "Instance deleted successfully"}

    def remove_rsvp(
        self,
        instance_id: int,
        user: User,
        friend_id: Optional[int] = None,
        rsvp_id: Optional[int] = None,
    ) -> dict:
        """Reset a friend's answer to INVITED, or drop one public RSVP"""
        if friend_id is None and rsvp_id is None:
            raise HTTPException(status_code=400, detail="Either friendId or rsvpId is required")

        instance = self.repo.get_instance_by_id(self.db, instance_id, user.id)
        if not instance:
            raise HTTPException(status_code=404, detail="Instance not found or unauthorized")

        if friend_id is not None:
            participation = self.repo.get_participation(self.db, instance.id, friend_id)
            if participation:
                participation.status = "INVITED"
                participation.responded_at = None
            self.repo.delete_friend_rsvps(self.db, instance.id, friend_id)
        else:
            rsvp = self.repo.get_public_rsvp(self.db, instance.id, rsvp_id)
            if not rsvp:
                raise HTTPException(status_code=404, detail="RSVP not found")
            self.db.delete(rsvp)

        self.db.commit()
        return {"message": "RSVP removed successfully"}
