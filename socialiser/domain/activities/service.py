"""Activity service - Business logic for activity templates"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Activity, User
from ..values.repository import ValueRepository
from ..values.service import serialize_value
from .repository import ActivityRepository
from .schemas import ActivityCreate, ActivityResponse, ActivityUpdate

logger = logging.getLogger(__name__)


def serialize_activity(activity: Activity) -> ActivityResponse:
    return ActivityResponse(
        id=activity.id,
        name=activity.name,
        description=activity.description,
        values=[serialize_value(link.value) for link in activity.values if link.value],
        instanceCount=len(activity.instances),
        createdAt=activity.created_at,
        updatedAt=activity.updated_at,
    )


class ActivityService:
    """Service layer for activity template business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ActivityRepository()
        self.values = ValueRepository()

    def _check_value_ownership(self, value_ids: Optional[list[int]], user: User) -> list[int]:
        if not value_ids:
            return []
        unique_ids = list(dict.fromkeys(value_ids))
        if self.values.count_owned(self.db, unique_ids, user.id) != len(unique_ids):
            logger.warning(f"⚠️ User {user.id} referenced values they do not own: {unique_ids}")
            raise HTTPException(
                status_code=403, detail="Some values do not belong to the authenticated user"
            )
        return unique_ids

    def get_activities(self, user: User) -> list[Activity]:
        return self.repo.get_activities(self.db, user.id)

    def get_activity(self, activity_id: int, user: User) -> Activity:
        activity = self.repo.get_activity_by_id(self.db, activity_id, user.id)
        if not activity:
            raise HTTPException(status_code=404, detail="Activity not found")
        return activity

    def create_activity(self, data: ActivityCreate, user: User) -> Activity:
        value_ids = self._check_value_ownership(data.valueIds, user)
        activity = self.repo.create_activity(
            self.db, user.id, value_ids, name=data.name, description=data.description
        )
        logger.info(f"✅ Activity {activity.id} created for user {user.id}")
        return activity

    def update_activity(self, activity_id: int, data: ActivityUpdate, user: User) -> Activity:
        activity = self.get_activity(activity_id, user)
        value_ids = (
            self._check_value_ownership(data.valueIds, user) if data.valueIds is not None else None
        )
        return self.repo.update_activity(
            self.db, activity, value_ids, name=data.name, description=data.description
        )

    def delete_activity(self, activity_id: int, user: User) -> dict:
        activity = self.get_activity(activity_id, user)
        self.repo.delete_activity(self.db, activity)
        return {"message": "Activity deleted"}
