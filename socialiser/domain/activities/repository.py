"""Activity repository - Database operations for activity templates"""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ...models import Activity, ActivityValue


class ActivityRepository:
    """Repository for activity template database operations"""

    @staticmethod
    def get_activities(db: Session, user_id: int) -> list[Activity]:
        """Get all activity templates for a user, newest first"""
        return (
            db.query(Activity)
            .options(selectinload(Activity.values).selectinload(ActivityValue.value))
            .filter(Activity.user_id == user_id)
            .order_by(Activity.created_at.desc(), Activity.id.desc())
            .all()
        )

    @staticmethod
    def get_activity_by_id(db: Session, activity_id: int, user_id: int) -> Optional[Activity]:
        return (
            db.query(Activity)
            .filter(Activity.id == activity_id, Activity.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_activity(db: Session, user_id: int, value_ids: list[int], **activity_data) -> Activity:
        activity = Activity(user_id=user_id, **activity_data)
        activity.values = [ActivityValue(value_id=value_id) for value_id in value_ids]
        db.add(activity)
        db.commit()
        db.refresh(activity)
        return activity

    @staticmethod
    def update_activity(
        db: Session, activity: Activity, value_ids: Optional[list[int]] = None, **updates
    ) -> Activity:
        for key, value in updates.items():
            if value is not None and hasattr(activity, key):
                setattr(activity, key, value)

        if value_ids is not None:
            # Old links must be gone before re-inserting, (activity_id, value_id) is unique
            activity.values.clear()
            db.flush()
            activity.values.extend(ActivityValue(value_id=value_id) for value_id in value_ids)

        db.commit()
        db.refresh(activity)
        return activity

    @staticmethod
    def delete_activity(db: Session, activity: Activity) -> None:
        db.delete(activity)
        db.commit()
