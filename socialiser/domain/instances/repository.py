"""Event instance repository - Database operations for scheduled events"""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ...models import ActivityInstance, Participation, PublicRSVP


class InstanceRepository:
    """Repository for event instance database operations"""

    @staticmethod
    def get_instances(
        db: Session, user_id: int, activity_id: Optional[int] = None
    ) -> list[ActivityInstance]:
        """Get a user's instances in chronological order"""
        query = (
            db.query(ActivityInstance)
            .options(
                selectinload(ActivityInstance.activity),
                selectinload(ActivityInstance.participations).selectinload(Participation.friend),
            )
            .filter(ActivityInstance.user_id == user_id)
        )
        if activity_id is not None:
            query = query.filter(ActivityInstance.activity_id == activity_id)
        return query.order_by(ActivityInstance.datetime.asc(), ActivityInstance.id.asc()).all()

    @staticmethod
    def get_instance_by_id(db: Session, instance_id: int, user_id: int) -> Optional[ActivityInstance]:
        return (
            db.query(ActivityInstance)
            .filter(ActivityInstance.id == instance_id, ActivityInstance.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_instance(
        db: Session, user_id: int, friend_ids: list[int], **instance_data
    ) -> ActivityInstance:
        """Insert the instance and its participations in a single commit"""
        instance = ActivityInstance(user_id=user_id, **instance_data)
        instance.participations = [
            Participation(user_id=user_id, friend_id=friend_id, status="INVITED")
            for friend_id in friend_ids
        ]
        db.add(instance)
        db.commit()
        db.refresh(instance)
        return instance

    @staticmethod
    def update_instance(
        db: Session,
        instance: ActivityInstance,
        columns: dict,
        friend_ids: Optional[list[int]] = None,
    ) -> ActivityInstance:
        """
        Apply column updates and reconcile invited friends by set difference.

        Friends present before and after keep their participation row, so
        their invite token and RSVP status survive the edit.
        """
        for key, value in columns.items():
            setattr(instance, key, value)

        if friend_ids is not None:
            wanted = set(friend_ids)
            existing = {p.friend_id: p for p in instance.participations}

            for friend_id, participation in existing.items():
                if friend_id not in wanted:
                    instance.participations.remove(participation)

            for friend_id in friend_ids:
                if friend_id not in existing:
                    instance.participations.append(
                        Participation(user_id=instance.user_id, friend_id=friend_id, status="INVITED")
                    )

        db.commit()
        db.refresh(instance)
        return instance

    @staticmethod
    def delete_instance(db: Session, instance: ActivityInstance) -> None:
        db.delete(instance)
        db.commit()

    @staticmethod
    def get_participation(db: Session, instance_id: int, friend_id: int) -> Optional[Participation]:
        return (
            db.query(Participation)
            .filter(Participation.instance_id == instance_id, Participation.friend_id == friend_id)
            .first()
        )

    @staticmethod
    def get_public_rsvp(db: Session, instance_id: int, rsvp_id: int) -> Optional[PublicRSVP]:
        return (
            db.query(PublicRSVP)
            .filter(PublicRSVP.id == rsvp_id, PublicRSVP.instance_id == instance_id)
            .first()
        )

    @staticmethod
    def delete_friend_rsvps(db: Session, instance_id: int, friend_id: int) -> int:
        return (
            db.query(PublicRSVP)
            .filter(PublicRSVP.instance_id == instance_id, PublicRSVP.friend_id == friend_id)
            .delete(synchronize_session=False)
        )
