"""Invite repository - token and public event lookups"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import ActivityInstance, Participation, PublicRSVP


class InviteRepository:
    @staticmethod
    def get_participation_by_token(db: Session, token: str) -> Optional[Participation]:
        return db.query(Participation).filter(Participation.invite_token == token).first()

    @staticmethod
    def get_instance(db: Session, instance_id: int) -> Optional[ActivityInstance]:
        return db.query(ActivityInstance).filter(ActivityInstance.id == instance_id).first()

    @staticmethod
    def count_public_rsvps(db: Session, instance_id: int) -> int:
        return db.query(PublicRSVP).filter(PublicRSVP.instance_id == instance_id).count()

    @staticmethod
    def get_public_rsvps(db: Session, instance_id: int) -> list[PublicRSVP]:
        return (
            db.query(PublicRSVP)
            .filter(PublicRSVP.instance_id == instance_id)
            .order_by(PublicRSVP.created_at.desc(), PublicRSVP.id.desc())
            .all()
        )

    @staticmethod
    def create_public_rsvp(db: Session, instance_id: int, **rsvp_data) -> PublicRSVP:
        rsvp = PublicRSVP(instance_id=instance_id, **rsvp_data)
        db.add(rsvp)
        db.commit()
        db.refresh(rsvp)
        return rsvp
