"""Settings repository - Database operations for user preferences"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import User


class SettingsRepository:
    """Repository for preference storage"""

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_global_admin(db: Session) -> Optional[User]:
        """The admin whose AI settings apply to everyone (oldest admin wins)"""
        return db.query(User).filter(User.is_admin.is_(True)).order_by(User.id.asc()).first()

    @staticmethod
    def get_stored_api_key(db: Session) -> Optional[str]:
        """Encrypted Google API key saved by any admin"""
        admin = (
            db.query(User)
            .filter(User.is_admin.is_(True), User.google_api_key.isnot(None))
            .order_by(User.id.asc())
            .first()
        )
        return admin.google_api_key if admin else None

    @staticmethod
    def save_settings(
        db: Session,
        user: User,
        preferences: dict,
        name: Optional[str] = None,
        google_api_key: Optional[str] = None,
        clear_api_key: bool = False,
    ) -> User:
        """Persist preferences (replaced as a whole so the JSON column is flagged dirty)"""
        user.preferences = dict(preferences)
        if name is not None:
            user.name = name
        if clear_api_key:
            user.google_api_key = None
        elif google_api_key is not None:
            user.google_api_key = google_api_key

        db.commit()
        db.refresh(user)
        return user
