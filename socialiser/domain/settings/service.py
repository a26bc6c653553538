"""Settings service - Business logic for user and global AI preferences"""

import logging
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from sqlalchemy.orm import Session

from ...config import GOOGLE_API_KEY, SETTINGS_ENCRYPTION_KEY
from ...models import User
from .preferences import ResolvedPreferences, normalize_model, resolve_preferences
from .repository import SettingsRepository
from .schemas import SettingsUpdate

logger = logging.getLogger(__name__)

# Initialize encryption
fernet = Fernet(SETTINGS_ENCRYPTION_KEY) if SETTINGS_ENCRYPTION_KEY else None

MASKED_API_KEY = "••••••••"
ADMIN_ONLY_KEYS = ("systemPrompt", "preferredModel", "enableGoogleSearch")


def encrypt_api_key(api_key: str) -> str:
    """Encrypt the Google API key for storage"""
    if not fernet:
        logger.warning("SETTINGS_ENCRYPTION_KEY not set, storing API key in plain text")
        return api_key
    return fernet.encrypt(api_key.encode()).decode()


def decrypt_api_key(encrypted: Optional[str]) -> Optional[str]:
    """Decrypt a stored Google API key"""
    if not fernet or not encrypted:
        return encrypted or None
    try:
        return fernet.decrypt(encrypted.encode()).decode()
    except InvalidToken:
        # Saved before an encryption key was configured
        return encrypted


class SettingsService:
    """Service layer for preferences"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SettingsRepository()

    def _global_preferences(self) -> dict:
        admin = self.repo.get_global_admin(self.db)
        if not admin:
            return {}
        prefs = admin.preferences or {}
        return {key: prefs[key] for key in ADMIN_ONLY_KEYS if key in prefs}

    def resolve_for_user(self, user: User) -> ResolvedPreferences:
        """Effective preferences for the assistant: user, then global admin, then defaults"""
        return resolve_preferences(user.preferences or {}, self._global_preferences())

    def get_api_key(self) -> Optional[str]:
        """Admin-saved key first, environment key second"""
        return decrypt_api_key(self.repo.get_stored_api_key(self.db)) or GOOGLE_API_KEY

    def get_settings(self, user: User) -> dict:
        response = {
            **(user.preferences or {}),
            "name": user.name or "",
            "isAdmin": bool(user.is_admin),
            "hasApiKey": bool(user.google_api_key),
        }
        if not user.is_admin:
            for key in ADMIN_ONLY_KEYS:
                response.pop(key, None)
        return response

    def update_settings(self, user: User, data: SettingsUpdate) -> dict:
        """Merge the provided fields into the stored preferences"""
        provided = data.model_dump(exclude_unset=True)
        preferences = dict(user.preferences or {})

        for key in ("defaultLocation", "socialLocation"):
            if key in provided:
                preferences[key] = provided[key]

        api_key = None
        clear_api_key = False
        if user.is_admin:
            if "systemPrompt" in provided:
                preferences["systemPrompt"] = provided["systemPrompt"]
            if "preferredModel" in provided:
                preferences["preferredModel"] = normalize_model(provided["preferredModel"])
            if "enableGoogleSearch" in provided:
                preferences["enableGoogleSearch"] = provided["enableGoogleSearch"]

            new_key = provided.get("googleApiKey")
            if new_key == "":
                clear_api_key = True
            elif new_key and new_key != MASKED_API_KEY:
                api_key = encrypt_api_key(new_key)
        elif any(key in provided for key in (*ADMIN_ONLY_KEYS, "googleApiKey")):
            logger.warning(f"⚠️ User {user.id} tried to change admin-only AI settings; ignored")

        user = self.repo.save_settings(
            self.db,
            user,
            preferences,
            name=provided.get("name") or None,
            google_api_key=api_key,
            clear_api_key=clear_api_key,
        )
        logger.info(f"✅ Settings updated for user {user.id}")
        return self.get_settings(user)
