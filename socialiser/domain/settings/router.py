"""Settings router - FastAPI endpoints for preferences"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import SettingsUpdate
from .service import SettingsService

router = APIRouter(prefix="/settings", tags=["Settings"])


def get_settings_service(db: Session = Depends(get_db)) -> SettingsService:
    """Dependency injection for SettingsService"""
    return SettingsService(db)


@router.get("")
async def get_settings(
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Get the current user's preferences (AI settings only for admins)"""
    return service.get_settings(current_user)


@router.post("")
async def update_settings(
    data: SettingsUpdate,
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Update preferences; AI settings and the API key are admin only"""
    return service.update_settings(current_user, data)
