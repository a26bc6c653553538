"""Settings domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel


class SettingsUpdate(BaseModel):
    """Schema for updating settings; omitted fields keep their stored value"""

    name: Optional[str] = None
    defaultLocation: Optional[str] = None
    socialLocation: Optional[str] = None
    # Admin only - applied globally
    systemPrompt: Optional[str] = None
    preferredModel: Optional[str] = None
    enableGoogleSearch: Optional[bool] = None
    googleApiKey: Optional[str] = None
