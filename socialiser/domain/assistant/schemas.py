"""Assistant schemas - chat, hand-off and discovery payloads"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value)


class SuggestedEvent(BaseModel):
    """One event proposed by the model; never persisted on its own"""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    description: str = ""
    venue: str = ""
    address: str = ""
    date: str = ""
    time: str = ""
    duration: str = ""
    venueType: str = ""
    price: str = ""
    url: str = ""
    reasoning: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v):
        # Models sometimes answer with numbers (price: 25) or nulls
        return _as_text(v)


class ChatLocation(BaseModel):
    address: Optional[str] = None


class ChatTurn(BaseModel):
    role: str = "user"
    content: str = ""
    timestamp: Optional[Union[str, float, int]] = None


class ChatRequest(BaseModel):
    """Chat request; message is validated by the service for a 400 answer"""

    message: Optional[str] = None
    location: Optional[ChatLocation] = None
    conversationHistory: list[ChatTurn] = []


class ChatReply(BaseModel):
    message: str
    # Kept for clients that still read it; always empty
    searchResults: list = []
    suggestedEvents: list[SuggestedEvent] = []


class ChatResponse(BaseModel):
    response: ChatReply


class HandoffRequest(BaseModel):
    event: SuggestedEvent
    templateId: Optional[Union[int, str]] = None
    templateName: Optional[str] = None


class HandoffResponse(BaseModel):
    fields: dict[str, str]
    query: str
    url: str


class InstanceDraft(BaseModel):
    """Pre-filled scheduling form; keys match the instance create payload"""

    activityId: Optional[int] = None
    templateName: Optional[str] = None
    customTitle: Optional[str] = None
    venue: Optional[str] = None
    address: Optional[str] = None
    location: Optional[str] = None
    datetime: Optional[str] = None
    duration: Optional[str] = None
    detailedDescription: Optional[str] = None
    priceInfo: Optional[str] = None
    venueType: Optional[str] = None
    eventUrl: Optional[str] = None
    aiSuggestion: bool = False


class DateRange(BaseModel):
    start: str
    end: str


class DiscoveryRequest(BaseModel):
    activityName: Optional[str] = None
    location: Optional[str] = None
    preferences: Optional[str] = None
    dateRange: Optional[DateRange] = None


class DiscoveryOption(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    description: str = ""
    suggestedLocation: str = ""
    suggestedTime: str = ""
    estimatedDuration: str = ""
    reasoning: str = ""
    url: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _as_text(v)


class DiscoveryResponse(BaseModel):
    success: bool
    options: list[DiscoveryOption]
    activityType: str
