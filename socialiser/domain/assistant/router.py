"""Assistant router - AI chat, suggestion hand-off and discovery endpoints"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...config import AI_CHAT_RATE_LIMIT_PER_MINUTE
from ...database import get_db
from ...models import User
from ...rate_limiter import create_rate_limiter
from .fallback import GeminiGenerator
from .mapper import form_fields_to_draft
from .schemas import (
    ChatRequest,
    ChatResponse,
    DiscoveryRequest,
    DiscoveryResponse,
    HandoffRequest,
    HandoffResponse,
    InstanceDraft,
)
from .service import AssistantService, GeneratorFactory

router = APIRouter(tags=["Assistant"])

# Model quota is shared by every user
rate_limit_ai = create_rate_limiter(
    limit=AI_CHAT_RATE_LIMIT_PER_MINUTE, window_seconds=60, key_prefix="ai_chat"
)


def get_generator_factory() -> GeneratorFactory:
    return GeminiGenerator


def get_assistant_service(
    db: Session = Depends(get_db),
    generator_factory: GeneratorFactory = Depends(get_generator_factory),
) -> AssistantService:
    """Dependency injection for AssistantService"""
    return AssistantService(db, generator_factory)


@router.post("/ai-chat", response_model=ChatResponse)
async def ai_chat(
    data: ChatRequest,
    current_user: User = Depends(get_current_user),
    _: None = Depends(rate_limit_ai),
    service: AssistantService = Depends(get_assistant_service),
):
    """Suggest events for a free-text request; degrades to an apology instead of failing"""
    return await service.chat(current_user, data)


@router.post("/ai-chat/handoff", response_model=HandoffResponse)
async def ai_chat_handoff(
    data: HandoffRequest,
    current_user: User = Depends(get_current_user),
):
    return AssistantService.handoff(data)


@router.get("/schedule/draft", response_model=InstanceDraft)
async def schedule_draft(
    request: Request,
    current_user: User = Depends(get_current_user),
):
    """Rebuild the pre-filled scheduling form from hand-off query parameters"""
    return form_fields_to_draft(dict(request.query_params))


@router.post("/ai-discovery", response_model=DiscoveryResponse)
async def ai_discovery(
    data: DiscoveryRequest,
    current_user: User = Depends(get_current_user),
    _: None = Depends(rate_limit_ai),
    service: AssistantService = Depends(get_assistant_service),
):
    return await service.discover(current_user, data)
