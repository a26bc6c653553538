"""Assistant service - chat suggestions and activity discovery"""

import logging
from datetime import date
from typing import Callable, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User
from .context import AssistantContext, ContextUnavailableError, build_context
from .fallback import FallbackChain, Generator, ModelChainExhaustedError, is_quota_error
from .mapper import SCHEDULE_PATH, build_handoff_query, suggestion_to_form_fields
from .normalizer import Failed, ResponseParseError, normalize_response, parse_model_output
from .prompts import build_discovery_prompt, build_prompt, resolve_operative_location
from .schemas import (
    ChatReply,
    ChatRequest,
    ChatResponse,
    DiscoveryOption,
    DiscoveryRequest,
    DiscoveryResponse,
    HandoffRequest,
    HandoffResponse,
)

logger = logging.getLogger(__name__)

DEGRADED_MESSAGE = (
    "I'm sorry, I'm having trouble coming up with suggestions right now. "
    "Please try again in a moment."
)
QUOTA_HINT = (
    " The AI model has hit its usage limit. You can switch to a different model "
    "in Settings and try again."
)
NOT_CONFIGURED_MESSAGE = (
    "The AI assistant is not configured yet. An admin needs to add a Google API key in Settings."
)
DISCOVERY_FAILED = "Failed to generate activity suggestions"

# api_key -> Generator
GeneratorFactory = Callable[[str], Generator]


def degraded_reply(message: str = DEGRADED_MESSAGE) -> ChatResponse:
    return ChatResponse(response=ChatReply(message=message, suggestedEvents=[]))


class AssistantService:
    """Runs context -> prompt -> fallback chain -> normalizer for one request"""

    def __init__(self, db: Session, generator_factory: GeneratorFactory):
        self.db = db
        self.generator_factory = generator_factory

    def _load_context(self, user: User) -> AssistantContext:
        try:
            return build_context(self.db, user.id if user else None)
        except ContextUnavailableError as e:
            raise HTTPException(status_code=401, detail="Unauthorized") from e

    def _chain(self, context: AssistantContext) -> FallbackChain:
        return FallbackChain(self.generator_factory(context.api_key))

    async def chat(
        self, user: User, data: ChatRequest, today: Optional[date] = None
    ) -> ChatResponse:
        """
        Answer a chat message with suggested events.

        Upstream failures never surface as errors here: an exhausted model
        chain or unparseable output becomes an apologetic reply with no
        suggestions.
        """
        message = (data.message or "").strip()
        if not message:
            raise HTTPException(status_code=400, detail="Message is required")

        context = self._load_context(user)
        override = data.location.address if data.location else None
        history = [(turn.role, turn.content) for turn in data.conversationHistory]
        prompt = build_prompt(today or date.today(), context, message, override, history)

        if not context.api_key:
            logger.error("❌ No Google API key configured for the assistant")
            return degraded_reply(NOT_CONFIGURED_MESSAGE)

        prefs = context.preferences
        logger.info(
            f"🤖 AI chat for user {context.user_id}: model={prefs.preferred_model}, "
            f"search={prefs.enable_google_search}"
        )

        try:
            result = await self._chain(context).run(
                prompt, prefs.preferred_model, prefs.enable_google_search
            )
            reply = normalize_response(result.text)
        except ModelChainExhaustedError as e:
            logger.error(f"❌ AI chat failed for user {context.user_id}: {e}")
            hint = QUOTA_HINT if is_quota_error(e) else ""
            return degraded_reply(DEGRADED_MESSAGE + hint)
        except ResponseParseError as e:
            logger.error(f"❌ AI chat returned unparseable output for user {context.user_id}: {e}")
            return degraded_reply()

        logger.info(
            f"✅ AI chat answered by {result.attempt.model} with "
            f"{len(reply['suggestedEvents'])} suggestion(s)"
        )
        return ChatResponse(
            response=ChatReply(message=reply["message"], suggestedEvents=reply["suggestedEvents"])
        )

    @staticmethod
    def handoff(data: HandoffRequest) -> HandoffResponse:
        """Encode a chosen suggestion as the schedule page's query string"""
        fields = suggestion_to_form_fields(data.event, data.templateId, data.templateName)
        query = build_handoff_query(data.event, data.templateId, data.templateName)
        return HandoffResponse(fields=fields, query=query, url=f"{SCHEDULE_PATH}?{query}")

    async def discover(
        self, user: User, data: DiscoveryRequest, today: Optional[date] = None
    ) -> DiscoveryResponse:
        """Concrete options for a generic activity type"""
        activity_name = (data.activityName or "").strip()
        if not activity_name:
            raise HTTPException(status_code=400, detail="Activity name is required")

        context = self._load_context(user)
        prefs = context.preferences
        location = data.location
        if not location or not location.strip():
            location, _ = resolve_operative_location(
                activity_name, prefs.default_location, prefs.social_location
            )

        prompt = build_discovery_prompt(
            today or date.today(),
            activity_name,
            location=location,
            preferences=data.preferences,
            date_range=(data.dateRange.start, data.dateRange.end) if data.dateRange else None,
        )

        if not context.api_key:
            logger.error("❌ No Google API key configured for activity discovery")
            raise HTTPException(status_code=502, detail=DISCOVERY_FAILED)

        try:
            result = await self._chain(context).run(
                prompt, prefs.preferred_model, prefs.enable_google_search
            )
        except ModelChainExhaustedError as e:
            logger.error(f"❌ AI discovery failed for '{activity_name}': {e}")
            raise HTTPException(status_code=502, detail=DISCOVERY_FAILED) from e

        parsed = parse_model_output(result.text)
        options = None if isinstance(parsed, Failed) else parsed.value.get("options")
        if not isinstance(options, list):
            logger.error(f"❌ AI discovery returned an invalid response for '{activity_name}'")
            raise HTTPException(status_code=502, detail=DISCOVERY_FAILED)

        return DiscoveryResponse(
            success=True,
            options=[DiscoveryOption.model_validate(o) for o in options if isinstance(o, dict)],
            activityType=activity_name,
        )
