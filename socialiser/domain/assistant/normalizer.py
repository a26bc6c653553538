"""
Normalization of raw model output into the chat reply contract.

Parsing is two-tier: strict JSON on the fence-stripped text first, then a
salvage pass that parses only the outermost {...} span. The salvage pass
recovers replies where the model wrapped its JSON in chatter; it does not
try to repair malformed JSON.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from .schemas import SuggestedEvent

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*$")
_OBJECT_SPAN = re.compile(r"\{.*\}", re.DOTALL)


class ResponseParseError(Exception):
    """Model output could not be parsed, even after salvage"""


@dataclass(frozen=True)
class Strict:
    value: dict


@dataclass(frozen=True)
class Salvaged:
    value: dict


@dataclass(frozen=True)
class Failed:
    reason: str
    error: Optional[Exception] = None


ParseResult = Union[Strict, Salvaged, Failed]


def strip_code_fences(text: Optional[str]) -> str:
    """Remove a Markdown code fence (with or without a json tag) around the text"""
    if not text:
        return ""
    cleaned = _LEADING_FENCE.sub("", text, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _load_object(text: str) -> dict:
    value = json.loads(text)
    if not isinstance(value, dict):
        raise ValueError(f"Expected a JSON object, got {type(value).__name__}")
    return value


def salvage_parse(text: Optional[str]) -> Optional[dict]:
    """Parse the outermost {...} span of the text, or None when there is none"""
    if not text:
        return None
    match = _OBJECT_SPAN.search(text)
    if not match:
        return None
    try:
        return _load_object(match.group(0))
    except ValueError:
        # json.JSONDecodeError is a ValueError
        return None


def parse_model_output(text: Optional[str]) -> ParseResult:
    cleaned = strip_code_fences(text)
    try:
        return Strict(_load_object(cleaned))
    except ValueError as e:
        strict_error = e

    salvaged = salvage_parse(cleaned)
    if salvaged is not None:
        return Salvaged(salvaged)
    return Failed(reason=str(strict_error), error=strict_error)


def _shape_events(raw_events: Any) -> list[SuggestedEvent]:
    if not isinstance(raw_events, list):
        return []
    return [SuggestedEvent.model_validate(event) for event in raw_events if isinstance(event, dict)]


def normalize_response(text: Optional[str]) -> dict:
    """
    Shape model output into {"message": str, "suggestedEvents": [SuggestedEvent]}.

    Raises:
        ResponseParseError: If neither the strict nor the salvage parse succeeds
    """
    result = parse_model_output(text)

    if isinstance(result, Failed):
        logger.warning(f"⚠️ Model output could not be parsed: {result.reason}")
        raise ResponseParseError(result.reason) from result.error

    if isinstance(result, Salvaged):
        logger.info("Model output parsed through the salvage path")
    else:
        logger.debug("Model output parsed strictly")

    message = result.value.get("message")
    return {
        "message": message if isinstance(message, str) else ("" if message is None else str(message)),
        "suggestedEvents": _shape_events(result.value.get("suggestedEvents")),
    }
