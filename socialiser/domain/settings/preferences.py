"""
Layered resolution of the preferences that ground the assistant.

A user's own preferences are the first layer. The admin-managed AI settings
(system prompt, model, search flag) are applied globally as the second
layer, and configuration defaults close each chain.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ...config import GEMINI_DEFAULT_MODEL

UNKNOWN_LOCATION = "Unknown"

ALLOWED_MODELS = (
    "gemini-1.5-flash",
    "gemini-1.5-flash-latest",
    "gemini-1.5-pro",
    "gemini-2.0-flash",
    "gemini-2.5-flash",
    "gemini-2.5-flash-lite",
    "gemini-2.5-pro",
)


@dataclass(frozen=True)
class ResolvedPreferences:
    default_location: str
    social_location: str
    system_prompt: str
    preferred_model: str
    enable_google_search: bool


def normalize_model(identifier: Optional[str]) -> str:
    """Map a model identifier onto the allow-list, falling back to the default"""
    if isinstance(identifier, str):
        candidate = identifier.strip().lower()
        if candidate.startswith("models/"):
            candidate = candidate[len("models/") :]
        if candidate in ALLOWED_MODELS:
            return candidate
    return GEMINI_DEFAULT_MODEL


def _first_set(*values) -> Optional[Any]:
    for value in values:
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def resolve_preferences(
    user_prefs: Optional[Mapping[str, Any]],
    global_prefs: Optional[Mapping[str, Any]] = None,
) -> ResolvedPreferences:
    user_prefs = user_prefs or {}
    global_prefs = global_prefs or {}

    default_location = _first_set(user_prefs.get("defaultLocation"), UNKNOWN_LOCATION)
    social_location = _first_set(user_prefs.get("socialLocation"), default_location)
    # Blank strings are skipped, so "" cannot be the last candidate
    system_prompt = (
        _first_set(user_prefs.get("systemPrompt"), global_prefs.get("systemPrompt")) or ""
    )
    preferred_model = _first_set(
        user_prefs.get("preferredModel"), global_prefs.get("preferredModel")
    )
    search_flag = _first_set(
        user_prefs.get("enableGoogleSearch"), global_prefs.get("enableGoogleSearch"), True
    )

    return ResolvedPreferences(
        default_location=default_location.strip(),
        social_location=social_location.strip(),
        system_prompt=system_prompt.strip(),
        preferred_model=normalize_model(preferred_model),
        # Only an explicit false turns search off
        enable_google_search=search_flag is not False,
    )
