"""
Prompt construction for the event assistant.

Everything in this module is pure: the same date, context and request
always render the same prompt, and nothing here touches the network or
the database.
"""

import re
from datetime import date
from typing import Optional, Sequence

from ...config import AI_CHAT_HISTORY_TURNS
from .context import AssistantContext

NATURE = "nature"
TRAVEL = "travel"
URBAN = "urban"

NATURE_KEYWORDS = (
    "hike",
    "hiking",
    "trail",
    "trails",
    "camping",
    "campsite",
    "nature",
    "park",
    "lake",
    "beach",
    "picnic",
    "outdoor",
    "outdoors",
    "walk",
    "kayak",
    "kayaking",
    "fishing",
    "cycling",
    "bike ride",
    "garden",
    "mountain",
    "forest",
    "birdwatching",
)

TRAVEL_KEYWORDS = (
    "trip",
    "road trip",
    "day trip",
    "travel",
    "traveling",
    "travelling",
    "getaway",
    "vacation",
    "holiday",
    "flight",
    "abroad",
    "tour",
)

URBAN_KEYWORDS = (
    "dinner",
    "lunch",
    "brunch",
    "breakfast",
    "drinks",
    "bar",
    "pub",
    "restaurant",
    "cafe",
    "coffee",
    "cocktail",
    "concert",
    "gig",
    "jazz",
    "club",
    "nightlife",
    "karaoke",
    "museum",
    "gallery",
    "exhibition",
    "theatre",
    "theater",
    "cinema",
    "movie",
    "comedy",
    "show",
    "festival",
    "market",
)


def _keyword_pattern(keywords: Sequence[str]) -> re.Pattern:
    alternatives = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)


# Checked in this order; the first category with a hit wins
CATEGORY_PATTERNS = (
    (NATURE, _keyword_pattern(NATURE_KEYWORDS)),
    (TRAVEL, _keyword_pattern(TRAVEL_KEYWORDS)),
    (URBAN, _keyword_pattern(URBAN_KEYWORDS)),
)

OUTPUT_SCHEMA = """{
  "message": "A short, friendly reply to the user",
  "suggestedEvents": [
    {
      "name": "Specific event name",
      "description": "What happens and why it is worth going",
      "venue": "Venue name",
      "address": "Full street address",
      "date": "YYYY-MM-DD",
      "time": "HH:MM (24h)",
      "duration": "Duration estimate, e.g. 2 hours",
      "venueType": "indoor | outdoor | online | hybrid",
      "price": "Price or Free",
      "url": "Event page, venue website or a Google Search URL for the venue",
      "reasoning": "Why this fits the user's activities and values"
    }
  ]
}"""

DISCOVERY_SCHEMA = """{
  "options": [
    {
      "name": "Specific activity name",
      "description": "Brief description",
      "suggestedLocation": "Specific location suggestion",
      "suggestedTime": "YYYY-MM-DD at HH:MM (e.g. 2025-12-31 at 19:00)",
      "estimatedDuration": "Duration estimate",
      "reasoning": "Why this fits",
      "url": "URL to event or Google Search"
    }
  ]
}"""


def classify_request(text: Optional[str]) -> Optional[str]:
    """Keyword category of a free-text request: nature, travel, urban or None"""
    if not text:
        return None
    for category, pattern in CATEGORY_PATTERNS:
        if pattern.search(text):
            return category
    return None


def resolve_operative_location(
    text: Optional[str],
    home: str,
    social: str,
    override: Optional[str] = None,
) -> tuple[str, str]:
    """
    Decide which saved location a request is about.

    Returns:
        Tuple of (location, reason)
    """
    if override and override.strip():
        return override.strip(), "the user named this location for this request"

    category = classify_request(text)
    if category == NATURE:
        return home, "local or nature activity, so the home location applies"
    if category == TRAVEL:
        return home, "travel request, the home location is the point of departure"
    if category == URBAN:
        return social, "urban or social activity, so the social hub applies"
    return social, "no specific category detected, defaulting to the social hub"


def _bullet_list(lines: Sequence[str]) -> str:
    return "\n".join(f"- {line}" for line in lines) if lines else "- None yet"


def _describe(name: str, description: str) -> str:
    return f"{name}: {description}" if description else name


def build_prompt(
    today: date,
    context: AssistantContext,
    user_request: str,
    location_override: Optional[str] = None,
    history: Sequence[tuple[str, str]] = (),
    history_limit: int = AI_CHAT_HISTORY_TURNS,
) -> str:
    """Render the full instruction string for one chat request"""
    prefs = context.preferences
    location, reason = resolve_operative_location(
        user_request, prefs.default_location, prefs.social_location, location_override
    )

    activities = [_describe(a.name, a.description) for a in context.activities]
    values = [_describe(v.name, v.description) for v in context.values]
    saved_locations = [
        f"{loc.name} ({loc.type})"
        + (f", {loc.address}" if loc.address else "")
        + (f": {loc.description}" if loc.description else "")
        for loc in context.locations
    ]

    sections = [
        "You are a social event planning assistant. You suggest real, specific events "
        "and venues the user can go to with friends.",
        f"Today is {today.strftime('%A')}, {today.isoformat()}.",
        "USER'S ACTIVITY TEMPLATES:\n" + _bullet_list(activities),
        "USER'S CORE VALUES:\n" + _bullet_list(values),
        "USER'S SAVED LOCATIONS:\n" + _bullet_list(saved_locations),
        "CONFIGURED LOCATIONS:\n"
        f"- Home / origin: {prefs.default_location}\n"
        f"- Social hub: {prefs.social_location}\n"
        "Location rule: a location named in the request always wins. Otherwise local or "
        "nature activities (hikes, parks, picnics) use the home location, travel requests "
        "use the home location as the point of departure, and urban or social activities "
        "(dinner, drinks, concerts) use the social hub.",
        f"OPERATIVE LOCATION: {location} ({reason})",
    ]

    if prefs.system_prompt:
        sections.append("ADDITIONAL INSTRUCTIONS:\n" + prefs.system_prompt)

    recent = list(history)[-history_limit:] if history_limit > 0 else []
    if recent:
        sections.append(
            "CONVERSATION SO FAR:\n" + "\n".join(f"{role}: {content}" for role, content in recent)
        )

    sections.extend(
        [
            f"USER REQUEST: {user_request}",
            "RULES:\n"
            "1. Suggest 3 to 4 distinct events, dated on or shortly after today "
            f"({today.isoformat()}). Never suggest dates in the past.\n"
            "2. Every suggestion must have a non-empty url: the event page, the venue "
            "website, or a Google Search URL for the venue.\n"
            "3. Only suggest venues you have verified exist at the given address. Do not "
            "invent venues or events.\n"
            f"4. Keep suggestions near the operative location ({location}) unless the "
            "request says otherwise.",
            "OUTPUT FORMAT:\n"
            "Respond with raw JSON only, with exactly two top-level keys, \"message\" and "
            "\"suggestedEvents\". No prose, no Markdown outside the JSON. Use this shape:\n"
            + OUTPUT_SCHEMA,
        ]
    )
    return "\n\n".join(sections)


def build_discovery_prompt(
    today: date,
    activity_name: str,
    location: Optional[str] = None,
    preferences: Optional[str] = None,
    date_range: Optional[tuple[str, str]] = None,
) -> str:
    """Prompt asking for concrete options for a generic activity type"""
    lines = [
        "You are a helpful activity planning assistant.",
        f"Current Date: {today.strftime('%A')}, {today.isoformat()}",
        "",
        f'Given a generic activity type: "{activity_name}", suggest 4-5 specific, realistic '
        "options that people could actually do.",
        "",
        "Context:",
    ]
    if location:
        lines.append(f"Location: {location}")
    if preferences:
        lines.append(f"Preferences: {preferences}")
    if date_range:
        lines.append(f"Date Range: {date_range[0]} to {date_range[1]}")
    lines.extend(
        [
            "",
            "Please suggest specific, actionable activity options.",
            "Respond with raw JSON only. Use this exact format:",
            DISCOVERY_SCHEMA,
        ]
    )
    return "\n".join(lines)
