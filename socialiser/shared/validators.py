"""Shared validation utilities"""

import re
from datetime import datetime, timezone
from typing import Optional

# Literal strings a browser produces when an unset value is pushed into a URL
_EMPTY_MARKERS = {"", "undefined", "null"}

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


def parse_datetime(value) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime into a naive UTC datetime.

    Accepts a trailing "Z", explicit offsets and bare dates (midnight).

    Returns:
        The parsed datetime, or None when the value is not a real instant
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def clean_param(value) -> Optional[str]:
    """Strip a query/form value, treating "undefined" and "null" as absent"""
    if value is None:
        return None
    text = str(value).strip()
    if text.lower() in _EMPTY_MARKERS:
        return None
    return text


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address, or None for blank input

    Raises:
        ValueError: If email format is invalid
    """
    if email is None or not email.strip():
        return None

    email = email.strip().lower()
    if not re.match(EMAIL_PATTERN, email):
        raise ValueError("Invalid email format")

    return email
