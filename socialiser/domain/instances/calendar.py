"""Google Calendar "add event" links for scheduled instances"""

import datetime as dt
from typing import Optional
from urllib.parse import urlencode

from ...models import ActivityInstance
from ...shared.validators import parse_datetime

GOOGLE_CALENDAR_RENDER_URL = "https://calendar.google.com/calendar/render"
DEFAULT_EVENT_DURATION = dt.timedelta(hours=2)


class InvalidEventDatetimeError(ValueError):
    """The instance has no usable start or end datetime"""


def _event_location(instance: ActivityInstance) -> str:
    if not instance.venue:
        return instance.location or ""
    location = instance.venue
    if instance.address:
        location += f", {instance.address}"
    if instance.city:
        location += f", {instance.city}"
    if instance.state:
        location += f", {instance.state}"
    if instance.zip_code:
        location += f" {instance.zip_code}"
    return location


def _event_details(instance: ActivityInstance) -> str:
    activity_description = instance.activity.description if instance.activity else None
    parts = [instance.detailed_description or activity_description or ""]
    if instance.requirements:
        parts.append(f"\n\nWhat to bring: {instance.requirements}")
    if instance.contact_info:
        parts.append(f"\n\nContact: {instance.contact_info}")
    if instance.price_info:
        parts.append(f"\n\nPrice: {instance.price_info}")
    if instance.capacity:
        parts.append(f"\n\nCapacity: {instance.capacity} people")
    return "".join(parts)


def calendar_dates(
    start: dt.datetime, end: Optional[dt.datetime] = None, is_all_day: bool = False
) -> str:
    """
    The `dates` parameter: UTC timestamps for timed events, or dates for
    all-day events where the end date is exclusive.
    """
    end = end or start + DEFAULT_EVENT_DURATION
    if is_all_day:
        last_day = end.date() + dt.timedelta(days=1)
        return f"{start.strftime('%Y%m%d')}/{last_day.strftime('%Y%m%d')}"
    return f"{start.strftime('%Y%m%dT%H%M%SZ')}/{end.strftime('%Y%m%dT%H%M%SZ')}"


def google_calendar_url(instance: ActivityInstance) -> str:
    """
    Build a calendar.google.com link that pre-fills a new event.

    Stored datetimes are naive UTC, so they are formatted as-is with a Z suffix.

    Raises:
        InvalidEventDatetimeError: If the start or end datetime cannot be read
    """
    start = parse_datetime(instance.datetime)
    if start is None:
        raise InvalidEventDatetimeError("Invalid event datetime")

    end = None
    if instance.end_date is not None:
        end = parse_datetime(instance.end_date)
        if end is None:
            raise InvalidEventDatetimeError("Invalid end date format")

    title = instance.custom_title or (instance.activity.name if instance.activity else "")
    params = {
        "action": "TEMPLATE",
        "text": title,
        "dates": calendar_dates(start, end, bool(instance.is_all_day)),
        "details": _event_details(instance),
        "location": _event_location(instance),
    }
    return f"{GOOGLE_CALENDAR_RENDER_URL}?{urlencode(params)}"
