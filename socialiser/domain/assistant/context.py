"""
Context aggregation for the assistant.

Collects the user's saved activities, values, locations and resolved
preferences into one read-only snapshot. Nothing here writes.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from ..activities.repository import ActivityRepository
from ..locations.repository import LocationRepository
from ..settings.preferences import ResolvedPreferences
from ..settings.repository import SettingsRepository
from ..settings.service import SettingsService
from ..values.repository import ValueRepository

logger = logging.getLogger(__name__)


class ContextUnavailableError(Exception):
    """The requesting user could not be loaded; no model call may follow"""


@dataclass(frozen=True)
class ActivitySummary:
    name: str
    description: str = ""


@dataclass(frozen=True)
class ValueSummary:
    name: str
    description: str = ""


@dataclass(frozen=True)
class LocationSummary:
    name: str
    type: str = "Venue"
    address: str = ""
    description: str = ""


@dataclass(frozen=True)
class AssistantContext:
    user_id: int
    preferences: ResolvedPreferences
    activities: tuple[ActivitySummary, ...] = ()
    values: tuple[ValueSummary, ...] = ()
    locations: tuple[LocationSummary, ...] = ()
    api_key: Optional[str] = field(default=None, repr=False)


def build_context(db: Session, user_id: Optional[int]) -> AssistantContext:
    """
    Snapshot everything that grounds a suggestion for this user.

    Raises:
        ContextUnavailableError: If the user row cannot be loaded
    """
    user = SettingsRepository.get_user_by_id(db, user_id) if user_id is not None else None
    if user is None:
        logger.warning(f"⚠️ Assistant context requested for unknown user {user_id}")
        raise ContextUnavailableError(f"User {user_id} could not be loaded")

    settings = SettingsService(db)

    activities = tuple(
        ActivitySummary(name=a.name, description=a.description or "")
        for a in ActivityRepository.get_activities(db, user.id)
    )
    values = tuple(
        ValueSummary(name=v.name, description=v.description or "")
        for v in ValueRepository.get_values(db, user.id)
    )
    locations = tuple(
        LocationSummary(
            name=loc.name,
            type=loc.type or "Venue",
            address=loc.address or "",
            description=loc.description or "",
        )
        for loc in LocationRepository.get_locations(db, user.id)
    )

    context = AssistantContext(
        user_id=user.id,
        preferences=settings.resolve_for_user(user),
        activities=activities,
        values=values,
        locations=locations,
        api_key=settings.get_api_key(),
    )
    logger.debug(
        f"Assistant context for user {user.id}: {len(activities)} activities, "
        f"{len(values)} values, {len(locations)} locations"
    )
    return context
