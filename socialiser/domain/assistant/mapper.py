"""
Suggestion hand-off between the chat assistant and the scheduling form.

A chosen suggestion travels as plain query parameters, so reloading the
schedule URL rebuilds the same pre-filled form.
"""

from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode

from ...shared.validators import clean_param
from .schemas import InstanceDraft, SuggestedEvent

# Query parameter -> SuggestedEvent attribute; reasoning has no form field
FORM_FIELDS = (
    ("eventName", "name"),
    ("venue", "venue"),
    ("address", "address"),
    ("date", "date"),
    ("time", "time"),
    ("duration", "duration"),
    ("price", "price"),
    ("description", "description"),
    ("venueType", "venueType"),
    ("url", "url"),
)

SCHEDULE_PATH = "/schedule"


def suggestion_to_form_fields(
    event: Union[SuggestedEvent, Mapping[str, Any]],
    template_id: Optional[Union[int, str]] = None,
    template_name: Optional[str] = None,
) -> dict[str, str]:
    """Flatten one suggestion into form fields, omitting whatever is empty"""
    if not isinstance(event, SuggestedEvent):
        event = SuggestedEvent.model_validate(event)

    fields = {"aiSuggestion": "true"}
    for param, attr in FORM_FIELDS:
        value = getattr(event, attr)
        if value:
            fields[param] = value

    if template_id is not None and str(template_id).strip():
        fields["templateId"] = str(template_id).strip()
    if template_name and template_name.strip():
        fields["templateName"] = template_name.strip()
    return fields


def build_handoff_query(
    event: Union[SuggestedEvent, Mapping[str, Any]],
    template_id: Optional[Union[int, str]] = None,
    template_name: Optional[str] = None,
) -> str:
    return urlencode(suggestion_to_form_fields(event, template_id, template_name))


def _activity_id(raw: Optional[str]) -> Optional[int]:
    if raw and raw.isdigit():
        return int(raw)
    return None


def form_fields_to_draft(params: Mapping[str, Any]) -> InstanceDraft:
    """Seed the scheduling form from hand-off query parameters"""
    values = {key: clean_param(params.get(key)) for key in params}

    date, time = values.get("date"), values.get("time")
    venue, address = values.get("venue"), values.get("address")

    if venue and address:
        location = f"{venue}, {address}"
    else:
        location = venue or address

    return InstanceDraft(
        activityId=_activity_id(values.get("templateId")),
        templateName=values.get("templateName"),
        customTitle=values.get("eventName"),
        venue=venue,
        address=address,
        location=location,
        datetime=f"{date}T{time}" if date and time else None,
        duration=values.get("duration"),
        detailedDescription=values.get("description"),
        priceInfo=values.get("price"),
        venueType=values.get("venueType"),
        eventUrl=values.get("url"),
        aiSuggestion=values.get("aiSuggestion") == "true",
    )
