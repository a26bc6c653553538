from urllib.parse import parse_qsl

from socialiser.domain.assistant.mapper import (
    build_handoff_query,
    form_fields_to_draft,
    suggestion_to_form_fields,
)
from socialiser.domain.assistant.schemas import SuggestedEvent
from socialiser.domain.instances.schemas import InstanceCreate

EVENT = SuggestedEvent(
    name="Jazz at Dazzle",
    description="Live quartet & friends",
    venue="Dazzle",
    address="1512 Curtis St, Denver, CO",
    date="2025-06-14",
    time="20:00",
    duration="2 hours",
    venueType="indoor",
    price="$25",
    url="https://dazzlejazz.com/?show=1",
    reasoning="You like live music",
)


def test_form_fields_carry_every_displayed_field():
    fields = suggestion_to_form_fields(EVENT, template_id=7, template_name="Live music")

    assert fields == {
        "aiSuggestion": "true",
        "eventName": "Jazz at Dazzle",
        "venue": "Dazzle",
        "address": "1512 Curtis St, Denver, CO",
        "date": "2025-06-14",
        "time": "20:00",
        "duration": "2 hours",
        "price": "$25",
        "description": "Live quartet & friends",
        "venueType": "indoor",
        "url": "https://dazzlejazz.com/?show=1",
        "templateId": "7",
        "templateName": "Live music",
    }


def test_reasoning_is_dropped():
    assert "reasoning" not in suggestion_to_form_fields(EVENT)


def test_absent_values_are_omitted():
    fields = suggestion_to_form_fields({"name": "Picnic", "url": ""})

    assert fields == {"aiSuggestion": "true", "eventName": "Picnic"}


def test_handoff_query_round_trip_to_draft():
    query = build_handoff_query(EVENT, template_id=7, template_name="Live music")
    draft = form_fields_to_draft(dict(parse_qsl(query)))

    assert draft.aiSuggestion is True
    assert draft.activityId == 7
    assert draft.templateName == "Live music"
    assert draft.customTitle == EVENT.name
    assert draft.venue == EVENT.venue
    assert draft.address == EVENT.address
    assert draft.location == "Dazzle, 1512 Curtis St, Denver, CO"
    assert draft.datetime == "2025-06-14T20:00"
    assert draft.duration == EVENT.duration
    assert draft.detailedDescription == EVENT.description
    assert draft.priceInfo == EVENT.price
    assert draft.venueType == EVENT.venueType
    assert draft.eventUrl == EVENT.url


def test_draft_feeds_instance_create_payload():
    draft = form_fields_to_draft(suggestion_to_form_fields(EVENT, template_id=3))
    payload = InstanceCreate.model_validate(draft.model_dump(exclude_none=True))

    assert payload.activityId == 3
    assert payload.datetime == "2025-06-14T20:00"
    assert payload.customTitle == EVENT.name
    assert payload.eventUrl == EVENT.url
    assert payload.priceInfo == EVENT.price


def test_draft_sanitizes_placeholder_strings():
    draft = form_fields_to_draft(
        {"eventName": "undefined", "venue": "null", "address": "Main St", "date": "2025-06-14"}
    )

    assert draft.customTitle is None
    assert draft.venue is None
    assert draft.location == "Main St"
    # No time, no composed datetime
    assert draft.datetime is None
    assert draft.aiSuggestion is False


def test_non_numeric_template_id_is_ignored():
    assert form_fields_to_draft({"templateId": "abc"}).activityId is None
