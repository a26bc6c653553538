import json
from urllib.parse import parse_qsl

import pytest

from socialiser.domain.assistant.context import ContextUnavailableError, build_context
from socialiser.models import Location

SUGGESTION = {
    "name": "Jazz at Dazzle",
    "description": "Live quartet",
    "venue": "Dazzle",
    "address": "1512 Curtis St, Denver, CO",
    "date": "2025-06-14",
    "time": "20:00",
    "duration": "2 hours",
    "venueType": "indoor",
    "price": "$25",
    "url": "https://dazzlejazz.com",
    "reasoning": "You like live music",
}


def model_reply(message="Here are some ideas", events=(SUGGESTION,)):
    return "```json\n" + json.dumps({"message": message, "suggestedEvents": list(events)}) + "\n```"


def test_chat_returns_suggestions(client, fake_generator, activity, value):
    fake_generator.responses = [model_reply()]

    response = client.post("/ai-chat", json={"message": "find me a jazz concert this weekend"})

    assert response.status_code == 200
    body = response.json()["response"]
    assert body["message"] == "Here are some ideas"
    assert body["searchResults"] == []
    assert body["suggestedEvents"] == [SUGGESTION]

    # Default model is a flash tier with search enabled
    assert fake_generator.calls == [("gemini-2.5-flash", True)]
    prompt = fake_generator.prompts[0]
    assert "OPERATIVE LOCATION: Denver, CO" in prompt
    assert "Hiking: Trails and views" in prompt
    assert "Adventure: Trying new things" in prompt


def test_chat_uses_location_override_and_history(client, fake_generator):
    fake_generator.responses = [model_reply()]

    client.post(
        "/ai-chat",
        json={
            "message": "go for a hike",
            "location": {"address": "Moab, UT"},
            "conversationHistory": [
                {"role": "user", "content": "I like red rocks", "timestamp": "2025-06-13T10:00:00Z"},
                {"role": "assistant", "content": "Noted!"},
            ],
        },
    )

    prompt = fake_generator.prompts[0]
    assert "OPERATIVE LOCATION: Moab, UT" in prompt
    assert "user: I like red rocks" in prompt
    assert "assistant: Noted!" in prompt


def test_chat_includes_saved_locations(client, db, user, fake_generator):
    db.add(Location(user_id=user.id, name="Red Rocks", type="Amphitheatre", address="Morrison, CO"))
    db.commit()
    fake_generator.responses = [model_reply()]

    client.post("/ai-chat", json={"message": "concert"})

    assert "Red Rocks (Amphitheatre), Morrison, CO" in fake_generator.prompts[0]


def test_chat_blank_message(client, fake_generator):
    response = client.post("/ai-chat", json={"message": "   "})

    assert response.status_code == 400
    assert response.json()["detail"] == "Message is required"
    assert fake_generator.calls == []


def test_chat_degrades_when_every_model_fails(client, fake_generator):
    fake_generator.responses = [RuntimeError("500 backend error")] * 4

    response = client.post("/ai-chat", json={"message": "dinner"})

    assert response.status_code == 200
    body = response.json()["response"]
    assert body["suggestedEvents"] == []
    assert "trouble" in body["message"]
    assert "Settings" not in body["message"]
    assert len(fake_generator.calls) == 4


def test_chat_quota_failure_suggests_switching_models(client, fake_generator):
    fake_generator.responses = [RuntimeError("429 RESOURCE_EXHAUSTED: quota exceeded")] * 4

    body = client.post("/ai-chat", json={"message": "dinner"}).json()["response"]

    assert body["suggestedEvents"] == []
    assert "switch to a different model in Settings" in body["message"]


def test_chat_unparseable_output_degrades(client, fake_generator):
    fake_generator.responses = ["I'm not sure what to suggest."]

    response = client.post("/ai-chat", json={"message": "dinner"})

    assert response.status_code == 200
    assert response.json()["response"]["suggestedEvents"] == []


def test_chat_salvages_prose_wrapped_json(client, fake_generator):
    fake_generator.responses = ['Sure! {"message":"ok","suggestedEvents":[]} Hope that helps.']

    body = client.post("/ai-chat", json={"message": "dinner"}).json()["response"]

    assert body == {"message": "ok", "searchResults": [], "suggestedEvents": []}


def test_chat_respects_admin_model_and_search_settings(client, db, user, fake_generator):
    user.is_admin = True
    user.preferences = {**user.preferences, "preferredModel": "gemini-2.5-pro", "enableGoogleSearch": False}
    db.commit()
    fake_generator.responses = [RuntimeError("down"), model_reply()]

    client.post("/ai-chat", json={"message": "dinner"})

    assert fake_generator.calls == [("gemini-2.5-pro", False), ("gemini-1.5-pro", False)]


def test_chat_without_api_key_degrades(client, fake_generator, monkeypatch):
    monkeypatch.setattr("socialiser.domain.settings.service.GOOGLE_API_KEY", None)

    body = client.post("/ai-chat", json={"message": "dinner"}).json()["response"]

    assert "not configured" in body["message"]
    assert fake_generator.calls == []


def test_build_context_fails_closed(db):
    with pytest.raises(ContextUnavailableError):
        build_context(db, 12345)


def test_build_context_snapshot(db, user, activity, value):
    context = build_context(db, user.id)

    assert context.user_id == user.id
    assert [a.name for a in context.activities] == ["Hiking"]
    assert [v.name for v in context.values] == ["Adventure"]
    assert context.preferences.default_location == "Boulder, CO"
    assert context.api_key == "test-google-api-key"


def test_handoff_builds_schedule_url(client):
    response = client.post(
        "/ai-chat/handoff",
        json={"event": SUGGESTION, "templateId": 5, "templateName": "Live music"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["url"] == f"/schedule?{body['query']}"
    assert dict(parse_qsl(body["query"])) == body["fields"]
    assert body["fields"]["eventName"] == "Jazz at Dazzle"
    assert body["fields"]["templateId"] == "5"
    assert "reasoning" not in body["fields"]


def test_schedule_draft_is_replayable(client):
    query = client.post("/ai-chat/handoff", json={"event": SUGGESTION, "templateId": 5}).json()["query"]

    first = client.get(f"/schedule/draft?{query}")
    second = client.get(f"/schedule/draft?{query}")

    assert first.status_code == 200
    assert first.json() == second.json()
    draft = first.json()
    assert draft["activityId"] == 5
    assert draft["customTitle"] == "Jazz at Dazzle"
    assert draft["datetime"] == "2025-06-14T20:00"
    assert draft["location"] == "Dazzle, 1512 Curtis St, Denver, CO"
    assert draft["aiSuggestion"] is True


def test_draft_can_be_scheduled(client, activity):
    query = client.post(
        "/ai-chat/handoff", json={"event": SUGGESTION, "templateId": activity.id}
    ).json()["query"]
    draft = client.get(f"/schedule/draft?{query}").json()

    payload = {key: value for key, value in draft.items() if value is not None}
    response = client.post("/instances", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["customTitle"] == "Jazz at Dazzle"
    assert body["eventUrl"] == "https://dazzlejazz.com"
    assert body["priceInfo"] == "$25"
    assert body["venueType"] == "indoor"


def test_discovery_returns_options(client, fake_generator):
    fake_generator.responses = [
        json.dumps(
            {
                "options": [
                    {
                        "name": "Catan night at Board Game Republic",
                        "suggestedLocation": "Denver, CO",
                        "suggestedTime": "2025-06-20 at 19:00",
                        "url": "https://example.com",
                    },
                    "junk",
                ]
            }
        )
    ]

    response = client.post("/ai-discovery", json={"activityName": "Board games"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["activityType"] == "Board games"
    assert len(body["options"]) == 1
    assert body["options"][0]["name"] == "Catan night at Board Game Republic"


def test_discovery_requires_activity_name(client):
    response = client.post("/ai-discovery", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "Activity name is required"


def test_discovery_failure_is_bad_gateway(client, fake_generator):
    fake_generator.responses = ['{"unexpected": true}']

    response = client.post("/ai-discovery", json={"activityName": "Board games"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to generate activity suggestions"


def test_chat_without_any_system_prompt(client, fake_generator):
    fake_generator.responses = [model_reply()]

    response = client.post("/ai-chat", json={"message": "find me a jazz concert"})

    assert response.status_code == 200
    assert "ADDITIONAL INSTRUCTIONS" not in fake_generator.prompts[0]
