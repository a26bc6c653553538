from datetime import datetime

import pytest

from socialiser.models import ActivityInstance, Participation, PublicRSVP


@pytest.fixture
def instance(db, user, activity, friends):
    instance = ActivityInstance(
        user_id=user.id,
        activity_id=activity.id,
        datetime=datetime(2025, 6, 14, 9, 0),
        custom_title="Flatirons loop",
        location="Chautauqua Park",
        capacity=2,
    )
    db.add(instance)
    db.flush()
    db.add_all(
        Participation(user_id=user.id, instance_id=instance.id, friend_id=f.id, status="INVITED")
        for f in friends[:2]
    )
    db.commit()
    db.refresh(instance)
    return instance


@pytest.fixture
def invite_token(instance, friends):
    return next(p.invite_token for p in instance.participations if p.friend_id == friends[0].id)


def test_get_invite(public_client, invite_token):
    response = public_client.get(f"/invites/{invite_token}")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "INVITED"
    assert body["friend"]["name"] == "Alice"
    assert body["event"]["customTitle"] == "Flatirons loop"
    assert body["event"]["hostName"] == "Host"
    assert body["event"]["activity"]["name"] == "Hiking"
    assert sorted(g["name"] for g in body["guests"]) == ["Alice", "Bob"]


def test_unknown_invite(public_client):
    response = public_client.get("/invites/not-a-token")

    assert response.status_code == 404
    assert response.json()["detail"] == "Invite not found"


def test_respond_to_invite(public_client, db, invite_token):
    response = public_client.post(f"/invites/{invite_token}/rsvp", json={"status": "GOING"})

    assert response.status_code == 200
    assert response.json()["status"] == "GOING"
    assert response.json()["respondedAt"] is not None

    participation = db.query(Participation).filter(Participation.invite_token == invite_token).one()
    assert participation.status == "GOING"


def test_respond_rejects_unknown_status(public_client, invite_token):
    response = public_client.post(f"/invites/{invite_token}/rsvp", json={"status": "INVITED"})

    assert response.status_code == 422


def test_public_event_hides_guest_contacts(public_client, instance):
    response = public_client.get(f"/public-events/{instance.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["participantCount"] == 2
    assert sorted(body["participantNames"]) == ["Alice", "Bob"]
    assert "email" not in str(body)


def test_public_event_not_found(public_client):
    response = public_client.get("/public-events/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Event not found"


def test_public_rsvp(public_client, db, instance):
    response = public_client.post(
        f"/public-events/{instance.id}/rsvp",
        json={"name": "Dana", "email": "Dana@Example.com", "message": "See you there"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "RSVP submitted successfully"

    rsvp = db.get(PublicRSVP, body["id"])
    assert rsvp.email == "dana@example.com"

    listed = public_client.get(f"/public-events/{instance.id}/rsvp").json()
    assert [r["name"] for r in listed] == ["Dana"]


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Dana"},
        {"email": "dana@example.com"},
        {"name": "  ", "phone": "555-0100"},
    ],
)
def test_public_rsvp_requires_name_and_contact(public_client, instance, payload):
    response = public_client.post(f"/public-events/{instance.id}/rsvp", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Name and either email or phone are required"


def test_public_rsvp_invalid_email(public_client, instance):
    response = public_client.post(
        f"/public-events/{instance.id}/rsvp", json={"name": "Dana", "email": "not-an-email"}
    )

    assert response.status_code == 422


def test_public_rsvp_closed_to_external_guests(public_client, db, instance):
    instance.allow_external_guests = False
    db.commit()

    response = public_client.post(
        f"/public-events/{instance.id}/rsvp", json={"name": "Dana", "phone": "555-0100"}
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "This event is not open to external guests"


def test_public_rsvp_at_capacity(public_client, db, instance):
    db.add_all(
        PublicRSVP(instance_id=instance.id, name=name, phone="555-0100") for name in ("Eve", "Finn")
    )
    db.commit()

    response = public_client.post(
        f"/public-events/{instance.id}/rsvp", json={"name": "Dana", "phone": "555-0100"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Event is at capacity"
