from datetime import datetime

from socialiser.models import ActivityInstance, CoreValue


def test_value_lifecycle(client):
    created = client.post("/values", json={"name": "  Connection ", "description": "Time with people"})
    assert created.status_code == 201
    assert created.json()["name"] == "Connection"

    duplicate = client.post("/values", json={"name": "Connection"})
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "A value with this name already exists"

    value_id = created.json()["id"]
    updated = client.put(f"/values/{value_id}", json={"description": "Friends and family"})
    assert updated.json()["description"] == "Friends and family"

    assert client.delete(f"/values/{value_id}").status_code == 200
    assert client.get("/values").json() == []


def test_value_name_required(client):
    response = client.post("/values", json={"name": "   "})

    assert response.status_code == 422


def test_activity_with_values(client, value):
    response = client.post(
        "/activities", json={"name": "Climbing", "valueIds": [value.id, value.id]}
    )

    assert response.status_code == 201
    body = response.json()
    assert [v["name"] for v in body["values"]] == ["Adventure"]
    assert body["instanceCount"] == 0


def test_activity_rejects_foreign_values(client, db, other_user):
    foreign = CoreValue(user_id=other_user.id, name="Secret")
    db.add(foreign)
    db.commit()

    response = client.post("/activities", json={"name": "Climbing", "valueIds": [foreign.id]})

    assert response.status_code == 403
    assert response.json()["detail"] == "Some values do not belong to the authenticated user"


def test_activity_update_replaces_value_links(client, db, user, activity, value):
    other = CoreValue(user_id=user.id, name="Health")
    db.add(other)
    db.commit()

    client.put(f"/activities/{activity.id}", json={"valueIds": [value.id]})
    response = client.put(f"/activities/{activity.id}", json={"valueIds": [other.id, value.id]})

    assert response.status_code == 200
    assert sorted(v["name"] for v in response.json()["values"]) == ["Adventure", "Health"]
    assert response.json()["name"] == "Hiking"


def test_activity_counts_instances(client, db, user, activity):
    db.add(ActivityInstance(user_id=user.id, activity_id=activity.id, datetime=datetime(2025, 6, 1)))
    db.commit()

    response = client.get(f"/activities/{activity.id}")

    assert response.json()["instanceCount"] == 1


def test_activity_of_another_user_is_hidden(client, db, other_user):
    from socialiser.models import Activity

    hidden = Activity(user_id=other_user.id, name="Private")
    db.add(hidden)
    db.commit()

    response = client.get(f"/activities/{hidden.id}")

    assert response.status_code == 404
    assert response.json()["detail"] == "Activity not found"


def test_friend_defaults_phone(client):
    response = client.post("/friends", json={"name": "Dana", "phone": "  "})

    assert response.status_code == 201
    assert response.json()["phone"] == "000"


def test_friend_email_is_normalized(client):
    response = client.post("/friends", json={"name": "Dana", "email": "Dana@Example.COM"})

    assert response.json()["email"] == "dana@example.com"


def test_friend_invalid_email(client):
    response = client.post("/friends", json={"name": "Dana", "email": "dana-at-example"})

    assert response.status_code == 422


def test_friend_update_keeps_unset_fields(client, friends):
    alice = friends[0]
    client.put(f"/friends/{alice.id}", json={"phone": "555-0100"})

    response = client.put(f"/friends/{alice.id}", json={"group": "Climbing crew"})

    assert response.json()["phone"] == "555-0100"
    assert response.json()["group"] == "Climbing crew"


def test_friend_update_blank_name(client, friends):
    response = client.put(f"/friends/{friends[0].id}", json={"name": " "})

    assert response.status_code == 400
    assert response.json()["detail"] == "Friend name is required"


def test_location_defaults_type(client):
    response = client.post("/locations", json={"name": "Red Rocks"})

    assert response.status_code == 201
    assert response.json()["type"] == "Venue"


def test_locations_newest_first(client):
    client.post("/locations", json={"name": "First"})
    client.post("/locations", json={"name": "Second"})

    names = [loc["name"] for loc in client.get("/locations").json()]

    assert names == ["Second", "First"]


def test_location_not_found(client):
    response = client.delete("/locations/404")

    assert response.status_code == 404
    assert response.json()["detail"] == "Location not found"


def test_friend_groups_are_distinct_and_sorted(client, db, user, other_user):
    from socialiser.models import Friend

    db.add_all(
        [
            Friend(user_id=user.id, name="Ann", group="Climbing"),
            Friend(user_id=user.id, name="Ben", group="Book club"),
            Friend(user_id=user.id, name="Cy", group="Climbing"),
            Friend(user_id=user.id, name="Di", group="  "),
            Friend(user_id=user.id, name="Ed"),
            Friend(user_id=other_user.id, name="Flo", group="Secret society"),
        ]
    )
    db.commit()

    response = client.get("/friends/groups")

    assert response.status_code == 200
    assert response.json() == {"groups": ["Book club", "Climbing"]}


def test_friend_groups_empty(client):
    assert client.get("/friends/groups").json() == {"groups": []}
