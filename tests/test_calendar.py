from datetime import datetime
from urllib.parse import parse_qs, urlsplit

import pytest

from socialiser.domain.instances.calendar import (
    InvalidEventDatetimeError,
    calendar_dates,
    google_calendar_url,
)
from socialiser.models import Activity, ActivityInstance


def make_instance(**fields):
    activity = Activity(name="Hiking", description="Trails and views")
    fields.setdefault("datetime", datetime(2025, 6, 14, 18, 0))
    return ActivityInstance(activity=activity, **fields)


def query_of(url):
    parts = urlsplit(url)
    assert parts.netloc == "calendar.google.com"
    assert parts.path == "/calendar/render"
    return {key: values[0] for key, values in parse_qs(parts.query).items()}


def test_timed_event_defaults_to_two_hours():
    assert calendar_dates(datetime(2025, 6, 14, 18, 0)) == "20250614T180000Z/20250614T200000Z"


def test_explicit_end_is_used():
    dates = calendar_dates(datetime(2025, 6, 14, 18, 0), datetime(2025, 6, 14, 23, 30))

    assert dates == "20250614T180000Z/20250614T233000Z"


def test_all_day_event_uses_exclusive_end_date():
    start = datetime(2025, 6, 14)

    assert calendar_dates(start, datetime(2025, 6, 15), is_all_day=True) == "20250614/20250616"
    assert calendar_dates(start, is_all_day=True) == "20250614/20250615"


def test_url_fields():
    instance = make_instance(
        custom_title="Flatirons loop",
        venue="Chautauqua Park",
        address="900 Baseline Rd",
        city="Boulder",
        state="CO",
        zip_code="80302",
        requirements="Water",
        price_info="Free",
        capacity=8,
    )

    query = query_of(google_calendar_url(instance))

    assert query["action"] == "TEMPLATE"
    assert query["text"] == "Flatirons loop"
    assert query["dates"] == "20250614T180000Z/20250614T200000Z"
    assert query["location"] == "Chautauqua Park, 900 Baseline Rd, Boulder, CO 80302"
    assert query["details"] == (
        "Trails and views\n\nWhat to bring: Water\n\nPrice: Free\n\nCapacity: 8 people"
    )


def test_falls_back_to_activity_name_and_free_text_location():
    instance = make_instance(location="Somewhere sunny")

    query = query_of(google_calendar_url(instance))

    assert query["text"] == "Hiking"
    assert query["location"] == "Somewhere sunny"


def test_missing_start_is_rejected():
    with pytest.raises(InvalidEventDatetimeError, match="Invalid event datetime"):
        google_calendar_url(make_instance(datetime=None))


def test_unreadable_end_is_rejected():
    with pytest.raises(InvalidEventDatetimeError, match="Invalid end date format"):
        google_calendar_url(make_instance(end_date="soon"))


def test_calendar_link_endpoint(client, db, user, activity):
    instance = ActivityInstance(
        user_id=user.id,
        activity_id=activity.id,
        datetime=datetime(2025, 6, 14, 9, 0),
        is_all_day=True,
    )
    db.add(instance)
    db.commit()

    response = client.get(f"/instances/{instance.id}/google-calendar")

    assert response.status_code == 200
    assert query_of(response.json()["url"])["dates"] == "20250614/20250615"


def test_calendar_link_is_owner_scoped(client, db, other_user):
    activity = Activity(user_id=other_user.id, name="Private")
    db.add(activity)
    db.flush()
    instance = ActivityInstance(
        user_id=other_user.id, activity_id=activity.id, datetime=datetime(2025, 6, 14, 9, 0)
    )
    db.add(instance)
    db.commit()

    response = client.get(f"/instances/{instance.id}/google-calendar")

    assert response.status_code == 404
    assert response.json()["detail"] == "Instance not found"
