import time
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from bson import ObjectId

from eduspark.application import reports


def _submission(email, when):
    return {"email": email, "date": when}


def test_site_totals(client, store, add_user, add_class):
    add_user("a@example.com")
    add_user("b@example.com")
    for total in (5, 3, 0):
        add_class(total=total)
    add_class(status="pending", total=40)
    assert client.get("/site_stats").json() == {
        "totalUsers": 2,
        "totalClasses": 3,
        "totalEnrollment": 8,
    }


def test_site_totals_without_approved_classes(client, add_class):
    add_class(status="pending", total=7)
    assert client.get("/site_stats").json() == {
        "totalUsers": 0,
        "totalClasses": 0,
        "totalEnrollment": 0,
    }


def test_popular_classes_ordering(client, add_class):
    for title, total in (("low", 0), ("top", 5), ("mid", 3)):
        add_class(title, total=total)
    add_class("hidden", status="pending", total=100)
    response = client.get("/popular_classes")
    assert [c["totalEnrollment"] for c in response.json()] == [5, 3, 0]
    assert "hidden" not in [c["title"] for c in response.json()]


def test_popular_classes_limit_and_ties(store, add_class):
    ids = [add_class(f"class {i}", total=1) for i in range(12)]
    result = reports.popular_classes(store)
    assert len(result) == 10
    assert [str(c["_id"]) for c in result] == ids[:10]


def test_popular_classes_served_from_cache(client, store):
    cached = [{"_id": "abc", "title": "From cache", "totalEnrollment": 1}]
    with patch("eduspark.interfaces.http.routers.reports.get_cache", return_value=cached):
        response = client.get("/popular_classes")
    assert response.json() == cached


def test_day_window_covers_now():
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    start, end = reports.day_window()
    assert start <= now <= end
    assert start.tzinfo is None and end.tzinfo is None


@pytest.fixture
def new_york_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_day_window_on_spring_forward_day(new_york_tz):
    """Midnight was still EST although the afternoon is EDT"""
    start, end = reports.day_window(datetime(2025, 3, 9, 15, 0))
    assert start == datetime(2025, 3, 9, 5, 0)
    assert end == datetime(2025, 3, 10, 3, 59, 59, 999000)


def test_day_window_on_fall_back_day(new_york_tz):
    start, end = reports.day_window(datetime(2025, 11, 2, 15, 0))
    assert start == datetime(2025, 11, 2, 4, 0)
    assert end == datetime(2025, 11, 3, 4, 59, 59, 999000)


def test_per_day_submissions_counts_only_today(client, store, teacher, add_class):
    class_id = add_class()
    start, _ = reports.day_window()
    today = start + timedelta(minutes=1)
    yesterday = start - timedelta(hours=1)
    store.assignments.insert_many([
        {"classId": class_id, "title": "Essay", "total_submitted": 3, "submittedEmails": [
            _submission("a@example.com", today),
            _submission("b@example.com", today),
            _submission("c@example.com", yesterday),
        ]},
        {"classId": class_id, "title": "Quiz", "total_submitted": 1, "submittedEmails": [
            _submission("a@example.com", today),
        ]},
        {"classId": class_id, "title": "Old", "total_submitted": 1, "submittedEmails": [
            _submission("a@example.com", yesterday),
        ]},
        {"classId": str(ObjectId()), "title": "Elsewhere", "total_submitted": 1, "submittedEmails": [
            _submission("a@example.com", today),
        ]},
    ])
    response = client.get(f"/per_day_assignment_submissions/{class_id}", headers=teacher)
    assert response.status_code == 200
    assert response.json() == {"count": 3}


def test_per_day_submissions_empty(store, add_class):
    class_id = add_class()
    store.assignments.insert_one({"classId": class_id, "submittedEmails": [], "total_submitted": 0})
    assert reports.per_day_submissions(store, class_id) == 0


def test_per_day_submissions_requires_teacher(client, student, add_class):
    class_id = add_class()
    assert client.get(f"/per_day_assignment_submissions/{class_id}", headers=student).status_code == 403


def test_total_classes_data(client, store, teacher, add_class):
    class_id = add_class(total=4)
    store.assignments.insert_many([
        {"classId": class_id, "submittedEmails": [], "total_submitted": 2},
        {"classId": class_id, "submittedEmails": [], "total_submitted": 3},
    ])
    response = client.get(f"/total_classes_data/{class_id}", headers=teacher)
    assert response.json() == {"totalEnrollment": 4, "totalAssignments": 2, "totalSubmissions": 5}


def test_total_classes_data_missing_class(client, teacher):
    assert client.get(f"/total_classes_data/{ObjectId()}", headers=teacher).status_code == 404
