from __future__ import annotations

from datetime import datetime, timezone

import pytest

from dink_admin.core.exceptions import UpstreamError, ValidationError
from dink_admin.events.service import EventService


def _form(**overrides):
    form = {
        "title": "Friday Scramble",
        "event_type": "event_scramble",
        "start_time": "2024-05-10T23:00:00+00:00",
        "end_time": "2024-05-11T01:00:00+00:00",
        "max_capacity": 16,
    }
    form.update(overrides)
    return form


def test_create_requires_title_and_type(events_repo):
    with pytest.raises(ValidationError):
        EventService(events_repo).create_event(_form(title=""))


def test_create_rejects_unknown_event_type(events_repo):
    with pytest.raises(ValidationError) as exc:
        EventService(events_repo).create_event(_form(event_type="pickle_party"))
    assert "pickle_party" in str(exc.value)


def test_create_assigns_first_court_when_none_given(events_repo):
    created = EventService(events_repo).create_event(_form())

    assert events_repo.event_courts == [{"event_id": created["id"], "court_id": "c1", "is_primary": True}]
    assert created["waitlist_capacity"]


def test_create_marks_only_first_listed_court_primary(events_repo):
    EventService(events_repo).create_event(_form(court_ids=["c2", "c3"]))
    assert [a["is_primary"] for a in events_repo.event_courts] == [True, False]


def test_create_rolls_back_event_when_court_insert_fails(events_repo):
    events_repo.fail_courts_insert = True
    with pytest.raises(UpstreamError):
        EventService(events_repo).create_event(_form())
    assert events_repo.events == {}


def test_update_replaces_court_assignments(events_repo):
    svc = EventService(events_repo)
    created = svc.create_event(_form())
    svc.update_event(created["id"], {"title": "Renamed", "court_ids": ["c9"]})

    assert events_repo.events[created["id"]]["title"] == "Renamed"
    assert [a["court_id"] for a in events_repo.event_courts] == ["c9"]


def test_cancel_sets_reason(events_repo):
    svc = EventService(events_repo)
    created = svc.create_event(_form())
    svc.cancel_event(created["id"], "Rain")

    assert events_repo.events[created["id"]]["is_cancelled"] is True
    assert events_repo.events[created["id"]]["cancellation_reason"] == "Rain"


def test_upcoming_events_only_published(events_repo):
    events_repo.insert_event({"title": "A", "start_time": "2024-05-02T10:00:00+00:00", "is_published": True})
    events_repo.insert_event({"title": "B", "start_time": "2024-05-02T12:00:00+00:00", "is_published": False})
    events_repo.insert_event({"title": "C", "start_time": "2024-06-30T12:00:00+00:00", "is_published": True})

    upcoming = EventService(events_repo).upcoming_events(now=datetime(2024, 5, 1, tzinfo=timezone.utc))
    assert [e["title"] for e in upcoming] == ["A"]


def test_check_in_requires_player(events_repo):
    with pytest.raises(ValidationError):
        EventService(events_repo).check_in_player("e1", None)


def test_create_leaves_unset_columns_out_of_the_insert(events_repo):
    form = {key: _form()[key] for key in ("title", "event_type", "start_time", "end_time")}
    created = EventService(events_repo).create_event(form)
    row = events_repo.events[created["id"]]

    for column in ("description", "max_capacity", "member_only", "equipment_provided", "price_member"):
        assert column not in row
    assert row["waitlist_capacity"] == 5


def test_create_keeps_explicit_false_values(events_repo):
    created = EventService(events_repo).create_event(_form(member_only=False))
    assert events_repo.events[created["id"]]["member_only"] is False


def _booked_on_c1(events_repo, start, end):
    events_repo.events["e7"] = {
        "id": "e7",
        "title": "Morning Drills",
        "event_type": "dupr_open_play",
        "start_time": start,
        "end_time": end,
        "event_courts": [{"is_primary": True, "court": {"id": "c1", "court_number": 1, "name": "Court 1"}}],
    }


def test_court_unavailable_when_booking_ends_at_requested_start(events_repo):
    _booked_on_c1(events_repo, "2024-05-10T14:00:00+00:00", "2024-05-10T15:00:00+00:00")

    [court] = EventService(events_repo).check_court_availability("2024-05-10T15:00:00Z", "2024-05-10T16:00:00Z")

    assert court["available"] is False
    assert [c["id"] for c in court["conflicts"]] == ["e7"]


def test_court_available_for_a_later_slot(events_repo):
    _booked_on_c1(events_repo, "2024-05-10T14:00:00+00:00", "2024-05-10T15:00:00+00:00")

    [court] = EventService(events_repo).check_court_availability("2024-05-10T16:00:00Z", "2024-05-10T17:00:00Z")

    assert court["available"] is True
    assert court["conflicts"] == []
