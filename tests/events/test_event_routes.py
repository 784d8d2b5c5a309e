from __future__ import annotations


def test_create_event_invalid_type_is_400(client):
    response = client.post(
        "/api/events",
        json={"title": "x", "event_type": "nope", "start_time": "2024-05-10T10:00:00Z", "end_time": "2024-05-10T11:00:00Z"},
    )
    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_session_booking_page_renders_for_admin(client, login):
    login(client)
    response = client.get("/dashboard/session_booking?view=week&date=2024-05-08")

    assert response.status_code == 200
    assert b"May 2024" in response.data


def test_list_events_with_bad_start_date_is_400(client):
    response = client.get("/api/events?startDate=next-tuesday")

    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_court_availability_endpoint(client, events_repo):
    events_repo.events["e1"] = {
        "id": "e1",
        "title": "Ladder Night",
        "event_type": "event_scramble",
        "start_time": "2024-05-10T23:00:00+00:00",
        "end_time": "2024-05-11T01:00:00+00:00",
        "event_courts": [{"is_primary": True, "court": {"id": "c1", "court_number": 1, "name": "Court 1"}}],
    }

    response = client.get("/api/courts/availability?start=2024-05-11T00:00:00Z&end=2024-05-11T02:00:00Z")

    assert response.status_code == 200
    [court] = response.get_json()["data"]
    assert court["court"]["id"] == "c1"
    assert court["available"] is False


def test_court_availability_requires_range(client):
    assert client.get("/api/courts/availability?start=2024-05-11T00:00:00Z").status_code == 400


def _scanning_app(make_app, events_repo):
    from dink_admin.checkin.service import CheckinService
    from dink_admin.events.service import EventService

    return make_app(checkin_service=CheckinService(EventService(events_repo), auth=None))


def test_scan_endpoint_checks_player_in(make_app, events_repo):
    from dink_admin.checkin.qr import player_payload

    client = _scanning_app(make_app, events_repo).test_client()
    response = client.post("/api/events/e1/check-in/scan", json={"code": player_payload("p1", "e1")})

    assert response.status_code == 200
    assert response.get_json()["success"] is True
    assert events_repo.checked_in == [("e1", "p1")]


def test_scan_endpoint_rejects_code_for_other_event(make_app, events_repo):
    from dink_admin.checkin.qr import player_payload

    client = _scanning_app(make_app, events_repo).test_client()
    response = client.post("/api/events/e1/check-in/scan", json={"code": player_payload("p1", "e2")})

    assert response.status_code == 400
    assert response.get_json()["error"] == "QR code is for a different event"
    assert events_repo.checked_in == []


def test_court_overview_groups_the_day_by_court(client, login, events_repo):
    events_repo.courts.append({"id": "c2", "court_number": 2, "name": "Court 2", "environment": "outdoor"})
    events_repo.events["e1"] = {
        "id": "e1",
        "title": "Ladder Night",
        "event_type": "event_scramble",
        "start_time": "2024-05-10T23:00:00+00:00",
        "end_time": "2024-05-11T01:00:00+00:00",
        "event_courts": [{"is_primary": True, "court": {"id": "c1", "court_number": 1, "name": "Court 1"}}],
    }
    login(client)

    response = client.get("/dashboard/court_overview?date=2024-05-10")

    assert response.status_code == 200
    assert b"Court Overview" in response.data
    assert b"Ladder Night" in response.data
    assert b"No bookings scheduled for this court" in response.data


def test_court_overview_requires_login(client):
    response = client.get("/dashboard/court_overview")

    assert response.status_code == 302
    assert "/auth/login" in response.headers["Location"]
