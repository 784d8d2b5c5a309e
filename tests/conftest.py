from __future__ import annotations

import itertools
from typing import Any, Dict, List, Optional

import pytest

from dink_admin import create_app
from dink_admin.allowed_emails.model import AllowedEmail
from dink_admin.allowed_emails.service import AllowedEmailService
from dink_admin.auth.model import ProviderTokens, ProviderUser
from dink_admin.auth.service import AuthService
from dink_admin.container import Container
from dink_admin.core.exceptions import AuthenticationError, NotFoundError, UpstreamError
from dink_admin.events.service import EventService
from dink_admin.inquiries.mailer import SmtpConfig, SmtpMailer

_ids = itertools.count(1)


class InMemoryAllowedEmails:
    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, *, fail: bool = False):
        self.items: Dict[str, AllowedEmail] = {}
        self.fail = fail
        self.used: List[tuple] = []
        for row in rows or []:
            self.create(row)

    def _check(self):
        if self.fail:
            raise UpstreamError("connection refused")

    def list_all(self):
        self._check()
        return list(self.items.values())

    def list_active(self):
        return [e for e in self.list_all() if e.is_active]

    def get_active_by_email(self, email):
        self._check()
        for e in self.items.values():
            if e.email == email and e.is_active:
                return e
        return None

    def create(self, fields):
        if any(e.email == fields["email"] for e in self.items.values()):
            raise UpstreamError('duplicate key value violates unique constraint "allowed_emails_email_key"', code="23505")
        row = {"id": str(next(_ids)), "is_active": True, **fields}
        self.items[row["id"]] = AllowedEmail.from_row(row)
        return self.items[row["id"]]

    def update(self, email_id, fields):
        current = self.items.get(email_id)
        if current is None:
            return None
        row = {**current.__dict__, **fields}
        self.items[email_id] = AllowedEmail.from_row(row)
        return self.items[email_id]

    def delete(self, email_id):
        self.items.pop(email_id, None)

    def mark_used(self, email, used_at, password_hash=None):
        self._check()
        self.used.append((email, used_at, password_hash))
        for key, e in self.items.items():
            if e.email == email:
                self.items[key] = AllowedEmail.from_row({**e.__dict__, "used_at": used_at, "password_hash": password_hash})


class FakeAccounts:
    def __init__(self, users=None, players=None):
        self.users = users or {}
        self.players = players or {}

    def get_user_by_session(self, session_token):
        user = self.users.get(session_token)
        return {"success": True, "user": user} if user else {"success": False}

    def get_player_by_account(self, account_id):
        return self.players.get(account_id)


class FakeProvider:
    def __init__(self, *, configured: bool = True, users=None, codes=None):
        self.configured = configured
        self.users = users or {}
        self.codes = codes or {}
        self.signups: List[Dict[str, Any]] = []

    def is_configured(self):
        return self.configured

    def sign_up(self, *, email, password, metadata):
        self.signups.append({"email": email, "metadata": metadata})
        return ProviderTokens(access_token="access-" + email, refresh_token="refresh-" + email, email=email)

    def refresh_session(self, refresh_token):
        if refresh_token != "good-refresh":
            raise AuthenticationError("Invalid Refresh Token")
        return ProviderTokens(access_token="new-access", refresh_token="new-refresh")

    def exchange_code(self, code):
        if code not in self.codes:
            raise AuthenticationError("invalid code")
        return ProviderTokens(access_token="oauth-access", refresh_token="oauth-refresh", email=self.codes[code])

    def get_user(self, access_token):
        return self.users.get(access_token)


class InMemoryEvents:
    def __init__(self, events=None, courts=None):
        self.events: Dict[str, Dict[str, Any]] = {str(e["id"]): e for e in events or []}
        self.courts = courts or []
        self.event_courts: List[Dict[str, Any]] = []
        self.checked_in: List[tuple] = []
        self.fail_courts_insert = False

    def list_events(self, *, start, end):
        return [
            e for e in self.events.values()
            if (start is None or e["start_time"] >= start) and (end is None or e["start_time"] <= end)
        ]

    def get_event(self, event_id):
        if event_id not in self.events:
            raise NotFoundError("Event not found")
        return self.events[event_id]

    def insert_event(self, fields):
        row = {"id": str(next(_ids)), **fields}
        self.events[row["id"]] = row
        return row

    def update_event(self, event_id, fields):
        if event_id not in self.events:
            return None
        self.events[event_id].update(fields)
        return self.events[event_id]

    def delete_event(self, event_id):
        self.events.pop(event_id, None)

    def delete_event_courts(self, event_id):
        self.event_courts = [a for a in self.event_courts if a["event_id"] != event_id]

    def insert_event_courts(self, assignments):
        if self.fail_courts_insert:
            raise UpstreamError("court is already booked")
        self.event_courts.extend(assignments)

    def list_courts(self):
        return list(self.courts)

    def list_templates(self):
        return []

    def overlapping_events(self, *, start, end, exclude_id):
        return [
            e for e in self.events.values()
            if e["start_time"] <= end and e["end_time"] >= start and e["id"] != exclude_id
        ]

    def published_between(self, *, start, end):
        return [e for e in self.list_events(start=start, end=end) if e.get("is_published")]

    def checkin_status(self, event_id):
        return [{"player_id": p, "status": "checked_in"} for (e, p) in self.checked_in if e == event_id]

    def check_in_player(self, event_id, player_id):
        self.checked_in.append((event_id, player_id))
        return {"success": True, "message": "Player checked in"}


@pytest.fixture
def allowed_repo():
    return InMemoryAllowedEmails(
        [
            {"email": "pat.manager@dinkhouse.com", "first_name": "Pat", "last_name": "Lee", "role": "manager"},
            {"email": "sam.coach@dinkhouse.com", "first_name": "Sam", "last_name": "Ray", "role": None},
        ]
    )


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def events_repo():
    return InMemoryEvents(courts=[{"id": "c1", "court_number": 1, "name": "Court 1"}])


@pytest.fixture
def make_app(monkeypatch, allowed_repo, provider, events_repo):
    """Build the Flask app over fakes; keyword overrides replace container services."""
    monkeypatch.setenv("APP_ENV", "testing")

    def factory(**overrides):
        auth_service = AuthService(allowed_repo, FakeAccounts(), provider)
        services = dict(
            conn=None,
            auth_provider=provider,
            mailer=SmtpMailer(SmtpConfig()),
            allowed_email_service=AllowedEmailService(allowed_repo),
            auth_service=auth_service,
            member_service=None,
            employee_service=None,
            event_service=EventService(events_repo),
            checkin_service=None,
            open_play_service=None,
            booking_service=None,
            subscriber_service=None,
            marketing_service=None,
            inquiry_service=None,
            crowdfunding_service=None,
        )
        services.update(overrides)
        return create_app(Container(**services))

    return factory


@pytest.fixture
def client(make_app):
    return make_app().test_client()


@pytest.fixture
def login():
    def _login(client, email="pat.manager@dinkhouse.com", password="whatever"):
        return client.post("/api/auth/login", json={"email": email, "password": password})

    return _login
