from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from dink_admin.auth.service import AuthService, names_from_email
from dink_admin.core.enums import Role
from dink_admin.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    UpstreamError,
    ValidationError,
)

from conftest import FakeAccounts, FakeProvider, InMemoryAllowedEmails


def _service(allowed, provider=None, **kwargs):
    return AuthService(allowed, FakeAccounts(), provider or FakeProvider(), **kwargs)


def test_names_from_email_splits_on_dot():
    assert names_from_email("jane.doe@x.com") == ("jane", "doe")
    assert names_from_email("solo@x.com") == ("solo", "")


def test_check_email_defaults_listed_role_to_coach(allowed_repo):
    check = _service(allowed_repo).check_email("  Sam.Coach@DinkHouse.com ")

    assert check.allowed is True
    assert check.role == Role.COACH
    assert check.first_name == "Sam"


def test_check_email_unknown_is_not_allowed(allowed_repo):
    assert _service(allowed_repo).check_email("nobody@x.com").allowed is False


def test_check_email_lookup_failure_raises_outside_dev():
    with pytest.raises(UpstreamError):
        _service(InMemoryAllowedEmails(fail=True)).check_email("jane.doe@x.com")


def test_check_email_lookup_failure_allows_admin_in_dev():
    check = _service(InMemoryAllowedEmails(fail=True), allow_unlisted_in_dev=True).check_email("jane.doe@x.com")

    assert check.allowed is True
    assert check.role == Role.ADMIN
    assert (check.first_name, check.last_name) == ("jane", "doe")


def test_login_requires_both_fields(allowed_repo):
    with pytest.raises(ValidationError):
        _service(allowed_repo).login("pat.manager@dinkhouse.com", "")


def test_login_uses_listed_role(allowed_repo):
    user = _service(allowed_repo).login("pat.manager@dinkhouse.com", "anything")

    assert user.role == Role.MANAGER
    assert user.home_path == "/"
    assert user.issued_at > 0


def test_login_rejects_unlisted_email(allowed_repo):
    with pytest.raises(AuthenticationError):
        _service(allowed_repo).login("intruder@x.com", "secret123")


def test_login_checks_stored_password_hash():
    repo = InMemoryAllowedEmails(
        [{"email": "a@x.com", "role": "admin", "password_hash": generate_password_hash("right-pass")}]
    )
    svc = _service(repo)

    assert svc.login("a@x.com", "right-pass").email == "a@x.com"
    with pytest.raises(AuthenticationError):
        svc.login("a@x.com", "wrong-pass")


def test_signup_enforces_min_password_length(allowed_repo):
    with pytest.raises(ValidationError):
        _service(allowed_repo).signup(
            email="sam.coach@dinkhouse.com", password="short", first_name="Sam", last_name="Ray"
        )


def test_signup_rejects_unlisted_email(allowed_repo):
    with pytest.raises(AuthorizationError):
        _service(allowed_repo).signup(
            email="intruder@x.com", password="long-enough", first_name="I", last_name="X"
        )


def test_signup_marks_email_used_and_stores_hash(allowed_repo):
    provider = FakeProvider()
    user, tokens = _service(allowed_repo, provider).signup(
        email="Sam.Coach@dinkhouse.com", password="long-enough", first_name=" Sam ", last_name="Ray"
    )

    assert user.email == "sam.coach@dinkhouse.com"
    assert user.first_name == "Sam"
    assert user.role == Role.COACH
    assert tokens.access_token == "access-sam.coach@dinkhouse.com"
    assert provider.signups[0]["metadata"]["role"] == "coach"

    email, used_at, password_hash = allowed_repo.used[0]
    assert email == "sam.coach@dinkhouse.com"
    assert used_at
    assert password_hash and password_hash != "long-enough"


def test_signup_without_provider_returns_no_tokens(allowed_repo):
    _, tokens = _service(allowed_repo, FakeProvider(configured=False)).signup(
        email="sam.coach@dinkhouse.com", password="long-enough", first_name="Sam", last_name="Ray"
    )
    assert tokens is None


def test_complete_oauth_rejects_unlisted_email(allowed_repo):
    provider = FakeProvider(codes={"abc": "intruder@x.com"})
    with pytest.raises(AuthorizationError):
        _service(allowed_repo, provider).complete_oauth("abc")


def test_complete_oauth_admits_listed_email(allowed_repo):
    provider = FakeProvider(codes={"abc": "Pat.Manager@dinkhouse.com"})
    user, tokens = _service(allowed_repo, provider).complete_oauth("abc")

    assert user.email == "pat.manager@dinkhouse.com"
    assert user.role == Role.MANAGER
    assert tokens.access_token == "oauth-access"


def test_refresh_requires_token(allowed_repo):
    with pytest.raises(AuthenticationError):
        _service(allowed_repo).refresh(None)


def test_refresh_reports_provider_rejection(allowed_repo):
    svc = _service(allowed_repo)

    assert svc.refresh_auth_tokens("bad").success is False
    with pytest.raises(AuthenticationError):
        svc.refresh("bad")
    assert svc.refresh("good-refresh").access_token == "new-access"
