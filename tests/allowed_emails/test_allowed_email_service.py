from __future__ import annotations

import pytest

from dink_admin.allowed_emails.service import DUPLICATE_MESSAGE, AllowedEmailService
from dink_admin.core.exceptions import ConflictError, ValidationError

from conftest import InMemoryAllowedEmails


def test_add_normalizes_and_defaults_role():
    svc = AllowedEmailService(InMemoryAllowedEmails())
    created = svc.add(email="  New.Person@X.com ", first_name=" New ")

    assert created.email == "new.person@x.com"
    assert created.first_name == "New"
    assert created.role == "viewer"


def test_add_duplicate_is_conflict(allowed_repo):
    with pytest.raises(ConflictError) as exc:
        AllowedEmailService(allowed_repo).add(email="pat.manager@dinkhouse.com")
    assert str(exc.value) == DUPLICATE_MESSAGE


def test_add_from_api_defaults_to_admin_with_note():
    created = AllowedEmailService(InMemoryAllowedEmails()).add_from_api({"email": "a@x.com"})

    assert created.role == "admin"
    assert created.notes.startswith("Added via API on ")


def test_update_rejects_unknown_role(allowed_repo):
    email_id = allowed_repo.list_all()[0].id
    with pytest.raises(ValidationError):
        AllowedEmailService(allowed_repo).update(email_id, {"role": "owner"})


def test_update_requires_id(allowed_repo):
    with pytest.raises(ValidationError):
        AllowedEmailService(allowed_repo).update(None, {"notes": "x"})


def test_lookup_reports_allowed_and_used(allowed_repo):
    svc = AllowedEmailService(allowed_repo)
    allowed_repo.mark_used("pat.manager@dinkhouse.com", "2024-01-01T00:00:00+00:00")

    assert svc.lookup("PAT.manager@dinkhouse.com")["is_used"] is True
    assert svc.lookup("x@x.com") == {"success": True, "allowed": False, "email": "x@x.com"}


def test_list_public_hides_inactive(allowed_repo):
    svc = AllowedEmailService(allowed_repo)
    svc.update(allowed_repo.list_all()[1].id, {"is_active": False})

    assert [e["email"] for e in svc.list_public()] == ["pat.manager@dinkhouse.com"]
