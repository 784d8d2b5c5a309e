from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..common.datetime_utils import now_local, utc_iso
from ..common.validators import normalize_email, optional_text, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ConflictError, UpstreamError, ValidationError
from .model import AllowedEmail
from .repository import AllowedEmailRepository

EDITABLE_FIELDS = ("email", "first_name", "last_name", "role", "notes", "is_active")
DUPLICATE_MESSAGE = "This email is already in the allowed list"


class AllowedEmailService:
    """Maintains the list of emails allowed to sign up for the dashboard."""

    def __init__(self, repo: AllowedEmailRepository):
        self._repo = repo

    def list_all(self) -> Sequence[AllowedEmail]:
        return self._repo.list_all()

    def add(
        self,
        *,
        email: Optional[str],
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        role: Optional[str] = None,
        notes: Optional[str] = None,
        default_role: Role = Role.VIEWER,
    ) -> AllowedEmail:
        fields = {
            "email": normalize_email(email),
            "first_name": optional_text(first_name),
            "last_name": optional_text(last_name),
            "role": Role.parse(role, default_role).value if role else default_role.value,
            "notes": optional_text(notes),
            "is_active": True,
        }
        try:
            return self._repo.create(fields)
        except UpstreamError as e:
            if e.is_duplicate:
                raise ConflictError(DUPLICATE_MESSAGE)
            raise

    def add_from_api(self, body: Dict[str, Any]) -> AllowedEmail:
        """Public add endpoint: role defaults to admin and notes carry a timestamp."""
        notes = body.get("notes") or f"Added via API on {now_local().strftime('%m/%d/%Y, %H:%M:%S')}"
        return self.add(
            email=body.get("email"),
            first_name=body.get("first_name") or body.get("firstName"),
            last_name=body.get("last_name") or body.get("lastName"),
            role=body.get("role"),
            notes=notes,
            default_role=Role.ADMIN,
        )

    def update(self, email_id: Optional[str], changes: Dict[str, Any]) -> Optional[AllowedEmail]:
        email_id = require_non_empty(email_id, "Email ID is required")
        fields = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
        if "email" in fields:
            fields["email"] = normalize_email(fields["email"])
        if "role" in fields:
            try:
                fields["role"] = Role(fields["role"]).value
            except ValueError:
                raise ValidationError(f"Invalid role: {fields['role']}")
        fields["updated_at"] = utc_iso()
        return self._repo.update(email_id, fields)

    def delete(self, email_id: Optional[str]) -> None:
        self._repo.delete(require_non_empty(email_id, "Email ID is required"))

    def list_public(self) -> List[Dict[str, Any]]:
        return [
            {"email": e.email, "role": e.role, "name": e.display_name, "is_used": e.is_used}
            for e in self._repo.list_active()
        ]

    def lookup(self, email: str) -> Dict[str, Any]:
        found = self._repo.get_active_by_email(email.strip().lower())
        if not found:
            return {"success": True, "allowed": False, "email": email}
        return {
            "success": True,
            "allowed": True,
            "email": found.email,
            "role": found.role,
            "is_used": found.is_used,
        }
