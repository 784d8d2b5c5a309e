from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from ..auth.service import AuthService
from ..common.datetime_utils import utc_iso
from ..core.exceptions import NotFoundError, UpstreamError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("first_name", "middle_name", "last_name", "phone", "position_title")


class EmployeeService:
    """Self-service profile for the logged-in staff member."""

    def __init__(self, repo: EmployeeRepository, auth: AuthService):
        self._repo = repo
        self._auth = auth

    def _employee_row(self, session_token: Optional[str]) -> Dict[str, Any]:
        user = self._auth.provider_user(session_token)
        try:
            row = self._repo.get_by_auth_id(user.id)
        except UpstreamError:
            raise UpstreamError("Failed to fetch employee data")
        if not row:
            raise NotFoundError("Employee not found")
        return row

    def current(self, session_token: Optional[str]) -> Tuple[Dict[str, Any], Optional[Dict[str, Any]]]:
        row = self._employee_row(session_token)
        try:
            profile = self._repo.get_profile(str(row["id"]))
        except UpstreamError as e:
            logger.info("No profile for employee %s: %s", row["id"], e)
            profile = None
        return row, profile

    def current_employee(self, session_token: Optional[str]) -> Employee:
        return Employee.from_row(self._employee_row(session_token))

    def update(self, session_token: Optional[str], body: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        row = self._employee_row(session_token)
        fields = {
            name: body[name] if body.get(name) is not None else row.get(name) for name in EDITABLE_FIELDS
        }
        fields["updated_at"] = utc_iso()
        try:
            updated = self._repo.update(str(row["id"]), fields)
        except UpstreamError:
            raise UpstreamError("Failed to update employee data")

        profile = body.get("profile")
        if isinstance(profile, dict):
            try:
                self._repo.upsert_profile(str(row["id"]), {**profile, "updated_at": utc_iso()})
            except UpstreamError as e:
                logger.error("Error updating profile: %s", e)
        return updated
