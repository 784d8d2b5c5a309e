from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class EmployeeRepository(Protocol):
    def get_by_auth_id(self, auth_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def get_profile(self, employee_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def update(self, employee_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def upsert_profile(self, employee_id: str, profile: Dict[str, Any]) -> None:
        raise NotImplementedError
