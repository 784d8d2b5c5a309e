from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import SupabaseConnection
from ..database.supabase_base import first, remote_call
from .repository import EmployeeRepository


class SupabaseEmployeeRepository(EmployeeRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def get_by_auth_id(self, auth_id: str) -> Optional[Dict[str, Any]]:
        with remote_call("fetch employee"):
            res = self._conn.client().table("employees").select("*").eq("auth_id", auth_id).limit(1).execute()
        return first(res)

    def get_profile(self, employee_id: str) -> Optional[Dict[str, Any]]:
        with remote_call("fetch employee profile"):
            res = (
                self._conn.client()
                .table("employee_profiles")
                .select("*")
                .eq("employee_id", employee_id)
                .limit(1)
                .execute()
            )
        return first(res)

    def update(self, employee_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with remote_call("update employee"):
            res = self._conn.client().table("employees").update(fields).eq("id", employee_id).execute()
        return first(res)

    def upsert_profile(self, employee_id: str, profile: Dict[str, Any]) -> None:
        with remote_call("update employee profile"):
            self._conn.client().table("employee_profiles").upsert(
                {**profile, "employee_id": employee_id}, on_conflict="employee_id"
            ).execute()
