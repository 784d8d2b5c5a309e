from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import SupabaseConnection
from ..database.supabase_base import first, remote_call, rows
from .model import AllowedEmail
from .repository import AllowedEmailRepository

TABLE = "allowed_emails"


class SupabaseAllowedEmailRepository(AllowedEmailRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def list_all(self) -> Sequence[AllowedEmail]:
        with remote_call("list allowed emails"):
            res = self._conn.client().table(TABLE).select("*").order("created_at", desc=True).execute()
        return [AllowedEmail.from_row(r) for r in rows(res)]

    def list_active(self) -> Sequence[AllowedEmail]:
        with remote_call("list active allowed emails"):
            res = self._conn.client().table(TABLE).select("*").eq("is_active", True).order("email").execute()
        return [AllowedEmail.from_row(r) for r in rows(res)]

    def get_active_by_email(self, email: str) -> Optional[AllowedEmail]:
        with remote_call("check allowed email"):
            res = (
                self._conn.client()
                .table(TABLE)
                .select("*")
                .eq("email", email)
                .eq("is_active", True)
                .limit(1)
                .execute()
            )
        row = first(res)
        return AllowedEmail.from_row(row) if row else None

    def create(self, fields: Dict[str, Any]) -> AllowedEmail:
        with remote_call("add allowed email"):
            res = self._conn.client().table(TABLE).insert(fields).execute()
        return AllowedEmail.from_row(first(res) or fields)

    def update(self, email_id: str, fields: Dict[str, Any]) -> Optional[AllowedEmail]:
        with remote_call("update allowed email"):
            res = self._conn.client().table(TABLE).update(fields).eq("id", email_id).execute()
        row = first(res)
        return AllowedEmail.from_row(row) if row else None

    def delete(self, email_id: str) -> None:
        with remote_call("delete allowed email"):
            self._conn.client().table(TABLE).delete().eq("id", email_id).execute()

    def mark_used(self, email: str, used_at: str, password_hash: Optional[str] = None) -> None:
        fields = {"used_at": used_at}
        if password_hash:
            fields["password_hash"] = password_hash
        with remote_call("mark allowed email used"):
            self._conn.client().table(TABLE).update(fields).eq("email", email).execute()
