from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import SupabaseConnection
from ..database.supabase_base import first, remote_call
from .repository import AccountRepository

PLAYER_COLUMNS = (
    "id, first_name, last_name, display_name, phone, dupr_rating, skill_level, "
    "membership_level, user_accounts!inner(email)"
)


class SupabaseAccountRepository(AccountRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def get_user_by_session(self, session_token: str) -> Optional[Dict[str, Any]]:
        with remote_call("get_user_by_session"):
            res = (
                self._conn.client()
                .schema("api")
                .rpc("get_user_by_session", {"session_token": session_token})
                .execute()
            )
        return res.data if isinstance(res.data, dict) else first(res)

    def get_player_by_account(self, account_id: str) -> Optional[Dict[str, Any]]:
        with remote_call("fetch player"):
            res = (
                self._conn.client()
                .table("players")
                .select(PLAYER_COLUMNS)
                .eq("account_id", account_id)
                .limit(1)
                .execute()
            )
        row = first(res)
        if not row:
            return None
        account = row.pop("user_accounts", None)
        if isinstance(account, list):
            account = account[0] if account else None
        row["email"] = (account or {}).get("email")
        return row
