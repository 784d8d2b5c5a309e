from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..core.enums import MembershipLevel
from ..database.connection import SupabaseConnection
from ..database.supabase_base import ilike_any, remote_call, rows, total
from .repository import MemberRepository


class SupabaseMemberRepository(MemberRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _rpc(self, name: str, params: Dict[str, Any]):
        with remote_call(name):
            return self._conn.client().rpc(name, params).execute().data

    def list_members(self, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self._rpc("get_all_members", params)

    def delete_member(self, player_id: str) -> Optional[Dict[str, Any]]:
        return self._rpc("admin_delete_player", {"p_player_id": player_id})

    def verify_dupr(self, params: Dict[str, Any]) -> Any:
        return self._rpc("verify_dupr", params)

    def list_guests(self, *, start: int, end: int, search: Optional[str]) -> Tuple[List[Dict[str, Any]], int]:
        query = (
            self._conn.client()
            .table("players")
            .select("*", count="exact")
            .eq("membership_level", MembershipLevel.GUEST.value)
            .order("created_at", desc=True)
            .range(start, end)
        )
        if search:
            query = query.or_(ilike_any(("first_name", "last_name", "email"), search))
        with remote_call("list guests"):
            res = query.execute()
        return rows(res), total(res)

    def pending_dupr_verifications(self, *, limit: int, offset: int) -> Optional[Dict[str, Any]]:
        return self._rpc("get_pending_dupr_verifications", {"p_limit": limit, "p_offset": offset})

    def verify_player_dupr(self, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self._rpc("verify_player_dupr", params)
