from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..database.connection import SupabaseConnection
from ..database.supabase_base import first, remote_call, rows
from .repository import ScheduleBlockRepository

BLOCK_WITH_ALLOCATIONS = (
    "*, court_allocations:open_play_court_allocations("
    "id, court_id, skill_level_min, skill_level_max, skill_level_label, is_mixed_level, sort_order, "
    "court:courts(id, court_number, name, environment))"
)


class SupabaseScheduleBlockRepository(ScheduleBlockRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _blocks(self):
        return self._conn.client().schema("events").table("open_play_schedule_blocks")

    def _api_rpc(self, name: str, params: Dict[str, Any]) -> Any:
        with remote_call(name):
            return self._conn.client().schema("api").rpc(name, params).execute().data

    def list_blocks(self, *, include_inactive: bool) -> List[Dict[str, Any]]:
        query = self._blocks().select(BLOCK_WITH_ALLOCATIONS).order("day_of_week").order("start_time")
        if not include_inactive:
            query = query.eq("is_active", True)
        with remote_call("list schedule blocks"):
            return rows(query.execute())

    def get_block(self, block_id: str) -> Optional[Dict[str, Any]]:
        with remote_call("fetch schedule block"):
            res = self._blocks().select(BLOCK_WITH_ALLOCATIONS).eq("id", block_id).limit(1).execute()
        return first(res)

    def create_blocks(self, params: Dict[str, Any]) -> Any:
        return self._api_rpc("create_schedule_blocks_multi_day", params)

    def set_active(self, block_ids: Sequence[str], *, is_active: bool, updated_at: str) -> List[Dict[str, Any]]:
        with remote_call("toggle schedule blocks"):
            res = (
                self._blocks()
                .update({"is_active": is_active, "updated_at": updated_at})
                .in_("id", list(block_ids))
                .execute()
            )
        return rows(res)

    def create_override(self, params: Dict[str, Any]) -> Any:
        return self._api_rpc("create_schedule_override", params)

    def bulk_delete(self, block_ids: Sequence[str]) -> Any:
        return self._api_rpc("bulk_delete_schedule_blocks", {"p_block_ids": list(block_ids)})

    def list_courts(self) -> List[Dict[str, Any]]:
        with remote_call("list courts"):
            res = self._conn.client().schema("events").table("courts").select("*").order("court_number").execute()
        return rows(res)
