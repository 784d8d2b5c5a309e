from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core.exceptions import NotFoundError
from ..database.connection import SupabaseConnection
from ..database.supabase_base import first, remote_call, rows
from .repository import EventRepository

EVENT_WITH_COURTS = "*, event_courts(is_primary, court:courts(*))"
EVENT_DETAIL = (
    "*, event_courts(is_primary, court:courts(*)), "
    "event_registrations(id, player_name, skill_level, status)"
)
UPCOMING_COLUMNS = "id, title, event_type, start_time, end_time, max_capacity, current_registrations"


class SupabaseEventRepository(EventRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _events(self):
        return self._conn.client().table("events")

    def list_events(self, *, start: Optional[str], end: Optional[str]) -> List[Dict[str, Any]]:
        query = self._events().select(EVENT_WITH_COURTS).eq("is_cancelled", False).order("start_time")
        if start:
            query = query.gte("start_time", start)
        if end:
            query = query.lte("end_time", end)
        with remote_call("list events"):
            return rows(query.execute())

    def get_event(self, event_id: str) -> Dict[str, Any]:
        with remote_call("fetch event"):
            res = self._events().select(EVENT_DETAIL).eq("id", event_id).limit(1).execute()
        row = first(res)
        if not row:
            raise NotFoundError("Event not found")
        return row

    def insert_event(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        with remote_call("create event"):
            res = self._events().insert(fields).execute()
        return first(res) or {}

    def update_event(self, event_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with remote_call("update event"):
            res = self._events().update(fields).eq("id", event_id).execute()
        return first(res)

    def delete_event(self, event_id: str) -> None:
        with remote_call("delete event"):
            self._events().delete().eq("id", event_id).execute()

    def delete_event_courts(self, event_id: str) -> None:
        with remote_call("clear event courts"):
            self._conn.client().table("event_courts").delete().eq("event_id", event_id).execute()

    def insert_event_courts(self, assignments: List[Dict[str, Any]]) -> None:
        with remote_call("assign event courts"):
            self._conn.client().table("event_courts").insert(assignments).execute()

    def list_courts(self) -> List[Dict[str, Any]]:
        with remote_call("list courts"):
            res = self._conn.client().table("courts").select("*").eq("status", "available").order("court_number").execute()
        return rows(res)

    def list_templates(self) -> List[Dict[str, Any]]:
        with remote_call("list event templates"):
            res = self._conn.client().table("event_templates").select("*").eq("is_active", True).order("name").execute()
        return rows(res)

    def overlapping_events(self, *, start: str, end: str, exclude_id: Optional[str]) -> List[Dict[str, Any]]:
        query = (
            self._events()
            .select(EVENT_WITH_COURTS)
            .eq("is_cancelled", False)
            .lte("start_time", end)
            .gte("end_time", start)
        )
        if exclude_id:
            query = query.neq("id", exclude_id)
        with remote_call("check court availability"):
            return rows(query.execute())

    def published_between(self, *, start: str, end: str) -> List[Dict[str, Any]]:
        with remote_call("list upcoming events"):
            res = (
                self._events()
                .select(UPCOMING_COLUMNS)
                .eq("is_published", True)
                .eq("is_cancelled", False)
                .gte("start_time", start)
                .lte("start_time", end)
                .order("start_time")
                .execute()
            )
        return rows(res)

    def checkin_status(self, event_id: str) -> Any:
        with remote_call("get_event_checkin_status"):
            return self._conn.client().rpc("get_event_checkin_status", {"p_event_id": event_id}).execute().data

    def check_in_player(self, event_id: str, player_id: str) -> Any:
        with remote_call("check_in_player"):
            return (
                self._conn.client()
                .rpc("check_in_player", {"p_event_id": event_id, "p_player_id": player_id})
                .execute()
                .data
            )
