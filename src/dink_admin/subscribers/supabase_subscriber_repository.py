from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..core.enums import SubscriberStatus
from ..database.connection import SupabaseConnection
from ..database.supabase_base import first, ilike_any, remote_call, rows, total
from .repository import SubscriberRepository

TABLE = "launch_subscribers"


class SupabaseSubscriberRepository(SubscriberRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _table(self):
        return self._conn.client().table(TABLE)

    @staticmethod
    def _active_filter(query, active: Optional[bool]):
        if active is True:
            return query.eq("status", SubscriberStatus.ACTIVE.value)
        if active is False:
            return query.neq("status", SubscriberStatus.ACTIVE.value)
        return query

    def search(
        self,
        *,
        search: Optional[str],
        active: Optional[bool],
        sort_by: str,
        descending: bool,
        start: int,
        end: int,
    ) -> Tuple[List[Dict[str, Any]], int]:
        query = self._table().select("*", count="exact")
        if search:
            query = query.or_(ilike_any(("email", "first_name", "last_name"), search))
        query = self._active_filter(query, active)
        query = query.order(sort_by, desc=descending).range(start, end)
        with remote_call("list subscribers"):
            res = query.execute()
        return rows(res), total(res)

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        with remote_call("find subscriber"):
            res = self._table().select("id, status").eq("email", email).limit(1).execute()
        return first(res)

    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        with remote_call("create subscriber"):
            res = self._table().insert(fields).execute()
        return first(res) or fields

    def update(self, subscriber_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with remote_call("update subscriber"):
            res = self._table().update(fields).eq("id", subscriber_id).execute()
        return first(res)

    def count(self, *, active: Optional[bool] = None, created_from: Optional[str] = None, created_before: Optional[str] = None) -> int:
        query = self._active_filter(self._table().select("id", count="exact"), active)
        if created_from:
            query = query.gte("created_at", created_from)
        if created_before:
            query = query.lt("created_at", created_before)
        with remote_call("count subscribers"):
            return total(query.limit(1).execute())
