from __future__ import annotations

from typing import Any, Dict, List

from ..database.connection import SupabaseConnection
from ..database.supabase_base import remote_call, rows
from .repository import BookingRepository


class SupabaseBookingRepository(BookingRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def list_bookings(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        with remote_call("get_all_bookings"):
            return rows(self._conn.client().rpc("get_all_bookings", params).execute())
