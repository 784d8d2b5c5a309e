from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..database.connection import SupabaseConnection
from ..database.supabase_base import first, ilike_any, remote_call, rows
from .repository import InquiryRepository

SEARCH_COLUMNS = ("first_name", "last_name", "email", "subject")


class SupabaseInquiryRepository(InquiryRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def list_inquiries(self, *, status: Optional[str], search: Optional[str]) -> List[Dict[str, Any]]:
        query = self._conn.client().table("contact_inquiries").select("*").order("created_at", desc=True)
        if status:
            query = query.eq("status", status)
        if search:
            query = query.or_(ilike_any(SEARCH_COLUMNS, search))
        with remote_call("list inquiries"):
            return rows(query.execute())

    def get_inquiry(self, inquiry_id: str) -> Optional[Dict[str, Any]]:
        with remote_call("fetch inquiry"):
            res = self._conn.client().table("contact_inquiries").select("*").eq("id", inquiry_id).limit(1).execute()
        return first(res)

    def update_inquiry(self, inquiry_id: str, fields: Dict[str, Any]) -> None:
        with remote_call("update inquiry"):
            self._conn.client().table("contact_inquiries").update(fields).eq("id", inquiry_id).execute()

    def list_responses(self, inquiry_id: str) -> List[Dict[str, Any]]:
        with remote_call("list inquiry responses"):
            res = (
                self._conn.client()
                .table("contact_responses")
                .select("*")
                .eq("inquiry_id", inquiry_id)
                .order("created_at", desc=True)
                .execute()
            )
        return rows(res)

    def add_response(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with remote_call("save inquiry response"):
            return first(self._conn.client().table("contact_responses").insert(payload).execute())

    def log_email(self, params: Dict[str, Any]) -> None:
        with remote_call("log email"):
            self._conn.client().rpc("log_email", params).execute()
