from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..core.constants import MARKETING_EMAIL_FUNCTION
from ..database.connection import SupabaseConnection
from ..database.edge_functions import invoke_function
from ..database.supabase_base import first, remote_call, rows, total
from .repository import MarketingRepository

EMAILS = "marketing_emails"


class SupabaseMarketingRepository(MarketingRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _table(self, name: str):
        return self._conn.client().table(name)

    def list_emails(self, *, status: Optional[str], search: Optional[str], start: int, end: int) -> Tuple[List[Dict[str, Any]], int]:
        query = self._table(EMAILS).select("*", count="exact").order("created_at", desc=True)
        if status:
            query = query.eq("status", status)
        if search:
            query = query.ilike("subject", f"%{search}%")
        with remote_call("list marketing emails"):
            res = query.range(start, end).execute()
        return rows(res), total(res)

    def get_email(self, email_id: str) -> Optional[Dict[str, Any]]:
        with remote_call("fetch marketing email"):
            res = self._table(EMAILS).select("*").eq("id", email_id).limit(1).execute()
        return first(res)

    def update_email(self, email_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with remote_call("update marketing email"):
            res = self._table(EMAILS).update(fields).eq("id", email_id).execute()
        return first(res)

    def delete_email(self, email_id: str) -> None:
        with remote_call("delete marketing email"):
            self._table(EMAILS).delete().eq("id", email_id).execute()

    def count_verified_subscribers(self) -> int:
        with remote_call("count verified subscribers"):
            res = (
                self._conn.client()
                .schema("launch")
                .table("launch_subscribers")
                .select("*", count="exact", head=True)
                .eq("is_active", True)
                .not_.is_("verified_at", "null")
                .execute()
            )
        return total(res)

    def generate_email(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return invoke_function(self._conn, MARKETING_EMAIL_FUNCTION, body)

    def send_email(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return invoke_function(self._conn, f"{MARKETING_EMAIL_FUNCTION}/send", body)

    def campaign_overview(self, limit: int) -> List[Dict[str, Any]]:
        with remote_call("campaign overview"):
            return rows(self._table("campaign_overview").select("*").order("sent_date", desc=True).limit(limit).execute())

    def email_analytics(self, limit: int) -> List[Dict[str, Any]]:
        with remote_call("email analytics"):
            res = (
                self._table("email_analytics")
                .select("*")
                .order("sent_at", desc=True, nullsfirst=False)
                .limit(limit)
                .execute()
            )
        return rows(res)

    def top_performers(self, limit: int) -> List[Dict[str, Any]]:
        with remote_call("top performing emails"):
            return rows(self._table("top_performing_emails").select("*").limit(limit).execute())
