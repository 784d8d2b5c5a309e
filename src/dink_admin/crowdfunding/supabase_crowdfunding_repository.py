from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..database.connection import SupabaseConnection
from ..database.supabase_base import first, remote_call, rows
from .repository import CrowdfundingRepository

SCHEMA = "crowdfunding"
RECOGNITION_SELECT = "*, backer:backers(email, first_name, last_initial, phone), allocation:benefit_allocations(benefit_name)"


class SupabaseCrowdfundingRepository(CrowdfundingRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _cf(self, name: str):
        return self._conn.client().schema(SCHEMA).table(name)

    def _public(self, name: str):
        return self._conn.client().table(name)

    def pending_fulfillment(self, benefit_type: Optional[str]) -> List[Dict[str, Any]]:
        query = self._cf("v_pending_fulfillment").select("*").order("days_until_expiration")
        if benefit_type:
            query = query.eq("benefit_type", benefit_type)
        with remote_call("list pending fulfillment"):
            return rows(query.execute())

    def fulfillment_summary(self) -> List[Dict[str, Any]]:
        with remote_call("fulfillment summary"):
            return rows(self._cf("v_fulfillment_summary").select("*").order("benefit_type").execute())

    def update_allocation(self, allocation_id: str, fields: Dict[str, Any]) -> None:
        with remote_call("update benefit allocation"):
            self._cf("benefit_allocations").update(fields).eq("id", allocation_id).execute()

    def backer_summaries(self) -> List[Dict[str, Any]]:
        with remote_call("list backers"):
            return rows(self._cf("v_backer_summary").select("*").execute())

    def completed_contributions(self) -> List[Dict[str, Any]]:
        with remote_call("list contributions"):
            res = (
                self._cf("contributions")
                .select("tier_id, amount, contribution_tiers (name, amount), campaign_types (name)")
                .eq("status", "completed")
                .execute()
            )
        return rows(res)

    def find_backer_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        with remote_call("find backer"):
            return first(self._cf("v_backer_summary").select("*").eq("email", email).limit(1).execute())

    def active_benefits(self, backer_id: str) -> List[Dict[str, Any]]:
        with remote_call("list active benefits"):
            return rows(self._cf("v_active_backer_benefits").select("*").eq("backer_id", backer_id).execute())

    def usage_history(self, allocation_id: str) -> List[Dict[str, Any]]:
        with remote_call("benefit usage history"):
            res = (
                self._cf("benefit_usage_log")
                .select("*")
                .eq("allocation_id", allocation_id)
                .order("usage_time", desc=True)
                .execute()
            )
        return rows(res)

    def log_usage(self, payload: Dict[str, Any]) -> None:
        with remote_call("log benefit usage"):
            self._cf("benefit_usage_log").insert(payload).execute()

    def get_backer(self, backer_id: str) -> Optional[Dict[str, Any]]:
        with remote_call("fetch backer"):
            return first(self._public("backers").select("*").eq("id", backer_id).limit(1).execute())

    def backer_contributions(self, backer_id: str) -> List[Dict[str, Any]]:
        with remote_call("backer contributions"):
            return rows(self._conn.client().rpc("get_backer_contributions", {"p_backer_id": backer_id}).execute())

    def backer_benefits(self, backer_id: str) -> List[Dict[str, Any]]:
        with remote_call("backer benefits"):
            res = (
                self._public("v_backer_benefits_detailed")
                .select("*")
                .eq("backer_id", backer_id)
                .neq("benefit_type", "recognition")
                .order("contribution_date", desc=True)
                .execute()
            )
        return rows(res)

    def backer_merchandise(self, backer_id: str) -> List[Dict[str, Any]]:
        with remote_call("backer merchandise"):
            res = (
                self._cf("benefit_merchandise_items")
                .select("*")
                .eq("backer_id", backer_id)
                .order("created_at", desc=True)
                .execute()
            )
        return rows(res)

    def backer_events(self, backer_id: str) -> List[Dict[str, Any]]:
        with remote_call("backer event access"):
            res = self._cf("benefit_event_access").select("*").eq("backer_id", backer_id).order("event_date").execute()
        return rows(res)

    def redeem_benefit(self, params: Dict[str, Any]) -> None:
        with remote_call("redeem benefit"):
            self._conn.client().rpc("redeem_benefit", params).execute()

    def refund_contribution(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        with remote_call("refund contribution"):
            return rows(self._conn.client().rpc("refund_contribution", params).execute())

    def recognition_items(self, status: Optional[str]) -> List[Dict[str, Any]]:
        query = self._cf("recognition_items").select(RECOGNITION_SELECT).order("created_at", desc=True)
        if status:
            query = query.eq("status", status)
        with remote_call("list recognition items"):
            return rows(query.execute())

    def update_recognition_item(self, item_id: str, fields: Dict[str, Any]) -> None:
        with remote_call("update recognition item"):
            self._cf("recognition_items").update(fields).eq("id", item_id).execute()
