from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol


class CrowdfundingRepository(Protocol):
    """Backer benefits, contributions and recognition items."""

    def pending_fulfillment(self, benefit_type: Optional[str]) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def fulfillment_summary(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def update_allocation(self, allocation_id: str, fields: Dict[str, Any]) -> None:
        raise NotImplementedError

    def backer_summaries(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def completed_contributions(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def find_backer_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def active_benefits(self, backer_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def usage_history(self, allocation_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def log_usage(self, payload: Dict[str, Any]) -> None:
        raise NotImplementedError

    def get_backer(self, backer_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def backer_contributions(self, backer_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def backer_benefits(self, backer_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def backer_merchandise(self, backer_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def backer_events(self, backer_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def redeem_benefit(self, params: Dict[str, Any]) -> None:
        raise NotImplementedError

    def refund_contribution(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def recognition_items(self, status: Optional[str]) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def update_recognition_item(self, item_id: str, fields: Dict[str, Any]) -> None:
        raise NotImplementedError
