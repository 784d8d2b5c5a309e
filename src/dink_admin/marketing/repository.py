from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Tuple


class MarketingRepository(Protocol):
    """Marketing email drafts, analytics views and the email edge function."""

    def list_emails(self, *, status: Optional[str], search: Optional[str], start: int, end: int) -> Tuple[List[Dict[str, Any]], int]:
        raise NotImplementedError

    def get_email(self, email_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def update_email(self, email_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def delete_email(self, email_id: str) -> None:
        raise NotImplementedError

    def count_verified_subscribers(self) -> int:
        raise NotImplementedError

    def generate_email(self, body: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def send_email(self, body: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def campaign_overview(self, limit: int) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def email_analytics(self, limit: int) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def top_performers(self, limit: int) -> List[Dict[str, Any]]:
        raise NotImplementedError
