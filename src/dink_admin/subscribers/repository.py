from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Tuple


class SubscriberRepository(Protocol):
    """`launch_subscribers` table."""

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
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def update(self, subscriber_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def count(self, *, active: Optional[bool] = None, created_from: Optional[str] = None, created_before: Optional[str] = None) -> int:
        raise NotImplementedError
