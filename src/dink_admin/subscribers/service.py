from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from ..common.datetime_utils import now_utc, utc_iso
from ..common.validators import normalize_email, optional_text, parse_positive_int
from ..core.constants import SUBSCRIBERS_DEFAULT_LIMIT
from ..core.enums import SubscriberStatus
from ..core.exceptions import ConflictError
from ..database.supabase_base import page_range
from .model import SubscriberCounts
from .repository import SubscriberRepository

SORTABLE_COLUMNS = ("created_at", "email", "first_name", "last_name", "status", "subscribed_at")


class SubscriberService:
    def __init__(self, repo: SubscriberRepository):
        self._repo = repo

    def list_subscribers(
        self,
        *,
        page: Any = 1,
        limit: Any = SUBSCRIBERS_DEFAULT_LIMIT,
        search: Optional[str] = None,
        is_active: str = "true",
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Dict[str, Any]:
        page = parse_positive_int(page, 1)
        limit = parse_positive_int(limit, SUBSCRIBERS_DEFAULT_LIMIT)
        active = {"true": True, "false": False}.get(is_active or "true")
        start, end = page_range(page, limit)

        data, count = self._repo.search(
            search=optional_text(search),
            active=active,
            sort_by=sort_by if sort_by in SORTABLE_COLUMNS else "created_at",
            descending=sort_order != "asc",
            start=start,
            end=end,
        )
        return {
            "success": True,
            "data": data,
            "pagination": {"total": count, "page": page, "limit": limit, "totalPages": -(-count // limit)},
        }

    def subscribe(self, body: Dict[str, Any]) -> Dict[str, Any]:
        email = normalize_email(body.get("email"))
        existing = self._repo.get_by_email(email)
        if existing:
            if existing.get("status") == SubscriberStatus.ACTIVE.value:
                raise ConflictError("Email already subscribed")
            data = self._repo.update(
                str(existing["id"]),
                {"status": SubscriberStatus.ACTIVE.value, "subscribed_at": utc_iso(), "unsubscribed_at": None},
            )
            return {"success": True, "message": "Subscription reactivated successfully", "data": data}

        data = self._repo.create(
            {
                "email": email,
                "first_name": body.get("firstName") or body.get("first_name"),
                "last_name": body.get("lastName") or body.get("last_name"),
                "source": body.get("source") or "website",
                "status": SubscriberStatus.ACTIVE.value,
            }
        )
        return {"success": True, "message": "Subscribed successfully", "data": data}

    def counts(self, now: Optional[datetime] = None) -> SubscriberCounts:
        now = now or now_utc()
        last_week = utc_iso(now - timedelta(days=7))
        two_weeks_ago = utc_iso(now - timedelta(days=14))
        return SubscriberCounts(
            active=self._repo.count(active=True),
            inactive=self._repo.count(active=False),
            new_this_week=self._repo.count(created_from=last_week),
            new_last_week=self._repo.count(created_from=two_weeks_ago, created_before=last_week),
        )
