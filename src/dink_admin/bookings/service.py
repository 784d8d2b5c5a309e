from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..common.datetime_utils import local_datetime, now_local, utc_iso
from ..common.validators import optional_text, parse_choice
from ..core.enums import BookingSource, PaymentStatus
from ..database.supabase_base import compact
from .repository import BookingRepository


def _day_start(value: Optional[str]) -> Optional[str]:
    value = optional_text(value)
    return utc_iso(local_datetime(value, "00:00")) if value else None


class BookingService:
    def __init__(self, repo: BookingRepository):
        self._repo = repo

    def list_bookings(
        self,
        *,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        booking_source: Optional[str] = None,
        payment_status: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Only filters that were given are sent; "all" means no filter.

        `date_from` defaults to today in facility time; pass "" to list past bookings too.
        """
        if date_from is None:
            date_from = now_local().date().isoformat()
        source = parse_choice(booking_source, BookingSource, "booking source")
        status = parse_choice(payment_status, PaymentStatus, "payment status")
        params = compact(
            {
                "p_date_from": _day_start(date_from),
                "p_date_to": _day_start(date_to),
                "p_booking_source": source.value if source else None,
                "p_payment_status": status.value if status else None,
            }
        )
        return self._repo.list_bookings(params)

    @staticmethod
    def totals(bookings: List[Dict[str, Any]]) -> Dict[str, Any]:
        paid = [b for b in bookings if b.get("payment_status") == PaymentStatus.COMPLETED.value]
        return {
            "count": len(bookings),
            "paid": len(paid),
            "revenue": round(sum(float(b.get("amount_paid") or 0) for b in paid), 2),
        }
