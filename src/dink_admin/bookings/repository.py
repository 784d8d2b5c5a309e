from __future__ import annotations

from typing import Any, Dict, List, Protocol


class BookingRepository(Protocol):
    def list_bookings(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        raise NotImplementedError
