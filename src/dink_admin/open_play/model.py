from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


@dataclass(frozen=True)
class ScheduleBlock:
    """A recurring weekly open play block (day_of_week 0 = Sunday)."""

    id: str
    name: str
    day_of_week: int
    start_time: str
    end_time: str
    session_type: str
    is_active: bool
    max_capacity: Optional[int]
    court_allocations: List[Dict[str, Any]] = field(default_factory=list)
    row: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ScheduleBlock":
        allocations = sorted(row.get("court_allocations") or [], key=lambda a: a.get("sort_order") or 0)
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            day_of_week=int(row.get("day_of_week") or 0),
            start_time=str(row.get("start_time") or ""),
            end_time=str(row.get("end_time") or ""),
            session_type=row.get("session_type") or "",
            is_active=bool(row.get("is_active", True)),
            max_capacity=row.get("max_capacity"),
            court_allocations=allocations,
            row=row,
        )

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week % 7]
