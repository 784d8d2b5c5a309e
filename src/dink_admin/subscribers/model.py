from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class SubscriberCounts:
    active: int
    inactive: int
    new_this_week: int
    new_last_week: int

    @property
    def total(self) -> int:
        return self.active + self.inactive

    @property
    def growth_rate(self) -> str:
        """Week-over-week growth as shown on the marketing dashboard, e.g. "+12.5%"."""
        if self.new_last_week > 0:
            rate = f"{(self.new_this_week - self.new_last_week) / self.new_last_week * 100:.1f}"
        elif self.new_this_week > 0:
            rate = "100"
        else:
            rate = "0"
        sign = "+" if float(rate) > 0 else ""
        return f"{sign}{rate}%"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "active": self.active,
            "inactive": self.inactive,
            "newThisWeek": self.new_this_week,
            "newLastWeek": self.new_last_week,
            "growthRate": self.growth_rate,
        }
