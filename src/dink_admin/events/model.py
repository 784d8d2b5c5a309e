from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Court:
    id: str
    court_number: Optional[int]
    name: Optional[str]
    surface_type: Optional[str]
    is_primary: bool = False
    environment: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any], *, is_primary: bool = False) -> "Court":
        return cls(
            id=str(row["id"]),
            court_number=row.get("court_number"),
            name=row.get("name"),
            surface_type=row.get("surface_type"),
            is_primary=is_primary,
            environment=row.get("environment"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "court_number": self.court_number,
            "name": self.name,
            "surface_type": self.surface_type,
            "is_primary": self.is_primary,
            "environment": self.environment,
        }


@dataclass(frozen=True)
class Event:
    """An `events` row with its court assignments flattened to `courts`."""

    id: str
    title: str
    event_type: str
    start_time: Optional[str]
    end_time: Optional[str]
    max_capacity: Optional[int]
    current_registrations: int
    is_published: bool
    is_cancelled: bool
    courts: List[Court] = field(default_factory=list)
    registrations: List[Dict[str, Any]] = field(default_factory=list)
    row: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Event":
        courts = []
        for ec in row.get("event_courts") or []:
            court = ec.get("court")
            if court:
                courts.append(Court.from_row(court, is_primary=bool(ec.get("is_primary", False))))
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            event_type=row.get("event_type") or "",
            start_time=row.get("start_time"),
            end_time=row.get("end_time"),
            max_capacity=row.get("max_capacity"),
            current_registrations=int(row.get("current_registrations") or 0),
            is_published=bool(row.get("is_published", False)),
            is_cancelled=bool(row.get("is_cancelled", False)),
            courts=courts,
            registrations=list(row.get("event_registrations") or []),
            row=row,
        )

    @property
    def court_ids(self) -> List[str]:
        return [c.id for c in self.courts]

    def to_dict(self, *, with_registrations: bool = False) -> Dict[str, Any]:
        data = {k: v for k, v in self.row.items() if k not in ("event_courts", "event_registrations")}
        data["courts"] = [c.to_dict() for c in self.courts]
        if with_registrations:
            data["registrations"] = self.registrations
        return data
