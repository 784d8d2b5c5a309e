from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Employee:
    id: str
    auth_id: Optional[str]
    first_name: str
    middle_name: Optional[str]
    last_name: str
    email: Optional[str]
    phone: Optional[str]
    position_title: Optional[str]
    role: Optional[str]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Employee":
        return cls(
            id=str(row["id"]),
            auth_id=row.get("auth_id"),
            first_name=row.get("first_name") or "",
            middle_name=row.get("middle_name"),
            last_name=row.get("last_name") or "",
            email=row.get("email"),
            phone=row.get("phone"),
            position_title=row.get("position_title"),
            role=row.get("role"),
        )

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.middle_name, self.last_name) if p)
