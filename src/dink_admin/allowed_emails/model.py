from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AllowedEmail:
    """A pre-authorization record that lets a staff member sign up or log in."""

    id: str
    email: str
    first_name: Optional[str]
    last_name: Optional[str]
    role: Optional[str]
    is_active: bool
    notes: Optional[str] = None
    used_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    password_hash: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "AllowedEmail":
        return cls(
            id=str(row.get("id", "")),
            email=row["email"],
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            role=row.get("role"),
            is_active=bool(row.get("is_active", True)),
            notes=row.get("notes"),
            used_at=row.get("used_at"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
            password_hash=row.get("password_hash"),
        )

    @property
    def display_name(self) -> Optional[str]:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or None

    @property
    def is_used(self) -> bool:
        return self.used_at is not None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("password_hash", None)
        return data
