from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Member:
    """A player row as returned by `get_all_members` or the players table."""

    id: str
    first_name: str
    last_name: str
    email: Optional[str]
    phone: Optional[str]
    membership_level: str
    dupr_rating: Optional[float]
    dupr_verified: bool
    is_active: bool
    created_at: Optional[str]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Member":
        rating = row.get("dupr_rating")
        return cls(
            id=str(row["id"]),
            first_name=row.get("first_name") or "",
            last_name=row.get("last_name") or "",
            email=row.get("email"),
            phone=row.get("phone"),
            membership_level=row.get("membership_level") or "guest",
            dupr_rating=float(rating) if rating is not None else None,
            dupr_verified=bool(row.get("dupr_verified", False)),
            is_active=bool(row.get("is_active", True)),
            created_at=row.get("created_at"),
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class MemberPage:
    members: List[Member]
    total: int
    page: int
    page_size: int
    total_pages: int
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_rpc(cls, data: Optional[Dict[str, Any]], *, page: int, page_size: int) -> "MemberPage":
        data = data or {}
        total = int(data.get("total") or 0)
        return cls(
            members=[Member.from_row(r) for r in data.get("members") or []],
            total=total,
            page=int(data.get("page") or page),
            page_size=int(data.get("page_size") or page_size),
            total_pages=int(data.get("total_pages") or -(-total // page_size)),
            raw=data,
        )


@dataclass(frozen=True)
class GuestPage:
    guests: List[Member]
    total: int
    page: int
    total_pages: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "guests": [asdict(g) for g in self.guests],
            "total": self.total,
            "page": self.page,
            "total_pages": self.total_pages,
        }
