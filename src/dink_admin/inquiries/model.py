from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Inquiry:
    id: str
    first_name: str
    last_name: str
    email: str
    subject: Optional[str]
    message: str
    status: str
    priority: Optional[str]
    created_at: Optional[str]
    responded_at: Optional[str]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Inquiry":
        return cls(
            id=str(row["id"]),
            first_name=row.get("first_name") or "",
            last_name=row.get("last_name") or "",
            email=row.get("email") or "",
            subject=row.get("subject"),
            message=row.get("message") or "",
            status=row.get("status") or "new",
            priority=row.get("priority"),
            created_at=row.get("created_at"),
            responded_at=row.get("responded_at"),
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def reply_subject(self) -> str:
        return f"Re: {self.subject or 'Your inquiry'}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
            "status": self.status,
            "priority": self.priority,
            "created_at": self.created_at,
            "responded_at": self.responded_at,
        }
