from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..core.enums import EmailStatus

SENDABLE_STATUSES = (EmailStatus.DRAFT, EmailStatus.REVIEWED, EmailStatus.FAILED)
DELETABLE_STATUSES = (EmailStatus.DRAFT, EmailStatus.FAILED)


@dataclass(frozen=True)
class MarketingEmail:
    id: str
    subject: str
    html_content: str
    text_content: Optional[str]
    status: str
    created_at: Optional[str]
    row: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "MarketingEmail":
        return cls(
            id=str(row["id"]),
            subject=row.get("subject") or "",
            html_content=row.get("html_content") or "",
            text_content=row.get("text_content"),
            status=row.get("status") or EmailStatus.DRAFT.value,
            created_at=row.get("created_at"),
            row=row,
        )

    @property
    def is_sendable(self) -> bool:
        return self.status in {s.value for s in SENDABLE_STATUSES}

    @property
    def is_deletable(self) -> bool:
        return self.status in {s.value for s in DELETABLE_STATUSES}


def personalize(content: Optional[str], values: Mapping[str, str]) -> Optional[str]:
    """Replace `{{key}}` placeholders; unknown placeholders stay as they are."""
    if content is None:
        return None
    for key, value in values.items():
        content = content.replace("{{" + key + "}}", value)
    return content


def percent(part: float, whole: float) -> str:
    """Share of `whole` as a two-decimal string, "0.00" when `whole` is empty."""
    return f"{part / whole * 100:.2f}" if whole > 0 else "0.00"
