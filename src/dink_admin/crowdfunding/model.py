from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..core.constants import BENEFIT_TYPES


def benefit_label(benefit_type: str) -> str:
    if benefit_type in BENEFIT_TYPES:
        return BENEFIT_TYPES[benefit_type]
    return " ".join(word.capitalize() for word in (benefit_type or "").split("_"))


@dataclass(frozen=True)
class Benefit:
    """An active allocation as listed on the redemption screen."""

    id: str
    backer_id: str
    email: str
    first_name: str
    last_initial: str
    benefit_type: str
    benefit_name: str
    total_allocated: Optional[float]
    remaining: Optional[float]
    valid_until: Optional[str]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Benefit":
        return cls(
            id=str(row.get("id") or row.get("allocation_id")),
            backer_id=str(row.get("backer_id") or ""),
            email=row.get("email") or "",
            first_name=row.get("first_name") or "",
            last_initial=row.get("last_initial") or "",
            benefit_type=row.get("benefit_type") or "",
            benefit_name=row.get("benefit_name") or "",
            total_allocated=row.get("total_allocated"),
            remaining=row.get("remaining"),
            valid_until=row.get("valid_until"),
        )

    @property
    def unlimited(self) -> bool:
        return self.remaining is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "backer_id": self.backer_id,
            "email": self.email,
            "first_name": self.first_name,
            "last_initial": self.last_initial,
            "benefit_type": self.benefit_type,
            "benefit_name": self.benefit_name,
            "total_allocated": self.total_allocated,
            "remaining": self.remaining,
            "valid_until": self.valid_until,
        }


@dataclass
class TierBreakdown:
    tier_name: str
    tier_amount: float
    campaign_name: str
    contribution_count: int = 0
    total_amount: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier_name": self.tier_name,
            "tier_amount": self.tier_amount,
            "campaign_name": self.campaign_name,
            "contribution_count": self.contribution_count,
            "total_amount": self.total_amount,
        }


def tier_breakdown(contributions: Iterable[Dict[str, Any]]) -> List[TierBreakdown]:
    """Group completed contributions by (tier, campaign), largest total first."""
    groups: Dict[tuple, TierBreakdown] = {}
    for c in contributions:
        tier = c.get("contribution_tiers") or {}
        campaign = c.get("campaign_types") or {}
        amount = c.get("amount") or 0
        name = tier.get("name") or "Custom Contribution"
        campaign_name = campaign.get("name") or "Campaign"
        key = (name, campaign_name)
        if key not in groups:
            groups[key] = TierBreakdown(name, tier.get("amount") or amount, campaign_name)
        groups[key].contribution_count += 1
        groups[key].total_amount += amount
    return sorted(groups.values(), key=lambda t: t.total_amount, reverse=True)


@dataclass(frozen=True)
class Contribution:
    contribution_id: str
    contribution_date: Optional[str]
    tier_name: str
    contribution_amount: float
    campaign_name: str
    status: str
    refunded_at: Optional[str]

    @classmethod
    def from_rpc(cls, row: Dict[str, Any]) -> "Contribution":
        return cls(
            contribution_id=str(row["id"]),
            contribution_date=row.get("completed_at"),
            tier_name=row.get("tier_name") or "Custom",
            contribution_amount=row.get("amount") or 0,
            campaign_name=row.get("campaign_name") or "Campaign",
            status=row.get("status") or "",
            refunded_at=row.get("refunded_at"),
        )

    @property
    def refundable(self) -> bool:
        return self.status == "completed" and not self.refunded_at


@dataclass
class BackerDetails:
    backer: Dict[str, Any]
    contributions: List[Contribution] = field(default_factory=list)
    benefits: List[Dict[str, Any]] = field(default_factory=list)
    merchandise: List[Dict[str, Any]] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "backer": self.backer,
            "contributions": [c.__dict__ for c in self.contributions],
            "benefits": self.benefits,
            "merchandise": self.merchandise,
            "events": self.events,
        }
