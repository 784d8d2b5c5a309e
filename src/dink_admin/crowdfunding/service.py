from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import now_local, utc_iso
from ..common.validators import normalize_email, optional_text, parse_choice, parse_positive_int, require_non_empty
from ..core.constants import BACKERS_PAGE_SIZE, BENEFIT_TYPES
from ..core.enums import FulfillmentStatus, RecognitionStatus
from ..core.exceptions import NotFoundError, UpstreamError, ValidationError
from .model import BackerDetails, Benefit, Contribution, tier_breakdown
from .repository import CrowdfundingRepository

logger = logging.getLogger(__name__)

BACKER_FILTERS = {
    "unclaimed": "benefits_unclaimed",
    "claimed": "benefits_claimed",
    "expiring": "benefits_expiring_soon",
}

# Recognition status -> (column, stamps a full timestamp rather than a date)
RECOGNITION_STAMPS = {
    RecognitionStatus.ORDERED: ("order_date", False),
    RecognitionStatus.IN_PRODUCTION: ("production_started", False),
    RecognitionStatus.INSTALLED: ("installation_date", False),
    RecognitionStatus.VERIFIED: ("verified_at", True),
}

RECOGNITION_DETAIL_FIELDS = (
    "vendor",
    "order_number",
    "expected_completion",
    "installation_location",
    "installation_photo_url",
    "notes",
)


def _quantity(value: Any) -> float:
    try:
        quantity = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Please enter a valid quantity")
    if quantity <= 0:
        raise ValidationError("Please enter a valid quantity")
    return int(quantity) if quantity.is_integer() else quantity


class CrowdfundingService:
    """Backer benefit fulfillment and redemption."""

    def __init__(self, repo: CrowdfundingRepository):
        self._repo = repo

    # fulfillment
    def pending_fulfillment(self, benefit_type: Optional[str] = None) -> List[Dict[str, Any]]:
        benefit_type = optional_text(benefit_type)
        if benefit_type == "all":
            benefit_type = None
        if benefit_type and benefit_type not in BENEFIT_TYPES:
            raise ValidationError(f"Invalid benefit type: {benefit_type}")
        return self._repo.pending_fulfillment(benefit_type)

    def fulfillment_summary(self) -> List[Dict[str, Any]]:
        return self._repo.fulfillment_summary()

    def update_fulfillment(self, allocation_id: str, status: Any, notes: Any = None) -> None:
        choice = parse_choice(status, FulfillmentStatus, "status")
        if choice is None:
            raise ValidationError("Status is required")
        fields: Dict[str, Any] = {"fulfillment_status": choice.value, "fulfillment_notes": optional_text(notes)}
        if choice is FulfillmentStatus.FULFILLED:
            fields["fulfilled_at"] = utc_iso()
        self._repo.update_allocation(require_non_empty(allocation_id, "Allocation id is required"), fields)

    # contributors
    def contributors(self, *, search: Any = None, status: Any = None, page: Any = 1) -> Dict[str, Any]:
        term = (optional_text(search) or "").lower()
        column = BACKER_FILTERS.get(optional_text(status) or "all")
        backers = [
            b
            for b in self._repo.backer_summaries()
            if (not term or term in (b.get("email") or "").lower() or term in (b.get("first_name") or "").lower())
            and (column is None or (b.get(column) or 0) > 0)
        ]
        page = parse_positive_int(page, 1)
        start = (page - 1) * BACKERS_PAGE_SIZE
        return {
            "backers": backers[start : start + BACKERS_PAGE_SIZE],
            "total": len(backers),
            "page": page,
            "totalPages": -(-len(backers) // BACKERS_PAGE_SIZE),
        }

    def tiers(self):
        return tier_breakdown(self._repo.completed_contributions())

    # redemption
    def find_backer(self, email: Any) -> Optional[Dict[str, Any]]:
        """Look up a backer by email and attach active benefits; None when unknown."""
        backer = self._repo.find_backer_by_email(normalize_email(email))
        if not backer:
            return None
        benefits = [Benefit.from_row(r) for r in self._repo.active_benefits(backer["backer_id"])]
        return {"backer": backer, "benefits": benefits}

    def usage_history(self, allocation_id: str) -> List[Dict[str, Any]]:
        return self._repo.usage_history(allocation_id)

    def redeem(self, benefit: Benefit, *, quantity: Any, used_for: Any, notes: Any = None, staff_verified: bool = True) -> None:
        amount = _quantity(quantity)
        if benefit.remaining is not None and amount > benefit.remaining:
            raise ValidationError(f"Only {benefit.remaining:g} units remaining")
        purpose = optional_text(used_for)
        if not purpose:
            raise ValidationError("Please describe what the benefit was used for")
        self._repo.log_usage(
            {
                "allocation_id": benefit.id,
                "backer_id": benefit.backer_id,
                "quantity_used": amount,
                "used_for": purpose,
                "notes": optional_text(notes),
                "staff_verified": bool(staff_verified),
            }
        )
        logger.info("Redeemed %s of %s for backer %s", amount, benefit.benefit_type, benefit.backer_id)

    def redeem_for(self, backer_id: str, allocation_id: str, **kwargs) -> None:
        for row in self._repo.active_benefits(backer_id):
            benefit = Benefit.from_row(row)
            if benefit.id == str(allocation_id):
                return self.redeem(benefit, **kwargs)
        raise NotFoundError("Benefit not found")

    # backer details
    def backer_details(self, backer_id: str) -> BackerDetails:
        backer = self._repo.get_backer(backer_id)
        if not backer:
            raise NotFoundError("Backer not found")
        details = BackerDetails(
            backer=backer,
            contributions=[Contribution.from_rpc(r) for r in self._repo.backer_contributions(backer_id)],
            benefits=self._repo.backer_benefits(backer_id),
        )
        # Merchandise and event access tables are optional for older campaigns
        try:
            details.merchandise = self._repo.backer_merchandise(backer_id)
            details.events = self._repo.backer_events(backer_id)
        except UpstreamError:
            logger.warning("Could not load merchandise or events for backer %s", backer_id)
        return details

    def claim_benefit(self, allocation_id: str, quantity: Any, notes: Any = None) -> None:
        notes = optional_text(notes)
        self._repo.redeem_benefit(
            {
                "p_allocation_id": allocation_id,
                "p_quantity": _quantity(quantity),
                "p_used_for": notes or f"Claimed by staff on {now_local():%m/%d/%Y}",
                "p_staff_id": None,
                "p_notes": notes,
            }
        )

    def refund(self, contribution_id: str, reason: Any = None) -> str:
        result = self._repo.refund_contribution(
            {
                "p_contribution_id": contribution_id,
                "p_refund_reason": optional_text(reason) or "Admin refund",
                "p_staff_id": None,
                "p_stripe_refund_id": None,
            }
        )
        outcome = result[0] if result else {}
        if not outcome.get("success"):
            raise ValidationError(outcome.get("message") or "Refund failed")
        return outcome.get("message") or "Refund successful"

    # recognition
    def recognition_items(self, status: Any = RecognitionStatus.PENDING.value) -> List[Dict[str, Any]]:
        choice = parse_choice(status, RecognitionStatus, "status")
        return self._repo.recognition_items(choice.value if choice else None)

    def update_recognition_status(self, item_id: str, status: Any, notes: Any = None, allocation_id: Optional[str] = None) -> None:
        choice = parse_choice(status, RecognitionStatus, "status")
        if choice is None:
            raise ValidationError("Status is required")
        now = now_local()
        fields: Dict[str, Any] = {"status": choice.value, "notes": optional_text(notes), "updated_at": utc_iso()}
        if choice in RECOGNITION_STAMPS:
            column, full = RECOGNITION_STAMPS[choice]
            fields[column] = utc_iso() if full else now.date().isoformat()
        self._repo.update_recognition_item(item_id, fields)
        if choice is RecognitionStatus.VERIFIED and allocation_id:
            self._repo.update_allocation(
                allocation_id,
                {"fulfillment_status": FulfillmentStatus.FULFILLED.value, "fulfilled_at": utc_iso()},
            )

    def update_recognition_details(self, item_id: str, body: Dict[str, Any]) -> None:
        fields: Dict[str, Any] = {
            name: body[name] for name in RECOGNITION_DETAIL_FIELDS if optional_text(body.get(name))
        }
        if optional_text(body.get("actual_cost")):
            try:
                fields["actual_cost"] = float(body["actual_cost"])
            except (TypeError, ValueError):
                raise ValidationError("Actual cost must be a number")
        fields["updated_at"] = utc_iso()
        self._repo.update_recognition_item(item_id, fields)
