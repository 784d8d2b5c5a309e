from __future__ import annotations

import pytest

from dink_admin.core.exceptions import NotFoundError, UpstreamError, ValidationError
from dink_admin.crowdfunding.model import Benefit, benefit_label, tier_breakdown
from dink_admin.crowdfunding.service import CrowdfundingService


class InMemoryCrowdfunding:
    def __init__(self, backers=(), benefits=(), refund=None, fail_merch=False):
        self.backers = list(backers)
        self.benefits = list(benefits)
        self.refund_result = refund or []
        self.fail_merch = fail_merch
        self.usage = []
        self.allocations = {}
        self.recognition = {}
        self.redeemed = []

    def pending_fulfillment(self, benefit_type):
        return [{"benefit_type": benefit_type}]

    def fulfillment_summary(self):
        return []

    def update_allocation(self, allocation_id, fields):
        self.allocations[allocation_id] = fields

    def backer_summaries(self):
        return self.backers

    def completed_contributions(self):
        return []

    def find_backer_by_email(self, email):
        return next((b for b in self.backers if b["email"] == email), None)

    def active_benefits(self, backer_id):
        return [b for b in self.benefits if b["backer_id"] == backer_id]

    def usage_history(self, allocation_id):
        return []

    def log_usage(self, payload):
        self.usage.append(payload)

    def get_backer(self, backer_id):
        return next((b for b in self.backers if b["backer_id"] == backer_id), None)

    def backer_contributions(self, backer_id):
        return [{"id": "c1", "amount": 100, "status": "completed"}]

    def backer_benefits(self, backer_id):
        return []

    def backer_merchandise(self, backer_id):
        if self.fail_merch:
            raise UpstreamError('relation "merchandise_items" does not exist')
        return []

    def backer_events(self, backer_id):
        return []

    def redeem_benefit(self, params):
        self.redeemed.append(params)

    def refund_contribution(self, params):
        return self.refund_result

    def recognition_items(self, status):
        return []

    def update_recognition_item(self, item_id, fields):
        self.recognition[item_id] = fields


def _benefit(remaining=3):
    return Benefit.from_row(
        {"allocation_id": "a1", "backer_id": "b1", "benefit_type": "court_time_hours", "remaining": remaining}
    )


def test_benefit_label_known_and_fallback():
    assert benefit_label("court_time_hours") != "court_time_hours"
    assert benefit_label("free_smoothie") == "Free Smoothie"


def test_tier_breakdown_groups_and_sorts():
    rows = tier_breakdown(
        [
            {"amount": 100, "contribution_tiers": {"name": "Founder", "amount": 100}, "campaign_types": {"name": "Build"}},
            {"amount": 100, "contribution_tiers": {"name": "Founder", "amount": 100}, "campaign_types": {"name": "Build"}},
            {"amount": 250, "contribution_tiers": None, "campaign_types": None},
        ]
    )

    assert [(r.tier_name, r.campaign_name, r.contribution_count, r.total_amount) for r in rows] == [
        ("Custom Contribution", "Campaign", 1, 250),
        ("Founder", "Build", 2, 200),
    ]


def test_pending_fulfillment_validates_type():
    svc = CrowdfundingService(InMemoryCrowdfunding())

    assert svc.pending_fulfillment("all") == [{"benefit_type": None}]
    with pytest.raises(ValidationError):
        svc.pending_fulfillment("yacht")


@pytest.mark.parametrize("quantity", [0, -1, "abc", None])
def test_redeem_rejects_bad_quantity(quantity):
    with pytest.raises(ValidationError) as exc:
        CrowdfundingService(InMemoryCrowdfunding()).redeem(_benefit(), quantity=quantity, used_for="x")
    assert str(exc.value) == "Please enter a valid quantity"


def test_redeem_rejects_more_than_remaining():
    with pytest.raises(ValidationError) as exc:
        CrowdfundingService(InMemoryCrowdfunding()).redeem(_benefit(2), quantity=3, used_for="x")
    assert str(exc.value) == "Only 2 units remaining"


def test_redeem_requires_purpose():
    with pytest.raises(ValidationError):
        CrowdfundingService(InMemoryCrowdfunding()).redeem(_benefit(), quantity=1, used_for=" ")


def test_redeem_unlimited_logs_usage():
    repo = InMemoryCrowdfunding()
    CrowdfundingService(repo).redeem(_benefit(None), quantity="2", used_for="Court 3, 2 hours")

    assert repo.usage == [
        {
            "allocation_id": "a1",
            "backer_id": "b1",
            "quantity_used": 2,
            "used_for": "Court 3, 2 hours",
            "notes": None,
            "staff_verified": True,
        }
    ]


def test_redeem_for_unknown_allocation():
    with pytest.raises(NotFoundError):
        CrowdfundingService(InMemoryCrowdfunding()).redeem_for("b1", "zzz", quantity=1, used_for="x")


def test_find_backer_normalizes_email():
    repo = InMemoryCrowdfunding(
        backers=[{"backer_id": "b1", "email": "fan@x.com"}],
        benefits=[{"allocation_id": "a1", "backer_id": "b1", "remaining": 1}],
    )
    found = CrowdfundingService(repo).find_backer(" Fan@X.com ")

    assert found["backer"]["backer_id"] == "b1"
    assert [b.id for b in found["benefits"]] == ["a1"]
    assert CrowdfundingService(repo).find_backer("other@x.com") is None


def test_contributors_filters_and_pages():
    backers = [
        {"email": f"b{i}@x.com", "first_name": "Fan", "benefits_unclaimed": i % 2}
        for i in range(45)
    ]
    result = CrowdfundingService(InMemoryCrowdfunding(backers=backers)).contributors(status="unclaimed", page=2)

    assert result["total"] == 22
    assert result["totalPages"] == 2
    assert len(result["backers"]) == 2


def test_backer_details_tolerates_missing_merchandise():
    repo = InMemoryCrowdfunding(backers=[{"backer_id": "b1", "email": "x"}], fail_merch=True)
    details = CrowdfundingService(repo).backer_details("b1")

    assert details.merchandise == []
    assert details.contributions[0].refundable is True


def test_claim_benefit_default_note():
    repo = InMemoryCrowdfunding()
    CrowdfundingService(repo).claim_benefit("a1", 1)

    assert repo.redeemed[0]["p_used_for"].startswith("Claimed by staff on ")
    assert repo.redeemed[0]["p_notes"] is None


def test_refund_failure_message():
    repo = InMemoryCrowdfunding(refund=[{"success": False, "message": "Already refunded"}])
    with pytest.raises(ValidationError) as exc:
        CrowdfundingService(repo).refund("c1")
    assert str(exc.value) == "Already refunded"


def test_refund_success():
    repo = InMemoryCrowdfunding(refund=[{"success": True, "message": "Refunded $100"}])
    assert CrowdfundingService(repo).refund("c1", "") == "Refunded $100"


def test_recognition_verified_stamps_and_fulfills_allocation():
    repo = InMemoryCrowdfunding()
    CrowdfundingService(repo).update_recognition_status("r1", "verified", allocation_id="a1")

    assert repo.recognition["r1"]["status"] == "verified"
    assert "T" in repo.recognition["r1"]["verified_at"]
    assert repo.allocations["a1"]["fulfillment_status"] == "fulfilled"


def test_recognition_ordered_stamps_date_only():
    repo = InMemoryCrowdfunding()
    CrowdfundingService(repo).update_recognition_status("r1", "ordered", allocation_id="a1")

    assert len(repo.recognition["r1"]["order_date"]) == 10
    assert repo.allocations == {}


def test_recognition_details_require_numeric_cost():
    with pytest.raises(ValidationError):
        CrowdfundingService(InMemoryCrowdfunding()).update_recognition_details("r1", {"actual_cost": "lots"})
