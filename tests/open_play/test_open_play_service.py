from __future__ import annotations

import pytest

from dink_admin.core.exceptions import NotFoundError, UpstreamError, ValidationError
from dink_admin.open_play.model import ScheduleBlock
from dink_admin.open_play.service import OpenPlayService


class InMemoryBlocks:
    def __init__(self, blocks=(), fail_dates=()):
        self.blocks = {b["id"]: b for b in blocks}
        self.created = []
        self.overrides = []
        self.fail_dates = set(fail_dates)

    def list_blocks(self, *, include_inactive):
        return [b for b in self.blocks.values() if include_inactive or b.get("is_active", True)]

    def get_block(self, block_id):
        return self.blocks.get(block_id)

    def create_blocks(self, params):
        self.created.append(params)
        return {"success": True}

    def set_active(self, block_ids, *, is_active, updated_at):
        return [{"id": b, "is_active": is_active} for b in block_ids]

    def create_override(self, params):
        if params["p_override_date"] in self.fail_dates:
            raise UpstreamError("override already exists")
        self.overrides.append(params)
        return params

    def bulk_delete(self, block_ids):
        return {"deleted": len(block_ids)}

    def list_courts(self):
        return []


FORM = {
    "name": "Morning Open Play",
    "days_of_week": ["1", "3"],
    "start_time": "08:00",
    "end_time": "10:00",
    "session_type": "mixed_levels",
    "effective_from": "2024-05-01",
    "effective_until": "2024-08-01",
}


def test_create_requires_fields():
    with pytest.raises(ValidationError) as exc:
        OpenPlayService(InMemoryBlocks()).create_blocks({**FORM, "name": "", "start_time": None})
    assert str(exc.value) == "Missing required fields: name, start_time"


def test_create_rejects_bad_weekday_and_reversed_range():
    svc = OpenPlayService(InMemoryBlocks())
    with pytest.raises(ValidationError):
        svc.create_blocks({**FORM, "days_of_week": [7]})
    with pytest.raises(ValidationError):
        svc.create_blocks({**FORM, "effective_until": "2024-04-01"})


def test_create_applies_defaults():
    repo = InMemoryBlocks()
    OpenPlayService(repo).create_blocks({**FORM, "court_allocations": [{"court_id": "c1", "bogus": 1}]})

    params = repo.created[0]
    assert params["p_days_of_week"] == [1, 3]
    assert params["p_max_capacity"] == 20
    assert params["p_price_member"] == 0
    assert params["p_court_allocations"] == [{"court_id": "c1"}]


def test_clone_copies_onto_new_day():
    repo = InMemoryBlocks([{"id": "b1", **FORM, "days_of_week": [1]}])
    OpenPlayService(repo).clone("b1", 5, "18:00")

    params = repo.created[0]
    assert params["p_name"] == "Morning Open Play (Copy)"
    assert params["p_days_of_week"] == [5]
    assert params["p_start_time"] == "18:00"


def test_clone_missing_block():
    with pytest.raises(NotFoundError):
        OpenPlayService(InMemoryBlocks()).clone("nope", 2)


def test_override_per_block_and_day_skips_failures():
    repo = InMemoryBlocks(fail_dates={"2024-07-04"})
    results = OpenPlayService(repo).create_date_range_override(
        ["b1", "b2"], "2024-07-03", "2024-07-05", is_cancelled=True, reason="Holiday"
    )

    assert len(results) == 4
    assert {o["p_override_date"] for o in repo.overrides} == {"2024-07-03", "2024-07-05"}


def test_bulk_actions_require_ids():
    with pytest.raises(ValidationError):
        OpenPlayService(InMemoryBlocks()).bulk_delete([])


def test_block_allocations_sorted():
    block = ScheduleBlock.from_row(
        {"id": "b1", "day_of_week": 0, "court_allocations": [{"court_id": "2", "sort_order": 2}, {"court_id": "1", "sort_order": 1}]}
    )
    assert [a["court_id"] for a in block.court_allocations] == ["1", "2"]
    assert block.day_name == "Sunday"
