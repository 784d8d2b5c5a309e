from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date, utc_iso
from ..core.constants import DEFAULT_OPEN_PLAY_CAPACITY, OPEN_PLAY_CLONE_DAYS
from ..core.exceptions import NotFoundError, UpstreamError, ValidationError
from .model import ScheduleBlock
from .repository import ScheduleBlockRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "days_of_week", "start_time", "end_time", "session_type", "effective_from", "effective_until")
ALLOCATION_FIELDS = ("court_id", "skill_level_min", "skill_level_max", "skill_level_label", "is_mixed_level", "sort_order")


def _dates_between(start: date, end: date) -> List[date]:
    days = (end - start).days
    return [start + timedelta(days=i) for i in range(days + 1)]


def _require_ids(block_ids: Optional[Sequence[str]]) -> List[str]:
    ids = [str(b) for b in (block_ids or []) if b]
    if not ids:
        raise ValidationError("At least one schedule block is required")
    return ids


class OpenPlayService:
    """Weekly open play schedule: blocks, court allocations and date overrides."""

    def __init__(self, repo: ScheduleBlockRepository):
        self._repo = repo

    def list_blocks(self, *, include_inactive: bool = False) -> List[ScheduleBlock]:
        return [ScheduleBlock.from_row(r) for r in self._repo.list_blocks(include_inactive=include_inactive)]

    def list_courts(self) -> List[Dict[str, Any]]:
        return self._repo.list_courts()

    def create_blocks(self, form: Dict[str, Any]) -> Any:
        missing = [name for name in REQUIRED_FIELDS if form.get(name) in (None, "", [])]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        try:
            days = [int(d) for d in form["days_of_week"]]
        except (TypeError, ValueError):
            raise ValidationError("days_of_week must be a list of weekday numbers")
        if any(d < 0 or d > 6 for d in days):
            raise ValidationError("days_of_week must be between 0 (Sunday) and 6 (Saturday)")
        if parse_iso_date(form["effective_until"]) < parse_iso_date(form["effective_from"]):
            raise ValidationError("effective_until must not be before effective_from")

        allocations = [
            {k: a.get(k) for k in ALLOCATION_FIELDS if k in a} for a in form.get("court_allocations") or []
        ]
        params = {
            "p_name": form["name"],
            "p_days_of_week": days,
            "p_start_time": form["start_time"],
            "p_end_time": form["end_time"],
            "p_session_type": form["session_type"],
            "p_court_allocations": allocations,
            "p_effective_from": form["effective_from"],
            "p_effective_until": form["effective_until"],
            "p_description": form.get("description") or None,
            "p_special_event_name": form.get("special_event_name") or None,
            "p_dedicated_skill_min": form.get("dedicated_skill_min") or None,
            "p_dedicated_skill_max": form.get("dedicated_skill_max") or None,
            "p_dedicated_skill_label": form.get("dedicated_skill_label") or None,
            "p_price_member": form.get("price_member") or 0,
            "p_price_guest": form.get("price_guest") or 0,
            "p_max_capacity": form.get("max_capacity") or DEFAULT_OPEN_PLAY_CAPACITY,
            "p_special_instructions": form.get("special_instructions") or None,
        }
        return self._repo.create_blocks(params)

    def toggle(self, block_id: str, is_active: bool) -> Optional[Dict[str, Any]]:
        updated = self._repo.set_active([block_id], is_active=bool(is_active), updated_at=utc_iso())
        return updated[0] if updated else None

    def bulk_toggle(self, block_ids: Sequence[str], is_active: bool) -> List[Dict[str, Any]]:
        return self._repo.set_active(_require_ids(block_ids), is_active=bool(is_active), updated_at=utc_iso())

    def clone(self, block_id: str, target_day_of_week: int, new_start_time: Optional[str] = None) -> Any:
        source = self._repo.get_block(block_id)
        if not source:
            raise NotFoundError("Failed to fetch original block")

        today = now_local().date()
        return self.create_blocks(
            {
                **source,
                "name": f"{source.get('name')} (Copy)",
                "days_of_week": [int(target_day_of_week)],
                "start_time": new_start_time or source.get("start_time"),
                "effective_from": today.isoformat(),
                "effective_until": (today + timedelta(days=OPEN_PLAY_CLONE_DAYS)).isoformat(),
                "court_allocations": source.get("court_allocations") or [],
            }
        )

    def create_date_range_override(
        self,
        block_ids: Sequence[str],
        start_date: str,
        end_date: str,
        *,
        is_cancelled: bool,
        reason: str,
    ) -> List[Any]:
        """One override per block and day; a failed day is logged and skipped."""
        ids = _require_ids(block_ids)
        days = _dates_between(parse_iso_date(start_date), parse_iso_date(end_date))

        results = []
        for block_id in ids:
            for day in days:
                try:
                    results.append(
                        self._repo.create_override(
                            {
                                "p_block_id": block_id,
                                "p_override_date": day.isoformat(),
                                "p_is_cancelled": bool(is_cancelled),
                                "p_reason": reason,
                                "p_replacement_details": None,
                            }
                        )
                    )
                except UpstreamError as e:
                    logger.error("Error creating override for %s on %s: %s", block_id, day, e)
        return results

    def bulk_delete(self, block_ids: Sequence[str]) -> Any:
        return self._repo.bulk_delete(_require_ids(block_ids))
