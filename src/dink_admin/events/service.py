from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import now_utc, parse_timestamp, utc_iso
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_WAITLIST_CAPACITY, UPCOMING_EVENTS_DAYS
from ..core.enums import EventType
from ..core.exceptions import UpstreamError, ValidationError
from ..database.supabase_base import compact
from .model import Court, Event
from .repository import EventRepository

logger = logging.getLogger(__name__)

CREATE_FIELDS = (
    "title",
    "description",
    "event_type",
    "start_time",
    "end_time",
    "check_in_time",
    "max_capacity",
    "min_capacity",
    "skill_levels",
    "member_only",
    "price_member",
    "price_guest",
    "equipment_provided",
    "special_instructions",
    "template_id",
    "staff_notes",
    "setup_requirements",
    "instructor_id",
    "registration_deadline",
)

UPDATE_FIELDS = (
    "title",
    "description",
    "event_type",
    "start_time",
    "end_time",
    "max_capacity",
    "min_capacity",
    "skill_levels",
    "member_only",
    "price_member",
    "price_guest",
    "equipment_provided",
    "special_instructions",
)


def _court_assignments(event_id: str, court_ids: List[str]) -> List[Dict[str, Any]]:
    # the first court listed is the primary one
    return [
        {"event_id": event_id, "court_id": court_id, "is_primary": index == 0}
        for index, court_id in enumerate(court_ids)
    ]


def _iso_or_none(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return utc_iso(parse_timestamp(value))


class EventService:
    """Event CRUD, court assignment and check-in procedures."""

    def __init__(self, repo: EventRepository):
        self._repo = repo

    def list_events(self, *, start_date: Optional[str] = None, end_date: Optional[str] = None) -> List[Event]:
        rows = self._repo.list_events(start=_iso_or_none(start_date), end=_iso_or_none(end_date))
        return [Event.from_row(r) for r in rows]

    def get_event(self, event_id: str) -> Event:
        return Event.from_row(self._repo.get_event(event_id))

    def list_courts(self) -> List[Court]:
        return [Court.from_row(r) for r in self._repo.list_courts()]

    def list_templates(self) -> List[Dict[str, Any]]:
        return self._repo.list_templates()

    def create_event(self, form: Dict[str, Any]) -> Dict[str, Any]:
        if not form.get("title") or not form.get("event_type"):
            raise ValidationError("Title and event type are required")
        try:
            EventType(form["event_type"])
        except ValueError:
            raise ValidationError(f"Invalid event type: {form['event_type']}")

        court_ids = list(form.get("court_ids") or [])
        if not court_ids:
            try:
                courts = self._repo.list_courts()
            except UpstreamError as e:
                logger.warning("No court assigned, court lookup failed: %s", e)
                courts = []
            if courts:
                court_ids = [str(courts[0]["id"])]

        # unset columns are left out so the table defaults apply
        fields = compact({name: form.get(name) for name in CREATE_FIELDS})
        fields["waitlist_capacity"] = form.get("waitlist_capacity") or DEFAULT_WAITLIST_CAPACITY
        created = self._repo.insert_event(fields)

        if court_ids:
            try:
                self._repo.insert_event_courts(_court_assignments(str(created["id"]), court_ids))
            except UpstreamError:
                # roll back the event row so no court-less event is left behind
                self._repo.delete_event(str(created["id"]))
                raise
        return created

    def update_event(self, event_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if "event_type" in updates:
            try:
                EventType(updates["event_type"])
            except ValueError:
                raise ValidationError(f"Invalid event type: {updates['event_type']}")
        fields = {name: updates[name] for name in UPDATE_FIELDS if name in updates}
        fields["updated_at"] = utc_iso()
        updated = self._repo.update_event(event_id, fields)

        if updates.get("court_ids") is not None:
            self._repo.delete_event_courts(event_id)
            if updates["court_ids"]:
                self._repo.insert_event_courts(_court_assignments(event_id, list(updates["court_ids"])))
        return updated

    def delete_event(self, event_id: str) -> None:
        self._repo.delete_event(event_id)

    def cancel_event(self, event_id: str, reason: Optional[str] = None) -> Optional[Dict[str, Any]]:
        return self._repo.update_event(
            event_id,
            {"is_cancelled": True, "cancellation_reason": reason, "updated_at": utc_iso()},
        )

    def check_court_availability(
        self, start: str, end: str, exclude_event_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        start_iso = _iso_or_none(require_non_empty(start, "start is required"))
        end_iso = _iso_or_none(require_non_empty(end, "end is required"))
        courts = self.list_courts()
        events = [
            Event.from_row(r)
            for r in self._repo.overlapping_events(start=start_iso, end=end_iso, exclude_id=exclude_event_id)
        ]

        availability = []
        for court in courts:
            conflicts = [e.to_dict() for e in events if court.id in e.court_ids]
            availability.append({"court": court.to_dict(), "available": not conflicts, "conflicts": conflicts})
        return availability

    def upcoming_events(self, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        now = now or now_utc()
        until = now + timedelta(days=UPCOMING_EVENTS_DAYS)
        return self._repo.published_between(start=utc_iso(now), end=utc_iso(until))

    def checkin_status(self, event_id: str) -> Any:
        return self._repo.checkin_status(event_id)

    def check_in_player(self, event_id: str, player_id: Optional[str]) -> Any:
        player_id = require_non_empty(player_id, "Player ID is required")
        return self._repo.check_in_player(event_id, player_id)
