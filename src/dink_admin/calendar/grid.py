"""Month, week and day layouts for the booking calendar.

Weeks start on Sunday. Event days are taken in the facility timezone so an
evening session never slides onto the next UTC day.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List

from ..common.datetime_utils import local_date
from ..core.constants import DEFAULT_EVENT_COLOR, EVENT_COLORS
from ..events.model import Court, Event

DAY_START_HOUR = 6
DAY_END_HOUR = 22


def _sunday_on_or_before(day: date) -> date:
    # date.weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def month_grid(day: date) -> List[List[date]]:
    first = day.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    last = next_month - timedelta(days=1)

    start = _sunday_on_or_before(first)
    end = last + timedelta(days=(5 - last.weekday()) % 7)

    days = [start + timedelta(days=i) for i in range((end - start).days + 1)]
    return [days[i:i + 7] for i in range(0, len(days), 7)]


def week_days(day: date) -> List[date]:
    start = _sunday_on_or_before(day)
    return [start + timedelta(days=i) for i in range(7)]


def day_hours(start: int = DAY_START_HOUR, end: int = DAY_END_HOUR) -> List[int]:
    return list(range(start, end))


def events_for_day(events: Iterable[Event], day: date) -> List[Event]:
    return [e for e in events if e.start_time and local_date(e.start_time) == day]


def event_color(event_type: str) -> str:
    return EVENT_COLORS.get(event_type, DEFAULT_EVENT_COLOR)


@dataclass
class CourtDay:
    court: Court
    bookings: List[Event] = field(default_factory=list)


def court_overview(courts: Iterable[Court], events: Iterable[Event], day: date) -> Dict[str, List[CourtDay]]:
    """Each court's events on `day`, split into indoor and outdoor, by court number."""
    todays = sorted(events_for_day(events, day), key=lambda e: e.start_time or "")
    groups: Dict[str, List[CourtDay]] = {"indoor": [], "outdoor": []}
    for court in sorted(courts, key=lambda c: c.court_number or 0):
        bookings = [e for e in todays if court.id in e.court_ids]
        groups["outdoor" if court.environment == "outdoor" else "indoor"].append(CourtDay(court, bookings))
    return groups
