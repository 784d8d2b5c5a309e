from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol


class EventRepository(Protocol):
    """Events, court assignments and the check-in procedures."""

    def list_events(self, *, start: Optional[str], end: Optional[str]) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def get_event(self, event_id: str) -> Dict[str, Any]:
        raise NotImplementedError

    def insert_event(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def update_event(self, event_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def delete_event(self, event_id: str) -> None:
        raise NotImplementedError

    def delete_event_courts(self, event_id: str) -> None:
        raise NotImplementedError

    def insert_event_courts(self, assignments: List[Dict[str, Any]]) -> None:
        raise NotImplementedError

    def list_courts(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def list_templates(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def overlapping_events(self, *, start: str, end: str, exclude_id: Optional[str]) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def published_between(self, *, start: str, end: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def checkin_status(self, event_id: str) -> Any:
        raise NotImplementedError

    def check_in_player(self, event_id: str, player_id: str) -> Any:
        raise NotImplementedError
