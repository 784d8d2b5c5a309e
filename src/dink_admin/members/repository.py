from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Tuple


class MemberRepository(Protocol):
    """Remote procedures and tables behind member administration."""

    def list_members(self, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def delete_member(self, player_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def verify_dupr(self, params: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def list_guests(self, *, start: int, end: int, search: Optional[str]) -> Tuple[List[Dict[str, Any]], int]:
        raise NotImplementedError

    def pending_dupr_verifications(self, *, limit: int, offset: int) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def verify_player_dupr(self, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError
