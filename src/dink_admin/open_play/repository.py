from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence


class ScheduleBlockRepository(Protocol):
    def list_blocks(self, *, include_inactive: bool) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def get_block(self, block_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def create_blocks(self, params: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def set_active(self, block_ids: Sequence[str], *, is_active: bool, updated_at: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def create_override(self, params: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def bulk_delete(self, block_ids: Sequence[str]) -> Any:
        raise NotImplementedError

    def list_courts(self) -> List[Dict[str, Any]]:
        raise NotImplementedError
