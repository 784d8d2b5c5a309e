from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class AccountRepository(Protocol):
    """Remote lookups keyed by the provider session."""

    def get_user_by_session(self, session_token: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def get_player_by_account(self, account_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError
