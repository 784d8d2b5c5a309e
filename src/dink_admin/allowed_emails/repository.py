from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, Sequence

from .model import AllowedEmail


class AllowedEmailRepository(Protocol):
    def list_all(self) -> Sequence[AllowedEmail]:
        raise NotImplementedError

    def list_active(self) -> Sequence[AllowedEmail]:
        raise NotImplementedError

    def get_active_by_email(self, email: str) -> Optional[AllowedEmail]:
        raise NotImplementedError

    def create(self, fields: Dict[str, Any]) -> AllowedEmail:
        raise NotImplementedError

    def update(self, email_id: str, fields: Dict[str, Any]) -> Optional[AllowedEmail]:
        raise NotImplementedError

    def delete(self, email_id: str) -> None:
        raise NotImplementedError

    def mark_used(self, email: str, used_at: str, password_hash: Optional[str] = None) -> None:
        raise NotImplementedError
