from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    email: str
    role: Role
    first_name: str
    last_name: str
    issued_at: int

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def home_path(self) -> str:
        return "/" if self.role.can_access_admin else "/employee/dashboard"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "role": self.role.value,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "status": "active",
        }


@dataclass(frozen=True)
class EmailCheck:
    allowed: bool
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[Role] = None
    password_hash: Optional[str] = None


@dataclass(frozen=True)
class ProviderTokens:
    access_token: str
    refresh_token: Optional[str]
    email: Optional[str] = None


@dataclass(frozen=True)
class ProviderUser:
    id: str
    email: Optional[str]


@dataclass(frozen=True)
class RefreshResult:
    success: bool
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None
