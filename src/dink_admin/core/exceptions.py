from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the caller is not logged in or credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a requested row does not exist remotely."""


class ConflictError(DomainError):
    """Raised when a row already exists (duplicate email, active subscriber)."""


class ConfigurationError(DomainError):
    """Raised when the remote database or auth provider is not configured."""


class UpstreamError(DomainError):
    """Raised when the remote database, procedure or edge function fails."""

    def __init__(self, message: str, *, code: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.code = code
        self.status = status

    @property
    def is_duplicate(self) -> bool:
        text = str(self).lower()
        return self.code == "23505" or "duplicate" in text or "unique" in text
