from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from werkzeug.security import check_password_hash, generate_password_hash

from ..allowed_emails.repository import AllowedEmailRepository
from ..common.datetime_utils import now_utc, utc_iso
from ..common.validators import normalize_email, require_min_length
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from .model import EmailCheck, ProviderTokens, ProviderUser, RefreshResult, SessionUser
from .provider import AuthProvider
from .repository import AccountRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def names_from_email(email: str) -> Tuple[str, str]:
    """`first.last@host` -> ("first", "last")."""
    parts = email.split("@")[0].split(".")
    return parts[0], parts[1] if len(parts) > 1 else ""


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # unknown hash method stored by hand
        return False


def _issued_at() -> int:
    return int(now_utc().timestamp() * 1000)


class AuthService:
    """Use cases: email gate, login, signup and provider token relay."""

    def __init__(
        self,
        allowed: AllowedEmailRepository,
        accounts: AccountRepository,
        provider: AuthProvider,
        *,
        allow_unlisted_in_dev: bool = False,
    ):
        self._allowed = allowed
        self._accounts = accounts
        self._provider = provider
        self._allow_unlisted = allow_unlisted_in_dev

    def check_email(self, email: Optional[str]) -> EmailCheck:
        email = normalize_email(email)
        try:
            found = self._allowed.get_active_by_email(email)
        except (UpstreamError, ConfigurationError) as e:
            if not self._allow_unlisted:
                raise UpstreamError(f"Failed to check email authorization: {e}")
            logger.warning("Development mode: allowing %s after lookup failure (%s)", email, e)
            first_name, last_name = names_from_email(email)
            return EmailCheck(allowed=True, first_name=first_name, last_name=last_name, role=Role.ADMIN)

        if found is None:
            return EmailCheck(allowed=False)
        return EmailCheck(
            allowed=True,
            first_name=found.first_name,
            last_name=found.last_name,
            role=Role.parse(found.role, Role.COACH) if found.role else Role.COACH,
            password_hash=found.password_hash,
        )

    def login(self, email: Optional[str], password: Optional[str]) -> SessionUser:
        if not email or not password:
            raise ValidationError("Email and password are required")

        check = self.check_email(email)
        if not check.allowed:
            raise AuthenticationError(INVALID_CREDENTIALS)
        if check.password_hash and not _password_matches(check.password_hash, password):
            raise AuthenticationError(INVALID_CREDENTIALS)

        email = email.strip().lower()
        first_name, last_name = names_from_email(email)
        return SessionUser(
            email=email,
            role=check.role or Role.ADMIN,
            first_name=check.first_name or first_name,
            last_name=check.last_name or last_name,
            issued_at=_issued_at(),
        )

    def signup(
        self,
        *,
        email: Optional[str],
        password: Optional[str],
        first_name: Optional[str],
        last_name: Optional[str],
        role: Optional[str] = None,
    ) -> Tuple[SessionUser, Optional[ProviderTokens]]:
        if not email or not password or not first_name or not last_name:
            raise ValidationError("Missing required fields")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        check = self.check_email(email)
        if not check.allowed:
            raise AuthorizationError("This email is not authorized to create an account")

        email = email.strip().lower()
        session_role = check.role or Role.parse(role, Role.VIEWER)

        tokens = None
        if self._provider.is_configured():
            tokens = self._provider.sign_up(
                email=email,
                password=password,
                metadata={"first_name": first_name, "last_name": last_name, "role": session_role.value},
            )

        try:
            self._allowed.mark_used(email, utc_iso(), generate_password_hash(password))
        except (UpstreamError, ConfigurationError) as e:
            if not self._allow_unlisted:
                raise
            logger.warning("Could not mark %s as used: %s", email, e)

        user = SessionUser(
            email=email,
            role=session_role,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            issued_at=_issued_at(),
        )
        return user, tokens

    def current_user(self, session_token: Optional[str]) -> Dict[str, Any]:
        if not session_token:
            raise AuthenticationError("Unauthorized - No session token")
        try:
            data = self._accounts.get_user_by_session(session_token)
        except ConfigurationError:
            raise ConfigurationError("Authentication service not configured")
        if data and data.get("success") and data.get("user"):
            return data["user"]
        raise NotFoundError("User not found")

    def refresh_auth_tokens(self, refresh_token: str) -> RefreshResult:
        if not self._provider.is_configured():
            return RefreshResult(success=False, error="Supabase configuration missing")
        try:
            tokens = self._provider.refresh_session(refresh_token)
        except AuthenticationError as e:
            return RefreshResult(success=False, error=str(e) or "Failed to refresh session")
        return RefreshResult(
            success=True,
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token or refresh_token,
        )

    def refresh(self, refresh_token: Optional[str]) -> RefreshResult:
        if not refresh_token:
            raise AuthenticationError("No refresh token found")
        if not self._provider.is_configured():
            raise ConfigurationError("Authentication service not configured")
        result = self.refresh_auth_tokens(refresh_token)
        if not result.success:
            logger.info("Refresh rejected: %s", result.error)
            raise AuthenticationError("Failed to refresh session")
        return result

    def provider_user(self, session_token: Optional[str]) -> ProviderUser:
        if not session_token or not self._provider.is_configured():
            raise AuthenticationError("Not authenticated")
        user = self._provider.get_user(session_token)
        if user is None:
            raise AuthenticationError("Not authenticated")
        return user

    def player(self, session_token: Optional[str]) -> Dict[str, Any]:
        user = self.provider_user(session_token)
        try:
            player = self._accounts.get_player_by_account(user.id)
        except UpstreamError:
            player = None
        if not player:
            raise NotFoundError("Player not found")
        return player

    def complete_oauth(self, code: str) -> Tuple[SessionUser, ProviderTokens]:
        """Exchange an OAuth code and admit the user only if their email is allowed."""
        tokens = self._provider.exchange_code(code)
        try:
            check = self.check_email(tokens.email)
        except ValidationError:
            raise AuthorizationError("not_authorized")
        if not check.allowed:
            raise AuthorizationError("not_authorized")

        email = tokens.email.strip().lower()
        first_name, last_name = names_from_email(email)
        user = SessionUser(
            email=email,
            role=check.role or Role.VIEWER,
            first_name=check.first_name or first_name,
            last_name=check.last_name or last_name,
            issued_at=_issued_at(),
        )
        return user, tokens
