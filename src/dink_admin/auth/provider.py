from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from supabase import AuthError

from ..core.exceptions import AuthenticationError, UpstreamError
from ..database.connection import SupabaseConnection
from .model import ProviderTokens, ProviderUser

logger = logging.getLogger(__name__)


class AuthProvider(Protocol):
    """Hosted auth provider (Supabase Auth) seen from the dashboard."""

    def is_configured(self) -> bool:
        raise NotImplementedError

    def sign_up(self, *, email: str, password: str, metadata: Dict[str, Any]) -> Optional[ProviderTokens]:
        raise NotImplementedError

    def refresh_session(self, refresh_token: str) -> ProviderTokens:
        raise NotImplementedError

    def exchange_code(self, code: str) -> ProviderTokens:
        raise NotImplementedError

    def get_user(self, access_token: str) -> Optional[ProviderUser]:
        raise NotImplementedError


def _tokens(response) -> Optional[ProviderTokens]:
    session = getattr(response, "session", None)
    if not session or not session.access_token:
        return None
    user = getattr(response, "user", None) or getattr(session, "user", None)
    return ProviderTokens(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        email=getattr(user, "email", None),
    )


class SupabaseAuthProvider(AuthProvider):
    def __init__(self, conn: SupabaseConnection, *, anon_configured: bool):
        self._conn = conn
        self._anon_configured = anon_configured

    def is_configured(self) -> bool:
        return self._anon_configured

    def sign_up(self, *, email: str, password: str, metadata: Dict[str, Any]) -> Optional[ProviderTokens]:
        try:
            res = self._conn.anon_client().auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata}}
            )
        except AuthError as e:
            logger.error("Provider sign up failed: %s", e.message)
            raise UpstreamError(e.message)
        return _tokens(res)

    def refresh_session(self, refresh_token: str) -> ProviderTokens:
        try:
            res = self._conn.anon_client().auth.refresh_session(refresh_token)
        except AuthError as e:
            raise AuthenticationError(e.message or "Failed to refresh session")
        tokens = _tokens(res)
        if tokens is None:
            raise AuthenticationError("Failed to refresh session")
        return tokens

    def exchange_code(self, code: str) -> ProviderTokens:
        try:
            res = self._conn.anon_client().auth.exchange_code_for_session({"auth_code": code})
        except AuthError as e:
            raise AuthenticationError(e.message or "Failed to exchange code")
        tokens = _tokens(res)
        if tokens is None:
            raise AuthenticationError("No session returned for code")
        return tokens

    def get_user(self, access_token: str) -> Optional[ProviderUser]:
        try:
            res = self._conn.anon_client().auth.get_user(access_token)
        except AuthError as e:
            logger.info("Session token rejected: %s", e.message)
            return None
        user = getattr(res, "user", None) if res else None
        if user is None:
            return None
        return ProviderUser(id=str(user.id), email=user.email)
