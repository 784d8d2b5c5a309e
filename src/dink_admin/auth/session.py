from __future__ import annotations

from typing import Optional

from flask import session

from ..core.constants import REFRESH_COOKIE_MAX_AGE, SESSION_COOKIE_MAX_AGE
from ..core.enums import Role
from .model import SessionUser

SESSION_TOKEN_COOKIE = "session_token"
REFRESH_TOKEN_COOKIE = "refresh_token"
USER_ROLE_COOKIE = "user_role"
AUTH_COOKIES = (SESSION_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE, USER_ROLE_COOKIE)


def establish_session(user: SessionUser) -> None:
    session.clear()
    session.permanent = True
    session["email"] = user.email
    session["role"] = user.role.value
    session["first_name"] = user.first_name
    session["last_name"] = user.last_name
    session["issued_at"] = user.issued_at


def session_user() -> Optional[SessionUser]:
    if "email" not in session:
        return None
    return SessionUser(
        email=session["email"],
        role=Role.parse(session.get("role")),
        first_name=session.get("first_name") or "",
        last_name=session.get("last_name") or "",
        issued_at=int(session.get("issued_at") or 0),
    )


def set_token_cookies(response, access_token: str, refresh_token: Optional[str], *, secure: bool, role: Optional[Role] = None):
    options = {"httponly": True, "secure": secure, "samesite": "Lax", "path": "/"}
    response.set_cookie(SESSION_TOKEN_COOKIE, access_token, max_age=SESSION_COOKIE_MAX_AGE, **options)
    response.set_cookie(REFRESH_TOKEN_COOKIE, refresh_token or "", max_age=REFRESH_COOKIE_MAX_AGE, **options)
    if role is not None:
        response.set_cookie(USER_ROLE_COOKIE, role.value, max_age=SESSION_COOKIE_MAX_AGE, **options)
    return response


def clear_auth_cookies(response, *, secure: bool):
    for name in AUTH_COOKIES:
        response.set_cookie(name, "", expires=0, httponly=True, secure=secure, samesite="Lax", path="/")
    return response
