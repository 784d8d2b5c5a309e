"""Request guard for page routes and the role decorator.

API routes (`/api/...`) are never redirected; they answer with JSON errors.
"""
from __future__ import annotations

from functools import wraps

from flask import Flask, redirect, render_template, request

from ..core.enums import Role
from .session import session_user

PUBLIC_PREFIXES = (
    "/auth/login",
    "/auth/signup",
    "/auth/signup/success",
    "/auth/forgot-password",
)
CALLBACK_PATH = "/auth/callback"
LOGIN_PATH = "/auth/login"
EMPLOYEE_HOME = "/employee/dashboard"
ADMIN_ROLES = (Role.ADMIN, Role.MANAGER)


def is_public_path(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in PUBLIC_PREFIXES)


def install_route_guard(app: Flask) -> None:
    @app.context_processor
    def inject_current_user():
        return {"current_user": session_user()}

    @app.before_request
    def route_guard():
        path = request.path
        if request.endpoint == "static" or path.startswith("/static/"):
            return None
        if path.startswith("/api/") or path == CALLBACK_PATH:
            return None

        user = session_user()
        public = is_public_path(path)

        if user is None:
            return None if public else redirect(LOGIN_PATH)

        if public:
            return redirect(user.home_path)

        if path.startswith("/admin") and not user.role.can_access_admin:
            return redirect(EMPLOYEE_HOME)

        return None


def role_required(*roles: Role):
    """Render 403 for page routes when the session role is not allowed."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = session_user()
            if user is None:
                return redirect(LOGIN_PATH)
            if user.role not in roles:
                return render_template("403.html", current_user=user), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator

