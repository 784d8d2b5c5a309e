"""Dink House admin dashboard.

Feature packages (auth, members, events, marketing, ...) each carry a model,
a repository protocol with its Supabase implementation, a service and a thin
Flask controller; `container.build_container` wires them together.
"""
from __future__ import annotations

import importlib
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .core.constants import SESSION_LIFETIME_DAYS


def _register_controllers(app: Flask, container: Container) -> None:
    from .allowed_emails.controller import register as register_allowed_emails
    from .auth.controller import register as register_auth
    from .auth.guards import install_route_guard
    from .bookings.controller import register as register_bookings
    from .calendar.controller import register as register_calendar
    from .checkin.controller import register as register_checkin
    from .crowdfunding.controller import register as register_crowdfunding
    from .employees.controller import register as register_employees
    from .events.controller import register as register_events
    from .inquiries.controller import register as register_inquiries
    from .marketing.controller import register as register_marketing
    from .members.controller import register as register_members
    from .open_play.controller import register as register_open_play
    from .subscribers.controller import register as register_subscribers

    install_route_guard(app)

    register_auth(app, container)
    register_allowed_emails(app, container)
    register_members(app, container)
    register_employees(app, container)
    register_events(app, container)
    register_checkin(app, container)
    register_calendar(app, container)
    register_open_play(app, container)
    register_bookings(app, container)
    register_subscribers(app, container)
    register_marketing(app, container)
    register_inquiries(app, container)
    register_crowdfunding(app, container)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    supabase_config = getattr(settings, "SUPABASE_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SECURE_COOKIES"] = settings_module.endswith("production")
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SESSION_COOKIE_SECURE"] = app.config["SECURE_COOKIES"]
    app.permanent_session_lifetime = timedelta(days=SESSION_LIFETIME_DAYS)

    if app.config["DEBUG"]:
        app.logger.info(
            "[dink-admin] settings=%s supabase=%s smtp=%s",
            settings_module,
            supabase_config.get("url") or "(not configured)",
            getattr(settings, "SMTP_CONFIG", {}).get("host") or "(not configured)",
        )

    if container is None:
        container = build_container(
            supabase_config=supabase_config,
            smtp_config=getattr(settings, "SMTP_CONFIG", None),
            site_url=getattr(settings, "SITE_URL", ""),
            logo_url=getattr(settings, "LOGO_URL", ""),
            allow_unlisted_in_dev=bool(getattr(settings, "ALLOW_UNLISTED_EMAILS_IN_DEV", False)),
        )
    app.extensions["container"] = container

    _register_controllers(app, container)

    return app
