from __future__ import annotations

from flask import Flask, flash, jsonify, render_template, request, send_file

from ..auth.session import SESSION_TOKEN_COOKIE
from ..common.responses import json_body, json_errors
from ..container import Container
from ..core.constants import CHECKIN_POLL_SECONDS
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    svc = container.checkin_service

    @app.route("/api/events/<event_id>/check-in/scan", methods=["POST"], endpoint="api_event_scan")
    @json_errors(upstream=400)
    def api_event_scan(event_id: str):
        image = request.files.get("image")
        code = request.form.get("code") or json_body().get("code")
        return jsonify(svc.scan(event_id, code=code, image=image.stream if image else None))

    @app.route("/api/auth/player/qr.png", endpoint="api_player_qr")
    @json_errors()
    def api_player_qr():
        buf = svc.player_qr(request.cookies.get(SESSION_TOKEN_COOKIE), request.args.get("event_id"))
        return send_file(buf, mimetype="image/png")

    @app.route("/admin/operations/live-events", endpoint="live_events")
    def live_events():
        upcoming = []
        try:
            upcoming = container.event_service.upcoming_events()
        except DomainError as e:
            flash(str(e), "danger")
        return render_template(
            "admin/live_events.html",
            events=upcoming,
            selected=request.args.get("event_id"),
            poll_seconds=CHECKIN_POLL_SECONDS,
            active_page="live_events",
        )
