from __future__ import annotations

from flask import Flask, flash, jsonify, render_template, request

from ..common.responses import json_body, json_errors
from ..container import Container
from ..core.exceptions import DomainError
from .model import DAY_NAMES


def register(app: Flask, container: Container) -> None:
    svc = container.open_play_service

    @app.route("/api/open-play/blocks", methods=["GET"], endpoint="api_open_play_blocks")
    @json_errors(upstream=400)
    def api_open_play_blocks():
        blocks = svc.list_blocks(include_inactive=request.args.get("include_inactive") == "true")
        return jsonify({"success": True, "data": [b.row for b in blocks]})

    @app.route("/api/open-play/blocks", methods=["POST"], endpoint="api_open_play_create")
    @json_errors(upstream=400)
    def api_open_play_create():
        return jsonify({"success": True, "data": svc.create_blocks(json_body())}), 201

    @app.route("/api/open-play/blocks/<block_id>/toggle", methods=["PATCH"], endpoint="api_open_play_toggle")
    @json_errors(upstream=400)
    def api_open_play_toggle(block_id: str):
        return jsonify({"success": True, "data": svc.toggle(block_id, bool(json_body().get("is_active")))})

    @app.route("/api/open-play/blocks/bulk-toggle", methods=["POST"], endpoint="api_open_play_bulk_toggle")
    @json_errors(upstream=400)
    def api_open_play_bulk_toggle():
        body = json_body()
        return jsonify({"success": True, "data": svc.bulk_toggle(body.get("block_ids"), bool(body.get("is_active")))})

    @app.route("/api/open-play/blocks/<block_id>/clone", methods=["POST"], endpoint="api_open_play_clone")
    @json_errors(upstream=400)
    def api_open_play_clone(block_id: str):
        body = json_body()
        if body.get("target_day_of_week") is None:
            return jsonify({"success": False, "error": "target_day_of_week is required"}), 400
        data = svc.clone(block_id, int(body["target_day_of_week"]), body.get("start_time"))
        return jsonify({"success": True, "data": data}), 201

    @app.route("/api/open-play/blocks/overrides", methods=["POST"], endpoint="api_open_play_overrides")
    @json_errors(upstream=400)
    def api_open_play_overrides():
        body = json_body()
        data = svc.create_date_range_override(
            body.get("block_ids"),
            body.get("start_date", ""),
            body.get("end_date", ""),
            is_cancelled=bool(body.get("is_cancelled", True)),
            reason=body.get("reason") or "",
        )
        return jsonify({"success": True, "data": data})

    @app.route("/api/open-play/blocks/bulk-delete", methods=["POST"], endpoint="api_open_play_bulk_delete")
    @json_errors(upstream=400)
    def api_open_play_bulk_delete():
        return jsonify({"success": True, "data": svc.bulk_delete(json_body().get("block_ids"))})

    @app.route("/api/open-play/courts", endpoint="api_open_play_courts")
    @json_errors(upstream=400)
    def api_open_play_courts():
        return jsonify({"success": True, "data": svc.list_courts()})

    @app.route("/dashboard/open-play-playground", endpoint="open_play")
    def open_play():
        blocks = []
        try:
            blocks = svc.list_blocks(include_inactive=True)
        except DomainError as e:
            flash(str(e), "danger")
        by_day = {day: [b for b in blocks if b.day_of_week == day] for day in range(7)}
        return render_template(
            "dashboard/open_play.html", by_day=by_day, day_names=DAY_NAMES, active_page="open_play"
        )
