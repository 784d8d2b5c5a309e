from __future__ import annotations

from flask import Flask, flash, jsonify, render_template, request

from ..common.responses import json_body, json_errors
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    svc = container.subscriber_service

    def _query():
        return {
            "page": request.args.get("page", "1"),
            "limit": request.args.get("limit", "50"),
            "search": request.args.get("search", ""),
            "is_active": request.args.get("isActive", "true"),
            "sort_by": request.args.get("sortBy", "created_at"),
            "sort_order": request.args.get("sortOrder", "desc"),
        }

    @app.route("/api/subscribers", methods=["GET"], endpoint="api_subscribers")
    @json_errors()
    def api_subscribers():
        return jsonify(svc.list_subscribers(**_query()))

    @app.route("/api/subscribers", methods=["POST"], endpoint="api_subscribers_add")
    @json_errors()
    def api_subscribers_add():
        return jsonify(svc.subscribe(json_body()))

    @app.route("/api/subscribers/count", endpoint="api_subscribers_count")
    @json_errors()
    def api_subscribers_count():
        return jsonify({"success": True, "data": svc.counts().to_dict()})

    @app.route("/dashboard/marketing", endpoint="marketing")
    def marketing():
        query = _query()
        result, counts = None, None
        try:
            result = svc.list_subscribers(**query)
            counts = svc.counts()
        except DomainError as e:
            flash(str(e), "danger")
        return render_template(
            "dashboard/marketing.html", result=result, counts=counts, query=query, active_page="marketing"
        )
