from __future__ import annotations

from flask import Flask, flash, jsonify, render_template, request

from ..common.datetime_utils import now_local
from ..common.responses import json_errors
from ..container import Container
from ..core.enums import BookingSource, PaymentStatus
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    svc = container.booking_service

    def _filters():
        return {
            "date_from": request.args.get("date_from", now_local().date().isoformat()),
            "date_to": request.args.get("date_to"),
            "booking_source": request.args.get("booking_source", "all"),
            "payment_status": request.args.get("payment_status", "all"),
        }

    @app.route("/api/bookings", endpoint="api_bookings")
    @json_errors()
    def api_bookings():
        bookings = svc.list_bookings(**_filters())
        return jsonify({"success": True, "data": bookings, "count": len(bookings)})

    @app.route("/dashboard/bookings", endpoint="bookings")
    def bookings():
        filters = _filters()
        rows = []
        try:
            rows = svc.list_bookings(**filters)
        except DomainError as e:
            flash(str(e), "danger")
        return render_template(
            "dashboard/bookings.html",
            bookings=rows,
            totals=svc.totals(rows),
            filters=filters,
            sources=list(BookingSource),
            statuses=list(PaymentStatus),
            active_page="bookings",
        )
