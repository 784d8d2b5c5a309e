from __future__ import annotations

from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import (
    format_duration,
    format_local_datetime,
    format_local_time,
    is_valid_24h_time,
    local_datetime,
    now_local,
    parse_iso_date,
    utc_iso,
)
from ..common.validators import parse_positive_int
from ..container import Container
from ..core.enums import EventType
from ..core.exceptions import DomainError, ValidationError
from .grid import court_overview, day_hours, event_color, events_for_day, month_grid, week_days

VIEWS = ("month", "week", "day")


def register(app: Flask, container: Container) -> None:
    events_svc = container.event_service

    app.jinja_env.filters["local_time"] = format_local_time
    app.jinja_env.filters["local_datetime"] = format_local_datetime
    app.jinja_env.globals["event_color"] = event_color
    app.jinja_env.globals["format_duration"] = format_duration

    @app.route("/dashboard/session_booking", methods=["GET", "POST"], endpoint="session_booking")
    def session_booking():
        if request.method == "POST":
            try:
                day = request.form.get("date", "")
                start, end = request.form.get("start", ""), request.form.get("end", "")
                if not (is_valid_24h_time(start) and is_valid_24h_time(end)):
                    raise ValidationError("Times must use 24-hour HH:MM format")
                events_svc.create_event(
                    {
                        "title": request.form.get("title"),
                        "event_type": request.form.get("event_type"),
                        "start_time": utc_iso(local_datetime(day, start)),
                        "end_time": utc_iso(local_datetime(day, end)),
                        "max_capacity": parse_positive_int(request.form.get("max_capacity"), 16),
                        "court_ids": request.form.getlist("court_ids"),
                    }
                )
                flash("Event created successfully", "success")
            except DomainError as e:
                flash(str(e), "danger")
            return redirect(url_for("session_booking", view=request.args.get("view", "month"), date=request.form.get("date")))

        view = request.args.get("view", "month")
        if view not in VIEWS:
            view = "month"
        try:
            current = parse_iso_date(request.args["date"]) if request.args.get("date") else now_local().date()
        except DomainError:
            current = now_local().date()

        if view == "month":
            weeks = month_grid(current)
            days = [d for week in weeks for d in week]
        elif view == "week":
            weeks = []
            days = week_days(current)
        else:
            weeks = []
            days = [current]

        events = []
        courts = []
        try:
            events = events_svc.list_events(
                start_date=utc_iso(local_datetime(days[0].isoformat(), "00:00")),
                end_date=utc_iso(local_datetime((days[-1] + timedelta(days=1)).isoformat(), "00:00")),
            )
            courts = events_svc.list_courts()
        except DomainError as e:
            flash(str(e), "danger")

        by_day = {d: events_for_day(events, d) for d in days}
        return render_template(
            "dashboard/session_booking.html",
            view=view,
            current=current,
            weeks=weeks,
            days=days,
            hours=day_hours(),
            by_day=by_day,
            courts=courts,
            event_types=list(EventType),
            active_page="session_booking",
        )

    @app.route("/dashboard/court_overview", endpoint="court_overview")
    def court_overview_page():
        try:
            current = parse_iso_date(request.args["date"]) if request.args.get("date") else now_local().date()
        except DomainError:
            current = now_local().date()

        groups = {"indoor": [], "outdoor": []}
        try:
            events = events_svc.list_events(
                start_date=utc_iso(local_datetime(current.isoformat(), "00:00")),
                end_date=utc_iso(local_datetime((current + timedelta(days=1)).isoformat(), "00:00")),
            )
            groups = court_overview(events_svc.list_courts(), events, current)
        except DomainError as e:
            flash(str(e), "danger")

        return render_template(
            "dashboard/court_overview.html",
            current=current,
            week=week_days(current),
            today=now_local().date(),
            groups=groups,
            active_page="court_overview",
        )
