from __future__ import annotations

from flask import Flask, jsonify, render_template, request

from ..auth.session import SESSION_TOKEN_COOKIE, session_user
from ..common.responses import json_body, json_errors
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    svc = container.employee_service

    @app.route("/api/employee", methods=["GET"], endpoint="api_employee")
    @json_errors()
    def api_employee():
        employee, profile = svc.current(request.cookies.get(SESSION_TOKEN_COOKIE))
        return jsonify({"success": True, "employee": employee, "profile": profile})

    @app.route("/api/employee", methods=["PATCH"], endpoint="api_employee_update")
    @json_errors()
    def api_employee_update():
        employee = svc.update(request.cookies.get(SESSION_TOKEN_COOKIE), json_body())
        return jsonify({"success": True, "employee": employee})

    @app.route("/employee/dashboard", endpoint="employee_dashboard")
    def employee_dashboard():
        employee = None
        try:
            employee = svc.current_employee(request.cookies.get(SESSION_TOKEN_COOKIE))
        except DomainError as e:
            app.logger.info("Employee profile unavailable: %s", e)

        upcoming = []
        try:
            upcoming = container.event_service.upcoming_events()
        except DomainError as e:
            app.logger.warning("Upcoming events unavailable: %s", e)

        return render_template(
            "employee/dashboard.html",
            current_user=session_user(),
            employee=employee,
            upcoming=upcoming,
            active_page="employee_dashboard",
        )
