from __future__ import annotations

from flask import Flask, jsonify, render_template, request

from ..auth.session import session_user
from ..common.responses import error_response, json_body, json_errors
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    svc = container.event_service

    @app.route("/", endpoint="home")
    def home():
        upcoming = []
        try:
            upcoming = svc.upcoming_events()
        except DomainError as e:
            app.logger.warning("Upcoming events unavailable: %s", e)
        return render_template("index.html", current_user=session_user(), upcoming=upcoming, active_page="home")

    @app.route("/api/events", methods=["GET"], endpoint="api_events")
    @json_errors(upstream=400)
    def api_events():
        events = svc.list_events(start_date=request.args.get("startDate"), end_date=request.args.get("endDate"))
        return jsonify({"success": True, "data": [e.to_dict() for e in events], "count": len(events)})

    @app.route("/api/events", methods=["POST"], endpoint="api_events_create")
    @json_errors(upstream=400)
    def api_events_create():
        created = svc.create_event(json_body())
        return jsonify({"success": True, "data": created, "message": "Event created successfully"}), 201

    @app.route("/api/events/upcoming", endpoint="api_events_upcoming")
    @json_errors(upstream=400)
    def api_events_upcoming():
        return jsonify({"success": True, "events": svc.upcoming_events()})

    @app.route("/api/events/<event_id>", methods=["GET"], endpoint="api_event")
    def api_event(event_id: str):
        try:
            event = svc.get_event(event_id)
        except DomainError as e:
            return error_response(str(e), 404)
        return jsonify({"success": True, "data": event.to_dict(with_registrations=True)})

    @app.route("/api/events/<event_id>", methods=["PUT"], endpoint="api_event_update")
    @json_errors(upstream=400)
    def api_event_update(event_id: str):
        updated = svc.update_event(event_id, json_body())
        return jsonify({"success": True, "data": updated, "message": "Event updated successfully"})

    @app.route("/api/events/<event_id>", methods=["DELETE"], endpoint="api_event_delete")
    @json_errors(upstream=400)
    def api_event_delete(event_id: str):
        if request.args.get("cancel") == "true":
            svc.cancel_event(event_id, request.args.get("reason") or None)
            return jsonify({"success": True, "message": "Event cancelled successfully"})
        svc.delete_event(event_id)
        return jsonify({"success": True, "message": "Event deleted successfully"})

    @app.route("/api/events/<event_id>/registrations", endpoint="api_event_registrations")
    @json_errors(upstream=400)
    def api_event_registrations(event_id: str):
        return jsonify({"success": True, "data": svc.checkin_status(event_id)})

    @app.route("/api/events/<event_id>/check-in", methods=["POST"], endpoint="api_event_check_in")
    @json_errors(upstream=400)
    def api_event_check_in(event_id: str):
        return jsonify(svc.check_in_player(event_id, json_body().get("playerId")))

    @app.route("/api/courts", endpoint="api_courts")
    @json_errors(upstream=400)
    def api_courts():
        return jsonify({"success": True, "data": [c.to_dict() for c in svc.list_courts()]})

    @app.route("/api/courts/availability", endpoint="api_court_availability")
    @json_errors(upstream=400)
    def api_court_availability():
        data = svc.check_court_availability(
            request.args.get("start"), request.args.get("end"), request.args.get("excludeEventId")
        )
        return jsonify({"success": True, "data": data})

    @app.route("/api/event-templates", endpoint="api_event_templates")
    @json_errors(upstream=400)
    def api_event_templates():
        return jsonify({"success": True, "data": svc.list_templates()})
