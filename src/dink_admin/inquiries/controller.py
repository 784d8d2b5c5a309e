from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.responses import error_response, json_body, json_errors
from ..container import Container
from ..core.enums import InquiryStatus
from ..core.exceptions import DomainError, UpstreamError, ValidationError


def register(app: Flask, container: Container) -> None:
    svc = container.inquiry_service

    @app.route("/api/send-response", methods=["POST"], endpoint="api_send_response")
    def api_send_response():
        body = json_body()
        try:
            svc.send_response(body.get("to"), body.get("subject"), body.get("message"), body.get("inquiryId"))
        except ValidationError as e:
            return error_response(str(e), 400)
        except UpstreamError:
            return error_response("Failed to send response", 500)
        except Exception:
            app.logger.exception("Error sending response")
            return error_response("Failed to send response", 500)
        return jsonify({"success": True, "message": "Response sent successfully"})

    @app.route("/api/inquiries", endpoint="api_inquiries")
    @json_errors()
    def api_inquiries():
        items = svc.list_inquiries(request.args.get("status"), request.args.get("search"))
        return jsonify({"success": True, "data": [i.to_dict() for i in items]})

    @app.route("/api/inquiries/<inquiry_id>/responses", endpoint="api_inquiry_responses")
    @json_errors()
    def api_inquiry_responses(inquiry_id: str):
        return jsonify({"success": True, "data": svc.responses(inquiry_id)})

    @app.route("/api/inquiries/<inquiry_id>/status", methods=["PATCH"], endpoint="api_inquiry_status")
    @json_errors()
    def api_inquiry_status(inquiry_id: str):
        svc.update_status(inquiry_id, json_body().get("status"))
        return jsonify({"success": True})

    @app.route("/dashboard/inquiries", methods=["GET", "POST"], endpoint="inquiries")
    def inquiries():
        if request.method == "POST":
            action = request.form.get("action")
            inquiry_id = request.form.get("inquiry_id", "")
            try:
                if action == "status":
                    svc.update_status(inquiry_id, request.form.get("status"))
                    flash("Status updated", "success")
                elif action == "respond":
                    svc.respond(inquiry_id, request.form.get("message"))
                    flash("Response sent successfully", "success")
            except DomainError as e:
                flash(str(e), "danger")
            return redirect(url_for("inquiries", selected=inquiry_id or None))

        status = request.args.get("status", "all")
        search = request.args.get("search", "")
        items, selected, responses = [], None, []
        try:
            items = svc.list_inquiries(status, search)
            if request.args.get("selected"):
                selected = svc.get(request.args["selected"])
                responses = svc.responses(selected.id)
        except DomainError as e:
            flash(str(e), "danger")
        return render_template(
            "dashboard/inquiries.html",
            inquiries=items,
            selected=selected,
            responses=responses,
            status=status,
            search=search,
            statuses=list(InquiryStatus),
            active_page="inquiries",
        )
