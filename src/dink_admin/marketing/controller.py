from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.responses import error_response, json_body, json_errors
from ..container import Container
from ..core.enums import EmailStatus
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    svc = container.marketing_service

    @app.route("/api/marketing/emails", methods=["GET"], endpoint="api_marketing_emails")
    @json_errors(upstream=400)
    def api_marketing_emails():
        return jsonify(
            svc.list_emails(
                page=request.args.get("page", "1"),
                limit=request.args.get("limit", "20"),
                status=request.args.get("status"),
                search=request.args.get("search"),
            )
        )

    @app.route("/api/marketing/emails", methods=["POST"], endpoint="api_marketing_generate")
    @json_errors()
    def api_marketing_generate():
        email = svc.generate(json_body())
        return jsonify({"success": True, "data": email, "message": "Email generated successfully"})

    @app.route("/api/marketing/emails/<email_id>", methods=["GET"], endpoint="api_marketing_email")
    def api_marketing_email(email_id: str):
        try:
            email = svc.get_email(email_id)
        except DomainError as e:
            return error_response(str(e), 404)
        return jsonify({"success": True, "data": email.row})

    @app.route("/api/marketing/emails/<email_id>", methods=["PATCH"], endpoint="api_marketing_email_update")
    @json_errors(upstream=400)
    def api_marketing_email_update(email_id: str):
        data = svc.update_email(email_id, json_body())
        return jsonify({"success": True, "data": data, "message": "Email updated successfully"})

    @app.route("/api/marketing/emails/<email_id>", methods=["DELETE"], endpoint="api_marketing_email_delete")
    @json_errors(upstream=400)
    def api_marketing_email_delete(email_id: str):
        svc.delete_email(email_id)
        return jsonify({"success": True, "message": "Email deleted successfully"})

    @app.route("/api/marketing/emails/<email_id>/preview", endpoint="api_marketing_email_preview")
    @json_errors()
    def api_marketing_email_preview(email_id: str):
        return jsonify({"success": True, "data": svc.preview(email_id)})

    @app.route("/api/marketing/emails/<email_id>/send", methods=["POST"], endpoint="api_marketing_email_send")
    @json_errors()
    def api_marketing_email_send(email_id: str):
        return jsonify(svc.send(email_id, json_body().get("modifications")))

    @app.route("/api/marketing/analytics/overview", endpoint="api_marketing_overview")
    @json_errors(upstream=400)
    def api_marketing_overview():
        return jsonify({"success": True, "data": svc.overview()})

    @app.route("/api/marketing/analytics/emails", endpoint="api_marketing_analytics")
    @json_errors(upstream=400)
    def api_marketing_analytics():
        return jsonify({"success": True, "data": svc.email_analytics(request.args.get("limit", "10"))})

    @app.route("/api/marketing/analytics/top-performers", endpoint="api_marketing_top_performers")
    @json_errors(upstream=400)
    def api_marketing_top_performers():
        return jsonify({"success": True, "data": svc.top_performers(request.args.get("limit", "5"))})

    @app.route("/dashboard/marketing/email-campaigns", methods=["GET", "POST"], endpoint="email_campaigns")
    def email_campaigns():
        if request.method == "POST":
            action = request.form.get("action")
            email_id = request.form.get("email_id", "")
            try:
                if action == "generate":
                    svc.generate(request.form)
                    flash("Email generated successfully", "success")
                elif action == "send":
                    result = svc.send(email_id)
                    flash(result.get("message") or "Email sent", "success")
                elif action == "delete":
                    svc.delete_email(email_id)
                    flash("Email deleted successfully", "success")
                elif action == "review":
                    svc.update_email(email_id, {"status": EmailStatus.REVIEWED.value})
                    flash("Email marked as reviewed", "success")
            except DomainError as e:
                flash(str(e), "danger")
            return redirect(url_for("email_campaigns"))

        listing, overview, preview = None, None, None
        try:
            listing = svc.list_emails(
                page=request.args.get("page", "1"),
                status=request.args.get("status", "all"),
                search=request.args.get("search"),
            )
            overview = svc.overview()
            if request.args.get("preview"):
                preview = svc.preview(request.args["preview"])
        except DomainError as e:
            flash(str(e), "danger")
        return render_template(
            "dashboard/email_campaigns.html",
            listing=listing,
            overview=overview,
            preview=preview,
            statuses=list(EmailStatus),
            active_page="email_campaigns",
        )
