from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..auth.guards import ADMIN_ROLES, role_required
from ..common.responses import json_body, json_errors
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    svc = container.allowed_email_service

    @app.route("/api/admin/allowed-emails", methods=["GET"], endpoint="api_admin_allowed_emails")
    @json_errors()
    def api_admin_list():
        return jsonify([e.to_dict() for e in svc.list_all()])

    @app.route("/api/admin/allowed-emails", methods=["POST"], endpoint="api_admin_allowed_emails_add")
    @json_errors()
    def api_admin_add():
        body = json_body()
        created = svc.add(
            email=body.get("email"),
            first_name=body.get("first_name"),
            last_name=body.get("last_name"),
            role=body.get("role"),
            notes=body.get("notes"),
        )
        return jsonify(created.to_dict())

    @app.route("/api/admin/allowed-emails", methods=["PATCH"], endpoint="api_admin_allowed_emails_update")
    @json_errors()
    def api_admin_update():
        updated = svc.update(request.args.get("id"), json_body())
        return jsonify(updated.to_dict() if updated else {})

    @app.route("/api/admin/allowed-emails", methods=["DELETE"], endpoint="api_admin_allowed_emails_delete")
    @json_errors()
    def api_admin_delete():
        svc.delete(request.args.get("id"))
        return jsonify({"success": True})

    @app.route("/api/allowed-emails", methods=["POST"], endpoint="api_allowed_emails_add")
    @json_errors()
    def api_public_add():
        body = json_body()
        created = svc.add_from_api(body)
        return jsonify(
            {
                "success": True,
                "message": f"Email {created.email} has been added to the allowed list",
                "data": {
                    "id": created.id,
                    "email": created.email,
                    "role": created.role,
                    "first_name": created.first_name,
                    "last_name": created.last_name,
                },
            }
        )

    @app.route("/api/allowed-emails", methods=["GET"], endpoint="api_allowed_emails")
    @json_errors()
    def api_public_check():
        email = request.args.get("email")
        if not email:
            emails = svc.list_public()
            return jsonify({"success": True, "count": len(emails), "emails": emails})
        return jsonify(svc.lookup(email))

    @app.route("/admin/allowed-emails", methods=["GET", "POST"], endpoint="admin_allowed_emails")
    @role_required(*ADMIN_ROLES)
    def admin_allowed_emails():
        if request.method == "POST":
            action = request.form.get("action", "add")
            try:
                if action == "add":
                    svc.add(
                        email=request.form.get("email"),
                        first_name=request.form.get("first_name"),
                        last_name=request.form.get("last_name"),
                        role=request.form.get("role"),
                        notes=request.form.get("notes"),
                    )
                    flash("Email added to the allowed list", "success")
                elif action == "toggle":
                    svc.update(request.form.get("id"), {"is_active": request.form.get("is_active") != "true"})
                    flash("Email updated", "success")
                elif action == "delete":
                    svc.delete(request.form.get("id"))
                    flash("Email removed", "success")
            except DomainError as e:
                flash(str(e), "danger")
            return redirect(url_for("admin_allowed_emails"))

        emails = []
        try:
            emails = svc.list_all()
        except DomainError as e:
            flash(str(e), "danger")
        return render_template("admin/allowed_emails.html", emails=emails, active_page="allowed_emails")
