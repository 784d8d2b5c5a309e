from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..auth.guards import ADMIN_ROLES, role_required
from ..auth.session import SESSION_TOKEN_COOKIE
from ..common.responses import json_body, json_errors
from ..container import Container
from ..core.enums import DuprStatus, MembershipLevel
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    svc = container.member_service

    @app.route("/api/admin/members", endpoint="api_members")
    @json_errors()
    def api_members():
        data = svc.list_members(
            page=request.args.get("page", "1"),
            search=request.args.get("search"),
            dupr_status=request.args.get("dupr_status"),
            membership_level=request.args.get("membership_level"),
        )
        return jsonify(data)

    @app.route("/api/admin/members/<player_id>", methods=["DELETE"], endpoint="api_member_delete")
    @json_errors()
    def api_member_delete(player_id: str):
        return jsonify(svc.delete_member(player_id))

    @app.route("/api/admin/members/<player_id>/verify-dupr", methods=["POST"], endpoint="api_member_verify_dupr")
    @json_errors()
    def api_member_verify_dupr(player_id: str):
        return jsonify(svc.verify_dupr(player_id, json_body()))

    @app.route("/api/admin/guests", endpoint="api_guests")
    @json_errors()
    def api_guests():
        result = svc.list_guests(page=request.args.get("page", "1"), search=request.args.get("search"))
        return jsonify({"success": True, **result.to_dict()})

    @app.route("/admin/community/members", methods=["GET", "POST"], endpoint="admin_members")
    def admin_members():
        if request.method == "POST":
            player_id = request.form.get("player_id")
            try:
                if request.form.get("action") == "delete":
                    svc.delete_member(player_id)
                    flash("Player deleted successfully", "success")
                else:
                    svc.verify_dupr(
                        player_id,
                        {
                            "verified": request.form.get("verified") == "true",
                            "verified_by": request.form.get("verified_by"),
                            "notes": request.form.get("notes"),
                        },
                    )
                    flash("DUPR verification saved", "success")
            except DomainError as e:
                flash(str(e), "danger")
            return redirect(url_for("admin_members", **request.args))

        filters = {
            "page": request.args.get("page", "1"),
            "search": request.args.get("search"),
            "dupr_status": request.args.get("dupr_status"),
            "membership_level": request.args.get("membership_level"),
        }
        result = None
        try:
            result = svc.member_page(**filters)
        except DomainError as e:
            flash(str(e), "danger")

        return render_template(
            "admin/members.html",
            result=result,
            filters=filters,
            dupr_statuses=list(DuprStatus),
            membership_levels=list(MembershipLevel),
            active_page="members",
        )

    @app.route("/admin/community/guests", endpoint="admin_guests")
    def admin_guests():
        result = None
        search = request.args.get("search", "")
        try:
            result = svc.list_guests(page=request.args.get("page", "1"), search=search)
        except DomainError as e:
            flash(str(e), "danger")
        return render_template("admin/guests.html", result=result, search=search, active_page="guests")

    @app.route("/dashboard/dupr-verification", methods=["GET", "POST"], endpoint="dupr_verification")
    @role_required(*ADMIN_ROLES)
    def dupr_verification():
        if request.method == "POST":
            try:
                admin = container.employee_service.current_employee(request.cookies.get(SESSION_TOKEN_COOKIE))
                data = svc.verify_player_dupr(
                    player_id=request.form.get("player_id"),
                    admin_id=admin.id,
                    verified=request.form.get("verified") == "true",
                    notes=request.form.get("notes"),
                )
                flash(data.get("message") or "DUPR rating processed successfully", "success")
            except DomainError as e:
                flash(str(e), "danger")
            return redirect(url_for("dupr_verification"))

        verifications = []
        try:
            verifications = svc.pending_dupr_verifications()
        except DomainError as e:
            flash(str(e), "danger")
        return render_template(
            "dashboard/dupr_verification.html", verifications=verifications, active_page="dupr_verification"
        )
