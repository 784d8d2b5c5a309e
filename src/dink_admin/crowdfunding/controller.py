from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.responses import json_body, json_errors
from ..container import Container
from ..core.constants import BENEFIT_TYPES
from ..core.enums import FulfillmentStatus, RecognitionStatus
from ..core.exceptions import DomainError, NotFoundError


def register(app: Flask, container: Container) -> None:
    svc = container.crowdfunding_service

    # JSON API
    @app.route("/api/crowdfunding/benefits", endpoint="api_cf_benefits")
    @json_errors()
    def api_cf_benefits():
        return jsonify(
            {
                "success": True,
                "data": svc.pending_fulfillment(request.args.get("type")),
                "summary": svc.fulfillment_summary(),
            }
        )

    @app.route("/api/crowdfunding/benefits/<allocation_id>", methods=["PATCH"], endpoint="api_cf_benefit_status")
    @json_errors()
    def api_cf_benefit_status(allocation_id: str):
        body = json_body()
        svc.update_fulfillment(allocation_id, body.get("status"), body.get("notes"))
        return jsonify({"success": True})

    @app.route("/api/crowdfunding/benefits/<allocation_id>/usage", endpoint="api_cf_benefit_usage")
    @json_errors()
    def api_cf_benefit_usage(allocation_id: str):
        return jsonify({"success": True, "data": svc.usage_history(allocation_id)})

    @app.route("/api/crowdfunding/benefits/<allocation_id>/claim", methods=["POST"], endpoint="api_cf_benefit_claim")
    @json_errors()
    def api_cf_benefit_claim(allocation_id: str):
        body = json_body()
        svc.claim_benefit(allocation_id, body.get("quantity"), body.get("notes"))
        return jsonify({"success": True})

    @app.route("/api/crowdfunding/contributors", endpoint="api_cf_contributors")
    @json_errors()
    def api_cf_contributors():
        data = svc.contributors(
            search=request.args.get("search"),
            status=request.args.get("status"),
            page=request.args.get("page", "1"),
        )
        return jsonify({"success": True, "data": data})

    @app.route("/api/crowdfunding/tiers", endpoint="api_cf_tiers")
    @json_errors()
    def api_cf_tiers():
        return jsonify({"success": True, "data": [t.to_dict() for t in svc.tiers()]})

    @app.route("/api/crowdfunding/backers/lookup", endpoint="api_cf_backer_lookup")
    @json_errors()
    def api_cf_backer_lookup():
        found = svc.find_backer(request.args.get("email"))
        if not found:
            raise NotFoundError("Backer not found")
        return jsonify(
            {"success": True, "backer": found["backer"], "benefits": [b.to_dict() for b in found["benefits"]]}
        )

    @app.route("/api/crowdfunding/backers/<backer_id>", endpoint="api_cf_backer")
    @json_errors()
    def api_cf_backer(backer_id: str):
        return jsonify({"success": True, "data": svc.backer_details(backer_id).to_dict()})

    @app.route(
        "/api/crowdfunding/backers/<backer_id>/benefits/<allocation_id>/redeem",
        methods=["POST"],
        endpoint="api_cf_redeem",
    )
    @json_errors()
    def api_cf_redeem(backer_id: str, allocation_id: str):
        body = json_body()
        svc.redeem_for(
            backer_id,
            allocation_id,
            quantity=body.get("quantity", 1),
            used_for=body.get("used_for"),
            notes=body.get("notes"),
            staff_verified=body.get("staff_verified", True) is not False,
        )
        return jsonify({"success": True})

    @app.route("/api/crowdfunding/contributions/<contribution_id>/refund", methods=["POST"], endpoint="api_cf_refund")
    @json_errors()
    def api_cf_refund(contribution_id: str):
        message = svc.refund(contribution_id, json_body().get("reason"))
        return jsonify({"success": True, "message": message})

    @app.route("/api/crowdfunding/recognition", endpoint="api_cf_recognition")
    @json_errors()
    def api_cf_recognition():
        return jsonify({"success": True, "data": svc.recognition_items(request.args.get("status", "pending"))})

    @app.route("/api/crowdfunding/recognition/<item_id>/status", methods=["PATCH"], endpoint="api_cf_recognition_status")
    @json_errors()
    def api_cf_recognition_status(item_id: str):
        body = json_body()
        svc.update_recognition_status(item_id, body.get("status"), body.get("notes"), body.get("allocation_id"))
        return jsonify({"success": True})

    @app.route("/api/crowdfunding/recognition/<item_id>", methods=["PATCH"], endpoint="api_cf_recognition_details")
    @json_errors()
    def api_cf_recognition_details(item_id: str):
        svc.update_recognition_details(item_id, json_body())
        return jsonify({"success": True})

    # Pages
    @app.route("/dashboard/crowdfunding/benefits", methods=["GET", "POST"], endpoint="cf_benefits")
    def cf_benefits():
        benefit_type = request.args.get("type", "all")
        if request.method == "POST":
            try:
                svc.update_fulfillment(
                    request.form.get("allocation_id", ""), request.form.get("status"), request.form.get("notes")
                )
                flash("Status updated", "success")
            except DomainError as e:
                flash(str(e), "danger")
            return redirect(url_for("cf_benefits", type=benefit_type))

        benefits, summary = [], []
        try:
            benefits = svc.pending_fulfillment(benefit_type)
            summary = svc.fulfillment_summary()
        except DomainError as e:
            flash(str(e), "danger")
        return render_template(
            "dashboard/crowdfunding/benefits.html",
            benefits=benefits,
            summary=summary,
            benefit_type=benefit_type,
            benefit_types=BENEFIT_TYPES,
            statuses=[FulfillmentStatus.IN_PROGRESS, FulfillmentStatus.FULFILLED, FulfillmentStatus.CANCELLED],
            active_page="cf_benefits",
        )

    @app.route("/dashboard/crowdfunding/contributors", methods=["GET", "POST"], endpoint="cf_contributors")
    def cf_contributors():
        backer_id = request.args.get("backer")
        if request.method == "POST":
            action = request.form.get("action")
            try:
                if action == "claim":
                    svc.claim_benefit(
                        request.form.get("allocation_id", ""), request.form.get("quantity"), request.form.get("notes")
                    )
                    flash("Benefit claimed", "success")
                elif action == "refund":
                    flash(svc.refund(request.form.get("contribution_id", ""), request.form.get("reason")), "success")
            except DomainError as e:
                flash(str(e), "danger")
            return redirect(url_for("cf_contributors", backer=backer_id))

        listing, tiers, details = None, [], None
        try:
            listing = svc.contributors(
                search=request.args.get("search"),
                status=request.args.get("status"),
                page=request.args.get("page", "1"),
            )
            tiers = svc.tiers()
            if backer_id:
                details = svc.backer_details(backer_id)
        except DomainError as e:
            flash(str(e), "danger")
        return render_template(
            "dashboard/crowdfunding/contributors.html",
            listing=listing,
            tiers=tiers,
            details=details,
            view=request.args.get("view", "backers"),
            active_page="cf_contributors",
        )

    @app.route("/dashboard/crowdfunding/redeem", methods=["GET", "POST"], endpoint="cf_redeem")
    def cf_redeem():
        email = request.values.get("email", "")
        if request.method == "POST":
            try:
                svc.redeem_for(
                    request.form.get("backer_id", ""),
                    request.form.get("allocation_id", ""),
                    quantity=request.form.get("quantity", "1"),
                    used_for=request.form.get("used_for"),
                    notes=request.form.get("notes"),
                    staff_verified=request.form.get("staff_verified") == "on",
                )
                flash("Benefit redeemed", "success")
            except DomainError as e:
                flash(str(e), "danger")
            return redirect(url_for("cf_redeem", email=email))

        found, history = None, {}
        if email:
            try:
                found = svc.find_backer(email)
                if found is None:
                    flash("No backer found with that email", "warning")
                else:
                    history = {b.id: svc.usage_history(b.id) for b in found["benefits"]}
            except DomainError as e:
                flash(str(e), "danger")
        return render_template(
            "dashboard/crowdfunding/redeem.html",
            email=email,
            found=found,
            history=history,
            active_page="cf_redeem",
        )

    @app.route("/dashboard/crowdfunding/recognition", methods=["GET", "POST"], endpoint="cf_recognition")
    def cf_recognition():
        status = request.args.get("status", RecognitionStatus.PENDING.value)
        if request.method == "POST":
            item_id = request.form.get("item_id", "")
            try:
                if request.form.get("action") == "details":
                    svc.update_recognition_details(item_id, request.form.to_dict())
                    flash("Item details updated", "success")
                else:
                    svc.update_recognition_status(
                        item_id,
                        request.form.get("status"),
                        request.form.get("notes"),
                        request.form.get("allocation_id"),
                    )
                    flash("Status updated", "success")
            except DomainError as e:
                flash(str(e), "danger")
            return redirect(url_for("cf_recognition", status=status))

        items = []
        try:
            items = svc.recognition_items(status)
        except DomainError as e:
            flash(str(e), "danger")
        counts = {s.value: sum(1 for i in items if i.get("status") == s.value) for s in RecognitionStatus}
        return render_template(
            "dashboard/crowdfunding/recognition.html",
            items=items,
            status=status,
            counts=counts,
            statuses=list(RecognitionStatus),
            active_page="cf_recognition",
        )
