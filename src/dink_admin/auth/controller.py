from __future__ import annotations

from flask import Flask, flash, jsonify, make_response, redirect, render_template, request, session

from ..common.responses import json_body, json_errors
from ..container import Container
from ..core.exceptions import AuthorizationError, DomainError
from .guards import LOGIN_PATH
from .session import (
    REFRESH_TOKEN_COOKIE,
    SESSION_TOKEN_COOKIE,
    clear_auth_cookies,
    establish_session,
    set_token_cookies,
)


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service

    def secure() -> bool:
        return bool(app.config.get("SECURE_COOKIES", False))

    @app.route("/auth/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if request.method == "POST":
            try:
                user = auth.login(request.form.get("email", ""), request.form.get("password", ""))
                establish_session(user)
                flash("Logged in successfully", "success")
                return redirect(user.home_path)
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                app.logger.exception("Login failed")
                flash("Failed to log in", "danger")

        return render_template("auth/login.html", error=request.args.get("error"))

    @app.route("/auth/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        if request.method == "POST":
            try:
                user, tokens = auth.signup(
                    email=request.form.get("email"),
                    password=request.form.get("password"),
                    first_name=request.form.get("first_name"),
                    last_name=request.form.get("last_name"),
                    role=request.form.get("role"),
                )
                if tokens is None and container.auth_provider.is_configured():
                    # provider wants the email confirmed before a session exists
                    return redirect("/auth/signup/success")
                establish_session(user)
                response = make_response(redirect(user.home_path))
                if tokens is not None:
                    set_token_cookies(response, tokens.access_token, tokens.refresh_token, secure=secure(), role=user.role)
                flash("Account created successfully", "success")
                return response
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                app.logger.exception("Signup failed")
                flash("Failed to create account", "danger")

        return render_template("auth/signup.html")

    @app.route("/auth/signup/success", endpoint="signup_success")
    def signup_success():
        return render_template("auth/signup_success.html")

    @app.route("/auth/forgot-password", endpoint="forgot_password")
    def forgot_password():
        return render_template("auth/forgot_password.html")

    @app.route("/auth/signout", endpoint="signout_page")
    def signout_page():
        session.clear()
        flash("Signed out.", "info")
        return clear_auth_cookies(make_response(redirect(LOGIN_PATH)), secure=secure())

    @app.route("/auth/callback", endpoint="auth_callback")
    def auth_callback():
        code = request.args.get("code")
        if not code:
            return redirect(f"{LOGIN_PATH}?error=no_code")
        try:
            user, tokens = auth.complete_oauth(code)
        except AuthorizationError:
            return redirect(f"{LOGIN_PATH}?error=not_authorized")
        except DomainError as e:
            app.logger.error("Error exchanging code for session: %s", e)
            return redirect(f"{LOGIN_PATH}?error=auth_failed")

        establish_session(user)
        response = make_response(redirect(user.home_path))
        return set_token_cookies(response, tokens.access_token, tokens.refresh_token, secure=secure(), role=user.role)

    @app.route("/api/auth/check-email", methods=["POST"], endpoint="api_check_email")
    @json_errors()
    def api_check_email():
        check = auth.check_email(json_body().get("email"))
        if not check.allowed:
            return jsonify({"allowed": False})
        return jsonify(
            {
                "allowed": True,
                "firstName": check.first_name,
                "lastName": check.last_name,
                "role": check.role.value if check.role else None,
            }
        )

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    @json_errors()
    def api_login():
        body = json_body()
        user = auth.login(body.get("email"), body.get("password"))
        establish_session(user)
        return jsonify({"success": True, "user": user.to_dict(), "message": "Logged in successfully"})

    @app.route("/api/auth/signup", methods=["POST"], endpoint="api_signup")
    @json_errors()
    def api_signup():
        body = json_body()
        user, tokens = auth.signup(
            email=body.get("email"),
            password=body.get("password"),
            first_name=body.get("firstName") or body.get("first_name"),
            last_name=body.get("lastName") or body.get("last_name"),
            role=body.get("role"),
        )
        if tokens is None and container.auth_provider.is_configured():
            # provider wants the email confirmed before a session exists
            return jsonify(
                {
                    "success": True,
                    "requiresConfirmation": True,
                    "user": user.to_dict(),
                    "message": "Check your email to confirm your account",
                }
            )
        establish_session(user)
        response = make_response(
            jsonify({"success": True, "user": user.to_dict(), "message": "Account created successfully"})
        )
        if tokens is not None:
            set_token_cookies(response, tokens.access_token, tokens.refresh_token, secure=secure(), role=user.role)
        return response

    @app.route("/api/auth/signout", methods=["POST"], endpoint="api_signout")
    def api_signout():
        session.clear()
        response = make_response(jsonify({"message": "Signed out successfully"}), 200)
        return clear_auth_cookies(response, secure=secure())

    @app.route("/api/auth/user", endpoint="api_current_user")
    @json_errors()
    def api_current_user():
        user = auth.current_user(request.cookies.get(SESSION_TOKEN_COOKIE))
        return jsonify({"success": True, "user": user})

    @app.route("/api/auth/refresh", methods=["POST"], endpoint="api_refresh")
    @json_errors()
    def api_refresh():
        result = auth.refresh(request.cookies.get(REFRESH_TOKEN_COOKIE))
        response = make_response(jsonify({"success": True, "message": "Session refreshed successfully"}))
        return set_token_cookies(response, result.access_token, result.refresh_token, secure=secure())

    @app.route("/api/auth/player", endpoint="api_player")
    @json_errors()
    def api_player():
        player = auth.player(request.cookies.get(SESSION_TOKEN_COOKIE))
        return jsonify({"success": True, "player": player})
