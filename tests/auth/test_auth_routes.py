from __future__ import annotations

from conftest import FakeAccounts, FakeProvider

from dink_admin.auth.model import ProviderUser
from dink_admin.auth.service import AuthService
from dink_admin.core.exceptions import ConfigurationError


def test_check_email_endpoint(client):
    ok = client.post("/api/auth/check-email", json={"email": "sam.coach@dinkhouse.com"})
    missing = client.post("/api/auth/check-email", json={"email": "nobody@x.com"})

    assert ok.get_json() == {"allowed": True, "firstName": "Sam", "lastName": "Ray", "role": "coach"}
    assert missing.get_json() == {"allowed": False}


def test_api_login_unlisted_is_401(client, login):
    response = login(client, email="intruder@x.com")

    assert response.status_code == 401
    assert response.get_json()["error"] == "Invalid email or password"


def test_api_login_missing_password_is_400(client, login):
    assert login(client, password="").status_code == 400


def test_signup_not_allowed_is_403(client):
    response = client.post(
        "/api/auth/signup",
        json={"email": "intruder@x.com", "password": "long-enough", "firstName": "I", "lastName": "X"},
    )
    assert response.status_code == 403


def test_signup_sets_token_cookies(client):
    response = client.post(
        "/api/auth/signup",
        json={"email": "sam.coach@dinkhouse.com", "password": "long-enough", "firstName": "Sam", "lastName": "Ray"},
    )

    assert response.status_code == 200
    cookies = " ".join(response.headers.getlist("Set-Cookie"))
    assert "session_token=" in cookies
    assert "access-sam.coach" in cookies
    assert "user_role=coach" in cookies


def test_refresh_without_cookie_is_401(client):
    assert client.post("/api/auth/refresh").status_code == 401


def test_callback_without_code_redirects(client):
    response = client.get("/auth/callback")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/auth/login?error=no_code")


def test_callback_unlisted_email_is_not_authorized(make_app, provider):
    provider.codes["xyz"] = "intruder@x.com"
    response = make_app().test_client().get("/auth/callback?code=xyz")

    assert response.headers["Location"].endswith("/auth/login?error=not_authorized")


def test_signout_clears_cookies(client):
    response = client.post("/api/auth/signout")

    assert response.get_json() == {"message": "Signed out successfully"}
    assert "session_token=;" in " ".join(response.headers.getlist("Set-Cookie"))


def _cookies(response):
    return " ".join(response.headers.getlist("Set-Cookie"))


def _app_with_accounts(make_app, allowed_repo, provider, accounts):
    return make_app(auth_service=AuthService(allowed_repo, accounts, provider))


def test_current_user_without_cookie_is_401(client):
    assert client.get("/api/auth/user").status_code == 401


def test_current_user_unknown_session_is_404(client):
    client.set_cookie("session_token", "stale")
    response = client.get("/api/auth/user")

    assert response.status_code == 404
    assert response.get_json() == {"success": False, "error": "User not found"}


def test_current_user_found(make_app, allowed_repo, provider):
    accounts = FakeAccounts(users={"tok": {"id": "u1", "email": "pat.manager@dinkhouse.com"}})
    client = _app_with_accounts(make_app, allowed_repo, provider, accounts).test_client()
    client.set_cookie("session_token", "tok")

    response = client.get("/api/auth/user")

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "user": {"id": "u1", "email": "pat.manager@dinkhouse.com"}}


class UnconfiguredAccounts(FakeAccounts):
    def get_user_by_session(self, session_token):
        raise ConfigurationError("SUPABASE_URL is not set")


def test_current_user_without_backend_is_500(make_app, allowed_repo, provider):
    client = _app_with_accounts(make_app, allowed_repo, provider, UnconfiguredAccounts()).test_client()
    client.set_cookie("session_token", "tok")

    assert client.get("/api/auth/user").status_code == 500


def test_player_without_cookie_is_401(client):
    assert client.get("/api/auth/player").status_code == 401


def test_player_missing_is_404(client, provider):
    provider.users["tok"] = ProviderUser(id="acct-1", email="sam.coach@dinkhouse.com")
    client.set_cookie("session_token", "tok")

    response = client.get("/api/auth/player")

    assert response.status_code == 404
    assert response.get_json()["error"] == "Player not found"


def test_player_found(make_app, allowed_repo, provider):
    provider.users["tok"] = ProviderUser(id="acct-1", email="sam.coach@dinkhouse.com")
    accounts = FakeAccounts(players={"acct-1": {"id": "p1", "first_name": "Sam"}})
    client = _app_with_accounts(make_app, allowed_repo, provider, accounts).test_client()
    client.set_cookie("session_token", "tok")

    response = client.get("/api/auth/player")

    assert response.get_json() == {"success": True, "player": {"id": "p1", "first_name": "Sam"}}


def test_refresh_rewrites_both_token_cookies(client):
    client.set_cookie("refresh_token", "good-refresh")

    response = client.post("/api/auth/refresh")

    assert response.status_code == 200
    assert response.get_json()["success"] is True
    assert "session_token=new-access" in _cookies(response)
    assert "refresh_token=new-refresh" in _cookies(response)


def test_refresh_with_rejected_token_is_401(client):
    client.set_cookie("refresh_token", "revoked")
    assert client.post("/api/auth/refresh").status_code == 401


class ConfirmingProvider(FakeProvider):
    """Provider that holds the session back until the email is confirmed."""

    def sign_up(self, *, email, password, metadata):
        super().sign_up(email=email, password=password, metadata=metadata)
        return None


def test_signup_awaiting_confirmation_starts_no_session(make_app, allowed_repo):
    provider = ConfirmingProvider()
    app = make_app(auth_service=AuthService(allowed_repo, FakeAccounts(), provider), auth_provider=provider)
    client = app.test_client()

    response = client.post(
        "/api/auth/signup",
        json={"email": "sam.coach@dinkhouse.com", "password": "long-enough", "firstName": "Sam", "lastName": "Ray"},
    )

    assert response.status_code == 200
    assert response.get_json()["requiresConfirmation"] is True
    assert "session_token=" not in _cookies(response)
    assert provider.signups[0]["email"] == "sam.coach@dinkhouse.com"
    with client.session_transaction() as sess:
        assert dict(sess) == {}
    assert client.get("/dashboard/session_booking").status_code == 302
