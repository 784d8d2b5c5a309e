from __future__ import annotations


def test_unauthenticated_page_redirects_to_login(client):
    response = client.get("/dashboard/session_booking")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/auth/login")


def test_api_routes_are_never_redirected(client):
    response = client.get("/api/admin/allowed-emails")

    assert response.status_code == 200
    assert isinstance(response.get_json(), list)


def test_non_admin_is_sent_to_employee_dashboard(client, login):
    login(client, email="sam.coach@dinkhouse.com")
    response = client.get("/admin/allowed-emails")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/employee/dashboard")


def test_logged_in_user_leaves_public_pages(client, login):
    login(client)
    response = client.get("/auth/login")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/")


def test_public_pages_render_without_session(client):
    assert client.get("/auth/login").status_code == 200
    assert client.get("/auth/signup").status_code == 200
