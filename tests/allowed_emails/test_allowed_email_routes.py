from __future__ import annotations


def test_admin_add_duplicate_is_409(client):
    response = client.post("/api/admin/allowed-emails", json={"email": "pat.manager@dinkhouse.com"})

    assert response.status_code == 409
    assert response.get_json()["success"] is False


def test_public_add_returns_message(client):
    response = client.post("/api/allowed-emails", json={"email": "new@x.com", "firstName": "New"})
    body = response.get_json()

    assert response.status_code == 200
    assert body["message"] == "Email new@x.com has been added to the allowed list"
    assert body["data"]["role"] == "admin"


def test_public_add_duplicate_is_409(client):
    response = client.post("/api/allowed-emails", json={"email": "sam.coach@dinkhouse.com"})
    assert response.status_code == 409


def test_public_check_lists_when_no_email(client):
    body = client.get("/api/allowed-emails").get_json()

    assert body["count"] == 2
    assert {"email", "role", "name", "is_used"} <= set(body["emails"][0])


def test_admin_list_never_exposes_password_hash(client):
    rows = client.get("/api/admin/allowed-emails").get_json()
    assert all("password_hash" not in row for row in rows)
