from http import HTTPStatus

import pytest


def _register(client, email="student@example.com", password="Secret123!", name="Student One"):
    return client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )


def test_register_and_login_flow(client):
    resp = _register(client)
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"message": "Registration successful"}

    login_resp = client.post(
        "/api/auth/login",
        json={"email": "student@example.com", "password": "Secret123!"},
    )
    assert login_resp.status_code == HTTPStatus.OK
    user = login_resp.json()["user"]
    assert user["email"] == "student@example.com"
    assert user["name"] == "Student One"
    assert user["role"] == "CASEWORKER"
    assert set(user) == {"id", "email", "name", "role"}
    assert "password" not in login_resp.text


def test_register_duplicate_email_fails(client):
    assert _register(client).status_code == HTTPStatus.OK

    resp = _register(client, password="Other456!", name="Somebody Else")
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json()["detail"] == "Email already exists."


def test_register_seeded_admin_email_fails(client):
    resp = _register(client, email="admin@example.com")
    assert resp.status_code == HTTPStatus.BAD_REQUEST


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@example.com", "password": "Secret123!"},
        {"name": "A", "password": "Secret123!"},
        {"name": "A", "email": "a@example.com"},
        {"name": "", "email": "a@example.com", "password": "Secret123!"},
    ],
)
def test_register_missing_fields_returns_400(client, payload):
    resp = client.post("/api/auth/register", json=payload)
    assert resp.status_code == HTTPStatus.BAD_REQUEST


def test_login_failures_are_indistinguishable(client):
    _register(client)

    unknown = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "Secret123!"},
    )
    wrong = client.post(
        "/api/auth/login",
        json={"email": "student@example.com", "password": "not-it"},
    )

    assert unknown.status_code == HTTPStatus.UNAUTHORIZED
    assert wrong.status_code == HTTPStatus.UNAUTHORIZED
    assert unknown.json() == wrong.json() == {"detail": "Invalid email or password."}


def test_login_email_is_case_sensitive(client):
    _register(client, email="Student@Example.com")
    resp = client.post(
        "/api/auth/login",
        json={"email": "student@example.com", "password": "Secret123!"},
    )
    assert resp.status_code == HTTPStatus.UNAUTHORIZED


def test_login_missing_fields_returns_400(client):
    resp = client.post("/api/auth/login", json={"email": "admin@example.com"})
    assert resp.status_code == HTTPStatus.BAD_REQUEST


def test_me_requires_login(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == HTTPStatus.UNAUTHORIZED


def test_me_and_logout(admin_client):
    me = admin_client.get("/api/auth/me")
    assert me.status_code == HTTPStatus.OK
    assert me.json()["email"] == "admin@example.com"
    assert me.json()["role"] == "ADMIN"
    assert me.json()["isActive"] is True

    assert admin_client.post("/api/auth/logout").status_code == HTTPStatus.OK
    assert admin_client.get("/api/auth/me").status_code == HTTPStatus.UNAUTHORIZED


def test_end_to_end_alice(client):
    assert _register(client, email="alice@x.com", password="secret123", name="Alice").status_code == 200

    login_resp = client.post("/api/auth/login", json={"email": "alice@x.com", "password": "secret123"})
    assert login_resp.status_code == HTTPStatus.OK

    users = client.get("/api/users").json()
    alices = [u for u in users if u["email"] == "alice@x.com"]
    assert len(alices) == 1
    assert alices[0]["role"] == "CASEWORKER"
    assert alices[0]["isActive"] is True
    assert not any(key.lower().startswith("password") for key in alices[0])


def test_credentials_are_not_trimmed(client):
    resp = _register(client, email=" padded@example.com ", password="  secret  ")
    assert resp.status_code == HTTPStatus.OK

    trimmed = client.post(
        "/api/auth/login",
        json={"email": " padded@example.com ", "password": "secret"},
    )
    assert trimmed.status_code == HTTPStatus.UNAUTHORIZED

    exact = client.post(
        "/api/auth/login",
        json={"email": " padded@example.com ", "password": "  secret  "},
    )
    assert exact.status_code == HTTPStatus.OK
    assert exact.json()["user"]["email"] == " padded@example.com "

    emails = [u["email"] for u in client.get("/api/users").json()]
    assert " padded@example.com " in emails
    assert "padded@example.com" not in emails


def test_whitespace_password_is_accepted(client):
    resp = _register(client, email="blank@example.com", password="   ")
    assert resp.status_code == HTTPStatus.OK

    login = client.post("/api/auth/login", json={"email": "blank@example.com", "password": "   "})
    assert login.status_code == HTTPStatus.OK
