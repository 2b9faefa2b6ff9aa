from datetime import timedelta

from flask_jwt_extended import create_access_token

from blockcms.models.user import User
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, JWT_SECRET, login


def token_from(response):
    for header in response.headers.getlist("Set-Cookie"):
        if header.startswith("auth_token="):
            return header.split("auth_token=", 1)[1].split(";", 1)[0]
    raise AssertionError("auth_token cookie not set")


def test_password_hashes_are_salted():
    first = User(name="A", email="a@example.com")
    second = User(name="B", email="b@example.com")
    first.set_password("same-password")
    second.set_password("same-password")

    assert first.password_hash != second.password_hash
    assert "same-password" not in first.password_hash
    assert first.check_password("same-password")
    assert second.check_password("same-password")
    assert not first.check_password("other")
    assert not first.check_password("")


def test_login_sets_http_only_cookie(client):
    response = login(client)

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["user"]["email"] == ADMIN_EMAIL
    assert body["user"]["role"] == "admin"
    assert "password_hash" not in body["user"]

    assert token_from(response)
    cookie = next(h for h in response.headers.getlist("Set-Cookie") if h.startswith("auth_token="))
    assert "HttpOnly" in cookie


def test_login_failures_do_not_reveal_which_part_was_wrong(client):
    wrong_password = login(client, password="nope-nope")
    unknown_email = login(client, email="ghost@example.com")

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.get_json() == unknown_email.get_json()


def test_login_requires_email_and_password(client):
    assert client.post("/api/auth/login", json={"email": ADMIN_EMAIL}).status_code == 400
    assert client.post("/api/auth/login", data="garbage").status_code == 400


def test_email_lookup_is_case_insensitive(client):
    assert login(client, email=ADMIN_EMAIL.upper(), password=ADMIN_PASSWORD).status_code == 200


def test_me_with_cookie(auth_client):
    response = auth_client.get("/api/auth/me")

    assert response.status_code == 200
    assert response.get_json()["user"]["email"] == ADMIN_EMAIL


def test_me_with_bearer_header(app, client):
    token = token_from(login(client))
    fresh = app.test_client()

    response = fresh.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_missing_token_is_401(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.get_json()["code"] == 401


def test_malformed_token_is_401(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-real-token"})
    assert response.status_code == 401
    assert response.get_json()["code"] == 401


def test_expired_token_is_401(app, client):
    with app.app_context():
        token = create_access_token(
            identity="someone",
            additional_claims={"tenant_id": ""},
            expires_delta=timedelta(seconds=-10),
        )

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.get_json()["code"] == 401


def test_token_signed_with_other_key_is_401(app, client):
    with app.app_context():
        app.config["JWT_SECRET_KEY"] = "a-completely-different-secret-key-value"
        token = create_access_token(identity="someone")
    app.config["JWT_SECRET_KEY"] = JWT_SECRET

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_logout_clears_cookie(auth_client):
    response = auth_client.post("/api/auth/logout")
    assert response.status_code == 200

    assert auth_client.get("/api/auth/me").status_code == 401


def test_health_is_public(client):
    body = client.get("/health").get_json()

    assert body["status"] == "ok"
    assert body["edition"] == "Community"
    assert body["multi_tenant"] is False
    assert body["database"] == "sqlite"
    assert body["version"]


def test_openapi_document_is_served(client):
    response = client.get("/openapi/cms.yaml")
    assert response.status_code == 200
    assert b"/api/v1/pages" in response.data
