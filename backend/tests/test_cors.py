import pytest

from conftest import build_test_app

SPA_ORIGIN = "http://localhost:5173"


@pytest.fixture()
def cors_client(tmp_path):
    app = build_test_app(tmp_path, {"CORS_ALLOWED_ORIGINS": [SPA_ORIGIN]})
    return app.test_client()


def test_allowed_origin_gets_credentialed_headers(cors_client):
    response = cors_client.get("/health", headers={"Origin": SPA_ORIGIN})

    assert response.headers["Access-Control-Allow-Origin"] == SPA_ORIGIN
    assert response.headers["Access-Control-Allow-Credentials"] == "true"
    assert "Origin" in response.headers.get("Vary", "")


def test_preflight_echoes_requested_headers(cors_client):
    response = cors_client.options("/api/v1/pages", headers={
        "Origin": SPA_ORIGIN,
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "Content-Type, Authorization",
    })

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Headers"] == "Content-Type, Authorization"
    assert "PUT" in response.headers["Access-Control-Allow-Methods"]


def test_unknown_origin_is_not_echoed(cors_client):
    response = cors_client.get("/health", headers={"Origin": "https://evil.example"})

    assert response.status_code == 200
    assert "Access-Control-Allow-Origin" not in response.headers


def test_cors_is_off_without_allow_list(client):
    response = client.get("/health", headers={"Origin": SPA_ORIGIN})
    assert "Access-Control-Allow-Origin" not in response.headers


def test_preflight_skips_tenant_resolution(tmp_path):
    app = build_test_app(tmp_path, {
        "MULTI_TENANT": True,
        "CORS_ALLOWED_ORIGINS": [SPA_ORIGIN],
    })
    client = app.test_client()

    response = client.options("/api/v1/pages", headers={
        "Origin": SPA_ORIGIN,
        "X-Tenant-ID": "bad tenant!",
    })

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == SPA_ORIGIN
