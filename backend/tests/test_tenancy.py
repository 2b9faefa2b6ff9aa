import os

import pytest

from blockcms.domain.errors import ValidationError
from blockcms.storage.tenancy import DEFAULT_TENANT, assert_valid_tenant_id, extract_tenant_id
from conftest import build_test_app, login


@pytest.mark.parametrize(
    "headers, host, expected",
    [
        ({"X-Tenant-ID": "acme"}, "other.example.com", "acme"),
        ({"X-Tenant-ID": "  acme  "}, None, "acme"),
        ({}, "globex.example.com", "globex"),
        ({}, "globex.example.com:8080", "globex"),
        ({}, "example.com", DEFAULT_TENANT),
        ({}, "localhost:5000", DEFAULT_TENANT),
        ({}, None, DEFAULT_TENANT),
        ({"X-Tenant-ID": ""}, "", DEFAULT_TENANT),
    ],
)
def test_extract_tenant_id(headers, host, expected):
    assert extract_tenant_id(headers, host) == expected


@pytest.mark.parametrize("tenant_id", ["", "../etc", "has space", "a" * 64, "semi;colon"])
def test_invalid_tenant_ids_are_rejected(tenant_id):
    with pytest.raises(ValidationError):
        assert_valid_tenant_id(tenant_id)


def test_valid_tenant_id():
    assert assert_valid_tenant_id("Acme_01-eu") == "Acme_01-eu"


@pytest.fixture()
def mt_app(tmp_path):
    app = build_test_app(tmp_path, {"MULTI_TENANT": True})
    yield app
    app.extensions["tenant_resolver"].registry.dispose()


def tenant_client(app, tenant_id):
    client = app.test_client()
    response = login(client, headers={"X-Tenant-ID": tenant_id})
    assert response.status_code == 200
    return client


def test_each_tenant_gets_its_own_store(mt_app):
    acme = tenant_client(mt_app, "acme")
    globex = tenant_client(mt_app, "globex")

    created = acme.post(
        "/api/v1/pages",
        json={"slug": "home", "title": "Acme Home"},
        headers={"X-Tenant-ID": "acme"},
    )
    assert created.status_code == 201

    acme_pages = acme.get("/api/v1/pages", headers={"X-Tenant-ID": "acme"}).get_json()
    globex_pages = globex.get("/api/v1/pages", headers={"X-Tenant-ID": "globex"}).get_json()
    assert acme_pages["total"] == 1
    assert globex_pages["total"] == 0

    # Same slug is free in another tenant
    response = globex.post(
        "/api/v1/pages",
        json={"slug": "home", "title": "Globex Home"},
        headers={"X-Tenant-ID": "globex"},
    )
    assert response.status_code == 201

    data_dir = mt_app.config["DATA_DIR"]
    assert os.path.exists(os.path.join(data_dir, "acme.db"))
    assert os.path.exists(os.path.join(data_dir, "globex.db"))


def test_subdomain_selects_tenant(mt_app):
    client = mt_app.test_client()
    response = client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": "admin123"},
        base_url="http://initech.cms.example.com",
    )
    assert response.status_code == 200
    assert os.path.exists(os.path.join(mt_app.config["DATA_DIR"], "initech.db"))


def test_credential_from_another_tenant_is_forbidden(mt_app):
    acme = tenant_client(mt_app, "acme")

    response = acme.get("/api/v1/pages", headers={"X-Tenant-ID": "globex"})
    assert response.status_code == 403


def test_invalid_tenant_header_is_a_bad_request(mt_app):
    client = mt_app.test_client()

    response = client.get("/api/public/settings", headers={"X-Tenant-ID": "bad tenant!"})
    assert response.status_code == 400
    assert response.get_json()["code"] == 400


def test_health_skips_tenant_resolution(mt_app):
    client = mt_app.test_client()

    response = client.get("/health", headers={"X-Tenant-ID": "bad tenant!"})
    assert response.status_code == 200
    assert response.get_json()["edition"] == "Enterprise"
    assert response.get_json()["multi_tenant"] is True


def test_store_failure_is_an_internal_error(mt_app, monkeypatch):
    registry = mt_app.extensions["tenant_resolver"].registry

    def broken(tenant_id):
        raise OSError("disk gone")

    monkeypatch.setattr(registry, "_connect", broken)

    response = mt_app.test_client().get("/api/public/settings", headers={"X-Tenant-ID": "newco"})
    assert response.status_code == 500
    assert response.get_json()["error"] == "Failed to connect to tenant database"


def test_single_tenant_mode_ignores_tenant_header(client):
    assert login(client, headers={"X-Tenant-ID": "acme"}).status_code == 200
    response = client.get("/api/v1/pages", headers={"X-Tenant-ID": "globex"})
    assert response.status_code == 200
