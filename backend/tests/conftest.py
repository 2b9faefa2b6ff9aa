import uuid

import pytest

from blockcms import create_app
from blockcms.extensions import db
from blockcms.storage.scope import default_scope

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"
JWT_SECRET = "test-jwt-secret-key-with-enough-length"


def build_test_app(tmp_path, overrides=None):
    db_path = tmp_path / f"cms_test_{uuid.uuid4().hex[:8]}.db"

    config = {
        "TESTING": True,
        "SECRET_KEY": "test-secret-key",
        "JWT_SECRET_KEY": JWT_SECRET,
        "JWT_COOKIE_CSRF_PROTECT": False,
        "JWT_COOKIE_SECURE": False,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_path}",
        "DATA_DIR": str(tmp_path / "data"),
        "DB_DRIVER": "sqlite",
        "MULTI_TENANT": False,
        "ADMIN_EMAIL": ADMIN_EMAIL,
        "ADMIN_NAME": "Admin",
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
    }
    if overrides:
        config.update(overrides)

    return create_app("testing", config)


@pytest.fixture()
def app(tmp_path):
    app = build_test_app(tmp_path)
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def scope(app):
    with app.app_context():
        yield default_scope()


def login(client, email=ADMIN_EMAIL, password=ADMIN_PASSWORD, headers=None):
    return client.post(
        "/api/auth/login",
        json={"email": email, "password": password},
        headers=headers or {},
    )


@pytest.fixture()
def auth_client(client):
    response = login(client)
    assert response.status_code == 200
    return client
