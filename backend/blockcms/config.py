import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value, default=False):
    if value is None:
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _as_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_list(value):
    return [item.strip() for item in (value or "").split(",") if item.strip()]


def _database_uri(data_dir):
    raw = (os.getenv("DATABASE_URL") or "").strip()
    if raw.startswith("postgres://"):
        raw = raw.replace("postgres://", "postgresql://", 1)
    if raw:
        return raw
    return "sqlite:///" + os.path.join(os.path.abspath(data_dir), "cms.db")


class BaseConfig:
    APP_VERSION = "1.0.0"

    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Storage
    DATA_DIR = os.getenv("DATA_DIR", "./data")
    DB_DRIVER = os.getenv("DB_DRIVER", "sqlite")
    SQLALCHEMY_DATABASE_URI = _database_uri(DATA_DIR)
    TENANT_DATABASE_URL = os.getenv("TENANT_DATABASE_URL")
    MULTI_TENANT = _as_bool(os.getenv("MULTI_TENANT"))
    AUTO_CREATE_TABLES = _as_bool(os.getenv("AUTO_CREATE_TABLES"), default=True)

    # Auth
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
    JWT_TOKEN_LOCATION = ["cookies", "headers"]
    JWT_ACCESS_COOKIE_NAME = "auth_token"
    JWT_ACCESS_COOKIE_PATH = "/"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=_as_int(os.getenv("JWT_EXPIRES_HOURS"), 24))
    JWT_COOKIE_SECURE = _as_bool(os.getenv("JWT_COOKIE_SECURE"))
    JWT_COOKIE_SAMESITE = "Lax"
    JWT_COOKIE_CSRF_PROTECT = _as_bool(os.getenv("JWT_COOKIE_CSRF_PROTECT"))

    # Seeding
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
    ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")

    # Comma-separated origins allowed to call the API with credentials
    CORS_ALLOWED_ORIGINS = _as_list(os.getenv("CORS_ALLOWED_ORIGINS"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class ProductionConfig(BaseConfig):
    DEBUG = False
    JWT_COOKIE_SECURE = _as_bool(os.getenv("JWT_COOKIE_SECURE"), default=True)


class TestingConfig(BaseConfig):
    TESTING = True
    MULTI_TENANT = False
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    ADMIN_PASSWORD = None


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
