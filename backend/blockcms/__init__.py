import logging
import os

from flask import Flask, current_app, send_file
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.auth import auth_bp
from .api.health import health_bp
from .api.public import public_bp
from .api.v1 import v1_bp
from .errors import register_error_handlers, register_jwt_error_handlers
from .logging_setup import configure_logging
from .middleware.cors import cors_middleware
from .middleware.tenant_middleware import tenant_middleware
from .seed import seed_admin_command, seed_admin_if_empty
from .storage.scope import default_scope
from .storage.tenancy import enable_sqlite_foreign_keys
from . import models  # noqa: F401  (register tables on db.metadata)

logger = logging.getLogger(__name__)


def create_app(config_name: str = "development", config_overrides=None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    if config_overrides:
        app.config.update(config_overrides)

    if not app.config.get("JWT_SECRET_KEY"):
        raise RuntimeError("JWT_SECRET_KEY must be set")
    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = app.config["JWT_SECRET_KEY"]

    configure_logging(app)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    register_jwt_error_handlers(jwt)

    # -------------------------------------------------
    # Middleware
    # -------------------------------------------------
    resolver = tenant_middleware(
        app,
        on_store_ready=lambda scope: seed_admin_if_empty(scope, app.config),
    )
    cors_middleware(app)

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(public_bp, url_prefix="/api/public")
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)

    app.cli.add_command(seed_admin_command)

    # -------------------------------------------------
    # Shared store (single-tenant mode)
    # -------------------------------------------------
    if resolver is None:
        with app.app_context():
            enable_sqlite_foreign_keys(db.engine)
            if app.config.get("AUTO_CREATE_TABLES"):
                if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite:///"):
                    os.makedirs(app.config["DATA_DIR"], exist_ok=True)
                db.create_all()
                seed_admin_if_empty(default_scope(), app.config)

    # -------------------------------------------------
    # Serve OpenAPI YAML (PUBLIC, NO TENANT)
    # -------------------------------------------------
    @app.route("/openapi/cms.yaml", methods=["GET"], endpoint="openapi_cms")
    def serve_openapi():
        openapi_path = os.path.join(
            current_app.root_path,
            "api",
            "cms_openapi.yaml",
        )

        if not os.path.exists(openapi_path):
            raise FileNotFoundError("cms_openapi.yaml not found")

        return send_file(
            openapi_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/cms.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Block CMS API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    logger.info(
        "Block CMS started (edition=%s, driver=%s)",
        "Enterprise" if resolver is not None else "Community",
        app.config.get("DB_DRIVER"),
    )
    return app
