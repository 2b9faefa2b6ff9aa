from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check():
    multi_tenant = bool(current_app.config.get("MULTI_TENANT"))
    return jsonify({
        "status": "ok",
        "version": current_app.config.get("APP_VERSION"),
        "edition": "Enterprise" if multi_tenant else "Community",
        "database": current_app.config.get("DB_DRIVER"),
        "multi_tenant": multi_tenant,
    })
