from flask import jsonify
from flask_jwt_extended import jwt_required

from blockcms.domain.navigation import GlobalSettings
from blockcms.repositories.settings_repository import SettingsRepository
from blockcms.storage.scope import get_scope
from blockcms.utils.decorators import tenant_required
from blockcms.utils.request_body import json_body
from . import v1_bp


@v1_bp.route("/settings", methods=["GET"])
@jwt_required()
@tenant_required
def get_settings():
    return jsonify(SettingsRepository(get_scope()).get_global_settings().model_dump())


@v1_bp.route("/settings", methods=["PUT"])
@jwt_required()
@tenant_required
def update_settings():
    data = json_body()
    # Unknown keys are ignored; omitted keys keep their stored value
    changes = {key: data[key] for key in GlobalSettings.model_fields if key in data}

    settings = SettingsRepository(get_scope()).update_global_settings(changes)
    return jsonify(settings.model_dump())
