from flask import jsonify, request
from flask_jwt_extended import jwt_required

from blockcms.domain.navigation import parse_menu_items
from blockcms.models.menu import Menu
from blockcms.normalizers.menu import normalize_menu
from blockcms.normalizers.pagination import normalize_pagination
from blockcms.repositories.menu_repository import MenuRepository
from blockcms.storage.scope import get_scope
from blockcms.utils.decorators import tenant_required
from blockcms.utils.pagination import parse_limit_offset
from blockcms.utils.request_body import json_body, pick_text_fields
from . import v1_bp


def _menu_changes(data):
    changes = pick_text_fields(data, ("name", "description"))
    if data.get("items") is not None:
        changes["items"] = parse_menu_items(data["items"])
    return changes


@v1_bp.route("/menus", methods=["POST"])
@jwt_required()
@tenant_required
def create_menu():
    changes = _menu_changes(json_body())

    menu = Menu(name=changes.get("name"), description=changes.get("description", ""))
    menu.items = changes.get("items", [])

    MenuRepository(get_scope()).create(menu)
    return jsonify(normalize_menu(menu)), 201


@v1_bp.route("/menus", methods=["GET"])
@jwt_required()
@tenant_required
def list_menus():
    limit, offset = parse_limit_offset(request.args)
    result = MenuRepository(get_scope()).list(limit, offset)
    return jsonify(normalize_pagination(result, normalize_menu, limit=limit, offset=offset))


@v1_bp.route("/menus/<menu_id>", methods=["GET"])
@jwt_required()
@tenant_required
def get_menu(menu_id):
    return jsonify(normalize_menu(MenuRepository(get_scope()).get_by_id(menu_id)))


@v1_bp.route("/menus/<menu_id>", methods=["PUT"])
@jwt_required()
@tenant_required
def update_menu(menu_id):
    repo = MenuRepository(get_scope())
    menu = repo.get_by_id(menu_id)
    repo.update(menu, _menu_changes(json_body()))
    return jsonify(normalize_menu(menu))


@v1_bp.route("/menus/<menu_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
def delete_menu(menu_id):
    MenuRepository(get_scope()).delete(menu_id)
    return "", 204
