from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from blockcms.domain.errors import ValidationError
from blockcms.domain.invariants.page import assert_required_text
from blockcms.models.user import ROLE_ADMIN, ROLE_EDITOR, User
from blockcms.normalizers.pagination import normalize_pagination
from blockcms.normalizers.user import normalize_user
from blockcms.repositories.user_repository import UserRepository
from blockcms.storage.scope import get_scope
from blockcms.utils.decorators import roles_required, tenant_required
from blockcms.utils.pagination import parse_limit_offset
from blockcms.utils.request_body import json_body, pick_text_fields
from . import v1_bp

MIN_PASSWORD_LENGTH = 6


def _assert_password(password):
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


@v1_bp.route("/users", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required(ROLE_ADMIN)
def list_users():
    limit, offset = parse_limit_offset(request.args)
    result = UserRepository(get_scope()).list(limit, offset)
    return jsonify(normalize_pagination(result, normalize_user, limit=limit, offset=offset))


@v1_bp.route("/users/<user_id>", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required(ROLE_ADMIN)
def get_user(user_id):
    return jsonify(normalize_user(UserRepository(get_scope()).get_by_id(user_id)))


@v1_bp.route("/users", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required(ROLE_ADMIN)
def create_user():
    data = json_body()
    fields = pick_text_fields(data, ("name", "email", "role"))

    assert_required_text(fields.get("name"), "name")
    assert_required_text(fields.get("email"), "email")
    _assert_password(data.get("password"))

    user = User(
        name=fields["name"],
        email=fields["email"],
        role=fields.get("role") or ROLE_EDITOR,
    )
    user.set_password(data["password"])

    UserRepository(get_scope()).create(user)
    return jsonify(normalize_user(user)), 201


@v1_bp.route("/users/<user_id>", methods=["PUT"])
@jwt_required()
@tenant_required
@roles_required(ROLE_ADMIN)
def update_user(user_id):
    data = json_body()
    changes = pick_text_fields(data, ("name", "email", "role"))

    for field in ("name", "email"):
        if field in changes:
            assert_required_text(changes[field], field)

    # Empty password means "keep the current one"
    if data.get("password"):
        _assert_password(data["password"])
        changes["password"] = data["password"]

    repo = UserRepository(get_scope())
    user = repo.get_by_id(user_id)
    repo.update(user, changes)
    return jsonify(normalize_user(user))


@v1_bp.route("/users/<user_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
@roles_required(ROLE_ADMIN)
def delete_user(user_id):
    if user_id == get_jwt_identity():
        raise ValidationError("Cannot delete your own account")

    UserRepository(get_scope()).delete(user_id)
    return "", 204
