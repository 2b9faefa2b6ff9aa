import logging

from flask import Blueprint, jsonify
from flask_jwt_extended import (
    create_access_token,
    get_jwt_identity,
    jwt_required,
    set_access_cookies,
    unset_jwt_cookies,
)

from blockcms.domain.errors import AuthError, NotFoundError, ValidationError
from blockcms.normalizers.user import normalize_user
from blockcms.repositories.user_repository import UserRepository
from blockcms.storage.scope import get_scope
from blockcms.utils.decorators import tenant_required
from blockcms.utils.request_body import json_body

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _public_user(user):
    data = normalize_user(user)
    return {key: data[key] for key in ("id", "name", "email", "role")}


@auth_bp.route("/login", methods=["POST"])
def login():
    data = json_body()

    email = data.get("email")
    password = data.get("password")
    if not isinstance(email, str) or not email.strip() or not isinstance(password, str) or not password:
        raise ValidationError("Email and password are required")

    scope = get_scope()
    try:
        user = UserRepository(scope).get_by_email(email)
    except NotFoundError:
        user = None

    # Same answer whether the email is unknown or the password is wrong
    if user is None or not user.check_password(password):
        logger.info("Failed login attempt")
        raise AuthError(INVALID_CREDENTIALS)

    access_token = create_access_token(
        identity=user.id,
        additional_claims={
            "email": user.email,
            "role": user.role,
            "tenant_id": scope.tenant_id,
        },
    )

    response = jsonify({
        "success": True,
        "message": "Login successful",
        "user": _public_user(user),
    })
    set_access_cookies(response, access_token)
    return response, 200


@auth_bp.route("/logout", methods=["POST"])
def logout():
    response = jsonify({"success": True, "message": "Logged out successfully"})
    unset_jwt_cookies(response)
    return response, 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
@tenant_required
def me():
    user = UserRepository(get_scope()).get_by_id(get_jwt_identity())
    return jsonify({"success": True, "user": _public_user(user)})
