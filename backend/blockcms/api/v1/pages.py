from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from blockcms.application.cms.create_page import create_page as create_page_service
from blockcms.application.cms.delete_page import delete_page as delete_page_service
from blockcms.application.cms.publish_page import publish_page as publish_page_service
from blockcms.application.cms.unpublish_page import unpublish_page as unpublish_page_service
from blockcms.application.cms.update_page import update_page as update_page_service
from blockcms.domain.lifecycle.page import assert_valid_status
from blockcms.normalizers.page import normalize_page
from blockcms.normalizers.pagination import normalize_pagination
from blockcms.repositories.page_repository import ListPageOptions, PageRepository
from blockcms.storage.scope import get_scope
from blockcms.utils.decorators import tenant_required
from blockcms.utils.pagination import parse_limit_offset
from blockcms.utils.request_body import json_body
from . import v1_bp


# ------------------------
# Pages
# ------------------------

@v1_bp.route("/pages", methods=["POST"])
@jwt_required()
@tenant_required
def create_page():
    page = create_page_service(
        scope=get_scope(),
        actor_id=get_jwt_identity(),
        data=json_body(),
    )
    return jsonify(normalize_page(page)), 201


@v1_bp.route("/pages", methods=["GET"])
@jwt_required()
@tenant_required
def list_pages():
    limit, offset = parse_limit_offset(request.args)

    status = request.args.get("status") or None
    if status:
        assert_valid_status(status)

    result = PageRepository(get_scope()).list(
        ListPageOptions(
            limit=limit,
            offset=offset,
            status=status,
            search=(request.args.get("search") or "").strip() or None,
        )
    )
    return jsonify(normalize_pagination(result, normalize_page, limit=limit, offset=offset))


@v1_bp.route("/pages/<page_id>", methods=["GET"])
@jwt_required()
@tenant_required
def get_page(page_id):
    page = PageRepository(get_scope()).get_by_id(page_id)
    return jsonify(normalize_page(page))


@v1_bp.route("/pages/<page_id>", methods=["PUT"])
@jwt_required()
@tenant_required
def update_page(page_id):
    page = update_page_service(
        scope=get_scope(),
        page_id=page_id,
        actor_id=get_jwt_identity(),
        data=json_body(),
        if_unmodified_since=request.headers.get("If-Unmodified-Since"),
    )
    return jsonify(normalize_page(page))


@v1_bp.route("/pages/<page_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
def delete_page(page_id):
    delete_page_service(scope=get_scope(), page_id=page_id, actor_id=get_jwt_identity())
    return "", 204


@v1_bp.route("/pages/<page_id>/publish", methods=["POST"])
@jwt_required()
@tenant_required
def publish_page(page_id):
    page = publish_page_service(scope=get_scope(), page_id=page_id, actor_id=get_jwt_identity())
    return jsonify(normalize_page(page))


@v1_bp.route("/pages/<page_id>/unpublish", methods=["POST"])
@jwt_required()
@tenant_required
def unpublish_page(page_id):
    page = unpublish_page_service(scope=get_scope(), page_id=page_id, actor_id=get_jwt_identity())
    return jsonify(normalize_page(page))
