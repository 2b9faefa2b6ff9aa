from flask import jsonify
from flask_jwt_extended import jwt_required

from blockcms.models.post import Category
from blockcms.normalizers.post import normalize_category
from blockcms.repositories.category_repository import CategoryRepository
from blockcms.storage.scope import get_scope
from blockcms.utils.decorators import tenant_required
from blockcms.utils.request_body import json_body, pick_text_fields
from . import v1_bp

CATEGORY_FIELDS = ("name", "slug", "description")


@v1_bp.route("/categories", methods=["POST"])
@jwt_required()
@tenant_required
def create_category():
    changes = pick_text_fields(json_body(), CATEGORY_FIELDS)
    category = Category(
        name=changes.get("name"),
        slug=changes.get("slug"),
        description=changes.get("description", ""),
    )
    CategoryRepository(get_scope()).create(category)
    return jsonify(normalize_category(category)), 201


@v1_bp.route("/categories", methods=["GET"])
@jwt_required()
@tenant_required
def list_categories():
    categories = CategoryRepository(get_scope()).list()
    return jsonify({
        "data": [normalize_category(c) for c in categories],
        "total": len(categories),
    })


@v1_bp.route("/categories/<category_id>", methods=["GET"])
@jwt_required()
@tenant_required
def get_category(category_id):
    return jsonify(normalize_category(CategoryRepository(get_scope()).get_by_id(category_id)))


@v1_bp.route("/categories/<category_id>", methods=["PUT"])
@jwt_required()
@tenant_required
def update_category(category_id):
    repo = CategoryRepository(get_scope())
    category = repo.get_by_id(category_id)
    repo.update(category, pick_text_fields(json_body(), CATEGORY_FIELDS))
    return jsonify(normalize_category(category))


@v1_bp.route("/categories/<category_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
def delete_category(category_id):
    CategoryRepository(get_scope()).delete(category_id)
    return "", 204
