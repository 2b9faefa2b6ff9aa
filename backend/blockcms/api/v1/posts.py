from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from blockcms.domain.blocks import encode_blocks, parse_blocks
from blockcms.domain.errors import ValidationError
from blockcms.domain.lifecycle.page import assert_valid_status
from blockcms.models.post import Post
from blockcms.normalizers.pagination import normalize_pagination
from blockcms.normalizers.post import normalize_post
from blockcms.repositories.post_repository import PostRepository
from blockcms.storage.scope import get_scope
from blockcms.utils.decorators import tenant_required
from blockcms.utils.pagination import parse_limit_offset
from blockcms.utils.request_body import json_body, pick_text_fields
from . import v1_bp

POST_TEXT_FIELDS = ("title", "slug", "excerpt", "featured_image")


def _post_changes(data):
    changes = pick_text_fields(data, POST_TEXT_FIELDS)

    # Content is free text; a block list is stored in its serialized form
    content = data.get("content")
    if isinstance(content, list):
        changes["content"] = encode_blocks(parse_blocks(content))
    elif content is not None:
        if not isinstance(content, str):
            raise ValidationError("content must be a string or a list of blocks")
        changes["content"] = content

    if data.get("status") is not None:
        changes["status"] = assert_valid_status(data["status"])

    category_ids = data.get("category_ids")
    if category_ids is not None:
        if not isinstance(category_ids, list):
            raise ValidationError("category_ids must be a list")
        changes["category_ids"] = [str(category_id) for category_id in category_ids]

    return changes


@v1_bp.route("/posts", methods=["POST"])
@jwt_required()
@tenant_required
def create_post():
    changes = _post_changes(json_body())

    post = Post(
        title=changes.get("title"),
        slug=changes.get("slug"),
        excerpt=changes.get("excerpt", ""),
        content=changes.get("content", ""),
        featured_image=changes.get("featured_image", ""),
        status=changes.get("status"),
        author_id=get_jwt_identity(),
    )

    PostRepository(get_scope()).create(post, changes.get("category_ids"))
    return jsonify(normalize_post(post)), 201


@v1_bp.route("/posts", methods=["GET"])
@jwt_required()
@tenant_required
def list_posts():
    limit, offset = parse_limit_offset(request.args)

    status = request.args.get("status") or None
    if status:
        assert_valid_status(status)

    repo = PostRepository(get_scope())
    category_id = request.args.get("category_id")
    if category_id:
        result = repo.list_by_category(category_id, limit, offset, status=status)
    else:
        result = repo.list(limit, offset, status=status)

    return jsonify(normalize_pagination(result, normalize_post, limit=limit, offset=offset))


@v1_bp.route("/posts/<post_id>", methods=["GET"])
@jwt_required()
@tenant_required
def get_post(post_id):
    return jsonify(normalize_post(PostRepository(get_scope()).get_by_id(post_id)))


@v1_bp.route("/posts/<post_id>", methods=["PUT"])
@jwt_required()
@tenant_required
def update_post(post_id):
    repo = PostRepository(get_scope())
    post = repo.get_by_id(post_id)
    repo.update(post, _post_changes(json_body()))
    return jsonify(normalize_post(post))


@v1_bp.route("/posts/<post_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
def delete_post(post_id):
    PostRepository(get_scope()).delete(post_id)
    return "", 204
