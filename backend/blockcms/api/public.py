"""Unauthenticated read-only endpoints used by the public site."""
from flask import Blueprint, jsonify, request

from blockcms.normalizers.menu import normalize_menu
from blockcms.normalizers.page import normalize_page
from blockcms.normalizers.pagination import normalize_pagination
from blockcms.normalizers.post import normalize_post
from blockcms.repositories.category_repository import CategoryRepository
from blockcms.repositories.menu_repository import MenuRepository
from blockcms.repositories.page_repository import PageRepository
from blockcms.repositories.post_repository import PostRepository
from blockcms.repositories.settings_repository import SettingsRepository
from blockcms.storage.scope import get_scope
from blockcms.utils.pagination import parse_limit_offset

public_bp = Blueprint("public", __name__)


@public_bp.route("/pages/<path:slug>", methods=["GET"])
def get_page(slug):
    page = PageRepository(get_scope()).get_by_slug(slug.strip("/"), published_only=True)
    return jsonify(normalize_page(page, admin=False))


@public_bp.route("/menus/<menu_id>", methods=["GET"])
def get_menu(menu_id):
    return jsonify(normalize_menu(MenuRepository(get_scope()).get_by_id(menu_id)))


@public_bp.route("/settings", methods=["GET"])
def get_settings():
    return jsonify(SettingsRepository(get_scope()).get_global_settings().model_dump())


@public_bp.route("/posts", methods=["GET"])
def list_posts():
    limit, offset = parse_limit_offset(request.args)
    scope = get_scope()
    repo = PostRepository(scope)

    category_slug = request.args.get("category")
    if category_slug:
        category = CategoryRepository(scope).get_by_slug(category_slug)
        result = repo.list_by_category(category.id, limit, offset, status="published")
    else:
        result = repo.list_published(limit, offset)

    return jsonify(normalize_pagination(result, normalize_post, limit=limit, offset=offset))


@public_bp.route("/posts/<slug>", methods=["GET"])
def get_post(slug):
    return jsonify(normalize_post(PostRepository(get_scope()).get_by_slug(slug)))
