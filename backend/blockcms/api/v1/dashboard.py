from flask import jsonify
from flask_jwt_extended import jwt_required

from blockcms.repositories.category_repository import CategoryRepository
from blockcms.repositories.menu_repository import MenuRepository
from blockcms.repositories.page_repository import PageRepository
from blockcms.repositories.post_repository import PostRepository
from blockcms.repositories.user_repository import UserRepository
from blockcms.storage.scope import get_scope
from blockcms.utils.decorators import tenant_required
from . import v1_bp


@v1_bp.route("/dashboard/stats", methods=["GET"])
@jwt_required()
@tenant_required
def dashboard_stats():
    scope = get_scope()
    return jsonify({
        "success": True,
        "stats": {
            "pages": PageRepository(scope).count(),
            "posts": PostRepository(scope).count(),
            "categories": CategoryRepository(scope).count(),
            "menus": MenuRepository(scope).count(),
            "users": UserRepository(scope).count(),
        },
    })
