from typing import Any, Dict, Optional

from blockcms.domain.errors import ConflictError
from blockcms.domain.invariants.page import assert_published_at, assert_required_text
from blockcms.domain.lifecycle.page import STATUS_DRAFT, STATUS_PUBLISHED, apply_status
from blockcms.models.post import Category, Post
from blockcms.utils.pagination import DEFAULT_LIMIT, ListResult, apply_limit_offset
from blockcms.utils.transaction import transactional
from .base import BaseRepository
from .category_repository import CategoryRepository

SLUG_CONFLICT = "A post with this slug already exists"


class PostRepository(BaseRepository):
    model = Post
    not_found_message = "Post not found"

    def __init__(self, scope):
        super().__init__(scope)
        self.categories = CategoryRepository(scope)

    def _assert_slug_available(self, slug, exclude_id=None):
        query = self.session.query(Post).filter(Post.slug == slug)
        if exclude_id is not None:
            query = query.filter(Post.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(SLUG_CONFLICT)

    def create(self, post: Post, category_ids=None) -> Post:
        """The post row and its category links are written together or not at all."""
        assert_required_text(post.title, "title")
        assert_required_text(post.slug, "slug")
        assert_required_text(post.author_id, "author")
        self._assert_slug_available(post.slug)

        post.tenant_id = self.tenant_id
        post.ensure_id()
        for field in ("excerpt", "content", "featured_image"):
            if getattr(post, field) is None:
                setattr(post, field, "")
        apply_status(post, post.status or STATUS_DRAFT)

        categories = self.categories.get_many(category_ids or [])

        with transactional(self.session, SLUG_CONFLICT):
            post.categories = categories
            self.session.add(post)
        return post

    def get_by_slug(self, slug, *, published_only=True) -> Post:
        query = self._query().filter(Post.slug == slug)
        if published_only:
            query = query.filter(Post.status == STATUS_PUBLISHED)
        return self._first_or_raise(query)

    def update(self, post: Post, changes: Dict[str, Any]) -> Post:
        if "slug" in changes and changes["slug"] != post.slug:
            assert_required_text(changes["slug"], "slug")
            self._assert_slug_available(changes["slug"], exclude_id=post.id)
        if "title" in changes:
            assert_required_text(changes["title"], "title")

        # Resolve before touching the entity so unknown ids leave it unchanged
        categories = None
        if changes.get("category_ids") is not None:
            categories = self.categories.get_many(changes["category_ids"])

        with transactional(self.session, SLUG_CONFLICT):
            for field in ("title", "slug", "excerpt", "content", "featured_image"):
                if field in changes:
                    setattr(post, field, changes[field] if changes[field] is not None else "")

            if "status" in changes:
                apply_status(post, changes["status"])
            if categories is not None:
                post.categories = categories

            assert_published_at(post)

        return post

    def delete(self, post_id) -> None:
        post = self.get_by_id(post_id)
        with transactional(self.session):
            self.session.delete(post)

    def list(self, limit=DEFAULT_LIMIT, offset=0, status: Optional[str] = None) -> ListResult:
        query = self._query()
        if status:
            query = query.filter(Post.status == status)
        return self._page(query, limit, offset)

    def list_published(self, limit=DEFAULT_LIMIT, offset=0) -> ListResult:
        return self.list(limit, offset, status=STATUS_PUBLISHED)

    def list_by_category(self, category_id, limit=DEFAULT_LIMIT, offset=0,
                         status: Optional[str] = None) -> ListResult:
        query = self._query().filter(Post.categories.any(Category.id == str(category_id)))
        if status:
            query = query.filter(Post.status == status)
        return self._page(query, limit, offset)

    def _page(self, query, limit, offset) -> ListResult:
        total = query.count()
        query = query.order_by(Post.created_at.desc(), Post.id.desc())
        return ListResult(items=apply_limit_offset(query, limit, offset).all(), total=total)
