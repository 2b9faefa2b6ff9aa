from typing import Any, Dict

from blockcms.domain.errors import ConflictError, ValidationError
from blockcms.domain.invariants.page import assert_required_text
from blockcms.models.post import Category, post_categories
from blockcms.utils.transaction import transactional
from .base import BaseRepository

SLUG_CONFLICT = "A category with this slug already exists"


class CategoryRepository(BaseRepository):
    model = Category
    not_found_message = "Category not found"

    def _assert_slug_available(self, slug, exclude_id=None):
        query = self.session.query(Category).filter(Category.slug == slug)
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(SLUG_CONFLICT)

    def create(self, category: Category) -> Category:
        assert_required_text(category.name, "name")
        assert_required_text(category.slug, "slug")
        self._assert_slug_available(category.slug)

        category.tenant_id = self.tenant_id
        category.ensure_id()
        if category.description is None:
            category.description = ""

        with transactional(self.session, SLUG_CONFLICT):
            self.session.add(category)
        return category

    def get_by_slug(self, slug) -> Category:
        return self._first_or_raise(self._query().filter(Category.slug == slug))

    def get_many(self, category_ids):
        """Every id must resolve; returns categories in the order given."""
        wanted = [str(category_id) for category_id in category_ids]
        if not wanted:
            return []

        found = {
            category.id: category
            for category in self._query().filter(Category.id.in_(wanted)).all()
        }
        missing = [category_id for category_id in wanted if category_id not in found]
        if missing:
            raise ValidationError(f"Unknown category ids: {missing}")

        return [found[category_id] for category_id in dict.fromkeys(wanted)]

    def update(self, category: Category, changes: Dict[str, Any]) -> Category:
        if "slug" in changes and changes["slug"] != category.slug:
            assert_required_text(changes["slug"], "slug")
            self._assert_slug_available(changes["slug"], exclude_id=category.id)
            category.slug = changes["slug"]
        if "name" in changes:
            assert_required_text(changes["name"], "name")
            category.name = changes["name"]
        if "description" in changes:
            category.description = changes["description"] or ""

        self._commit(SLUG_CONFLICT)
        return category

    def delete(self, category_id) -> None:
        category = self.get_by_id(category_id)
        with transactional(self.session):
            # Detach from posts first
            self.session.execute(
                post_categories.delete().where(post_categories.c.category_id == category.id)
            )
            self.session.delete(category)

    def list(self):
        return self._query().order_by(Category.name.asc()).all()
