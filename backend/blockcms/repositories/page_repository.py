from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy import or_

from blockcms.domain.errors import ConflictError
from blockcms.domain.invariants.page import assert_page
from blockcms.domain.lifecycle.page import STATUS_DRAFT, STATUS_PUBLISHED, apply_status, assert_valid_status
from blockcms.models.page import Page
from blockcms.utils.pagination import DEFAULT_LIMIT, ListResult, apply_limit_offset
from blockcms.utils.transaction import transactional
from .base import BaseRepository

SLUG_CONFLICT = "A page with this slug already exists"
ID_CONFLICT = "A page with this id already exists"


def escape_like(term):
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class ListPageOptions:
    limit: int = DEFAULT_LIMIT
    offset: int = 0
    status: Optional[str] = None
    search: Optional[str] = None  # case-insensitive match on title or slug
    tenant_id: Optional[str] = None  # defaults to the scope's tenant


class PageRepository(BaseRepository):
    model = Page
    not_found_message = "Page not found"

    def _query(self, tenant_id=None):
        # Soft-deleted pages are invisible to every read
        return super()._query(tenant_id).filter(Page.deleted_at.is_(None))

    def _assert_slug_available(self, slug, exclude_id=None):
        query = self._query().filter(Page.slug == slug)
        if exclude_id is not None:
            query = query.filter(Page.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(SLUG_CONFLICT)

    def create(self, page: Page) -> Page:
        page.tenant_id = self.tenant_id
        # Soft-deleted rows still hold their id
        if page.id and self.session.get(Page, page.id) is not None:
            raise ConflictError(ID_CONFLICT)
        page.ensure_id()
        if page.blocks_json is None:
            page.blocks_json = "[]"

        apply_status(page, page.status or STATUS_DRAFT)
        assert_page(page)
        self._assert_slug_available(page.slug)

        with transactional(self.session, SLUG_CONFLICT):
            self.session.add(page)

        return page

    def get_by_slug(self, slug: str, *, published_only: bool = False) -> Page:
        query = self._query().filter(Page.slug == slug)
        if published_only:
            query = query.filter(Page.status == STATUS_PUBLISHED)
        return self._first_or_raise(query)

    def update(self, page: Page, changes: Dict[str, Any]) -> list:
        """
        Apply the provided fields only. ``blocks`` and ``meta`` are replaced
        when present (an empty value clears them) and untouched when absent.

        Returns the names of the fields that changed.
        """
        changed_fields = []

        # Reject before touching the entity
        if "status" in changes:
            assert_valid_status(changes["status"])
        if "slug" in changes and changes["slug"] != page.slug:
            self._assert_slug_available(changes["slug"], exclude_id=page.id)

        # A failure below rolls the session back, discarding every assignment
        with transactional(self.session, SLUG_CONFLICT):
            for field in ("title", "slug", "meta"):
                if field in changes and getattr(page, field) != changes[field]:
                    setattr(page, field, changes[field])
                    changed_fields.append(field)

            if "blocks" in changes:
                before = page.blocks_json
                page.blocks = changes["blocks"]
                if page.blocks_json != before:
                    changed_fields.append("blocks")

            if "status" in changes and apply_status(page, changes["status"]):
                changed_fields.append("status")

            assert_page(page)

        return changed_fields

    def delete(self, page_id) -> Page:
        page = self.get_by_id(page_id)
        with transactional(self.session):
            page.soft_delete()
        return page

    def list(self, options: Optional[ListPageOptions] = None) -> ListResult:
        options = options or ListPageOptions()
        query = self._query(options.tenant_id)

        if options.status:
            query = query.filter(Page.status == options.status)

        if options.search:
            pattern = f"%{escape_like(options.search)}%"
            query = query.filter(
                or_(
                    Page.title.ilike(pattern, escape="\\"),
                    Page.slug.ilike(pattern, escape="\\"),
                )
            )

        total = query.count()

        query = query.order_by(Page.updated_at.desc(), Page.id.desc())
        items = apply_limit_offset(query, options.limit, options.offset).all()

        return ListResult(items=items, total=total)

    def set_status(self, page_id, status) -> Page:
        page = self.get_by_id(page_id)
        with transactional(self.session):
            apply_status(page, status)
        return page

    def publish(self, page_id) -> Page:
        return self.set_status(page_id, STATUS_PUBLISHED)

    def unpublish(self, page_id) -> Page:
        return self.set_status(page_id, STATUS_DRAFT)
