import logging
from typing import Any, Dict

from blockcms.domain.invariants.page import assert_required_text
from blockcms.domain.lifecycle.page import STATUS_DRAFT
from blockcms.models.page import Page
from blockcms.repositories.page_repository import PageRepository
from blockcms.storage.scope import RequestScope
from .page_payload import parse_page_payload

logger = logging.getLogger(__name__)


def create_page(
    *,
    scope: RequestScope,
    actor_id: str,
    data: Dict[str, Any],
) -> Page:
    """
    Create a page from a request body.

    Edge cases handled:
    - Missing title or slug
    - Duplicate slug within the tenant
    - Malformed blocks (non-list, missing id/type, duplicate ids)
    """
    changes = parse_page_payload(data)

    assert_required_text(changes.get("title"), "title")
    assert_required_text(changes.get("slug"), "slug")

    page = Page(
        title=changes["title"],
        slug=changes["slug"],
        status=changes.get("status", STATUS_DRAFT),
        meta=changes.get("meta"),
    )
    if data.get("id"):
        page.id = str(data["id"])
    page.blocks = changes.get("blocks", [])

    PageRepository(scope).create(page)

    logger.info("page.create id=%s slug=%s by=%s", page.id, page.slug, actor_id)
    return page
