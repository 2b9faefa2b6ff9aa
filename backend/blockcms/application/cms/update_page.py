import logging
from typing import Any, Dict, Optional

from blockcms.models.page import Page
from blockcms.repositories.page_repository import PageRepository
from blockcms.storage.scope import RequestScope
from blockcms.utils.optimistic_lock import enforce_optimistic_lock
from .page_payload import parse_page_payload

logger = logging.getLogger(__name__)


def update_page(
    *,
    scope: RequestScope,
    page_id: str,
    actor_id: str,
    data: Dict[str, Any],
    if_unmodified_since: Optional[str] = None,
) -> Page:
    """
    Partial update: only fields present in ``data`` change.

    Design rules:
    - blocks/meta absent or null are left untouched; [] / {} clear them
    - a status change re-derives published_at
    - a stale If-Unmodified-Since is rejected before anything is written
    """
    repo = PageRepository(scope)
    page = repo.get_by_id(page_id)

    enforce_optimistic_lock(page, if_unmodified_since)

    changed_fields = repo.update(page, parse_page_payload(data))

    logger.info("page.update id=%s fields=%s by=%s", page.id, changed_fields, actor_id)
    return page
