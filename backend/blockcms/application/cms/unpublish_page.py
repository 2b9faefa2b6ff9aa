import logging

from blockcms.models.page import Page
from blockcms.repositories.page_repository import PageRepository
from blockcms.storage.scope import RequestScope

logger = logging.getLogger(__name__)


def unpublish_page(
    *,
    scope: RequestScope,
    page_id: str,
    actor_id: str,
) -> Page:
    """Back to draft; ``published_at`` is cleared."""
    page = PageRepository(scope).unpublish(page_id)
    logger.info("page.unpublish id=%s by=%s", page.id, actor_id)
    return page
