import logging

from blockcms.models.page import Page
from blockcms.repositories.page_repository import PageRepository
from blockcms.storage.scope import RequestScope

logger = logging.getLogger(__name__)


def publish_page(
    *,
    scope: RequestScope,
    page_id: str,
    actor_id: str,
) -> Page:
    """
    Publishes a page. ``published_at`` is stamped in the same write; a page
    that is already published keeps its first timestamp.
    """
    page = PageRepository(scope).publish(page_id)
    logger.info("page.publish id=%s by=%s", page.id, actor_id)
    return page
