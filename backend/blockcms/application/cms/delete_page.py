import logging

from blockcms.repositories.page_repository import PageRepository
from blockcms.storage.scope import RequestScope

logger = logging.getLogger(__name__)


def delete_page(
    *,
    scope: RequestScope,
    page_id: str,
    actor_id: str,
) -> None:
    """Soft delete; the page disappears from every read but the row is kept."""
    page = PageRepository(scope).delete(page_id)
    logger.info("page.delete id=%s by=%s", page.id, actor_id)
