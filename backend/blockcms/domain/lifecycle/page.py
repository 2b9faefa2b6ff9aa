from datetime import datetime, timezone
from typing import Optional

from ..errors import ValidationError

STATUS_DRAFT = "draft"
STATUS_PUBLISHED = "published"
STATUS_ARCHIVED = "archived"

# Any status is reachable from any other; transitions are externally triggered
PUBLICATION_STATUSES = frozenset({STATUS_DRAFT, STATUS_PUBLISHED, STATUS_ARCHIVED})


def assert_valid_status(status) -> str:
    if status not in PUBLICATION_STATUSES:
        raise ValidationError(
            "Invalid status. Must be 'draft', 'published', or 'archived'"
        )
    return status


def apply_status(entity, status: str, *, now: Optional[datetime] = None) -> bool:
    """
    Single source of truth for status changes on pages and posts.

    ``published_at`` mirrors the status: stamped when the entity enters
    ``published``, cleared when it leaves. Re-applying ``published`` keeps the
    first timestamp.

    Returns True when the status changed.
    """
    assert_valid_status(status)
    previous = entity.status

    entity.status = status

    if status == STATUS_PUBLISHED:
        if previous != STATUS_PUBLISHED or entity.published_at is None:
            entity.published_at = now or datetime.now(timezone.utc)
    else:
        entity.published_at = None

    return previous != status
