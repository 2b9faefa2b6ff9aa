from .block import assert_stored_blocks
from ..errors import ValidationError
from ..lifecycle.page import STATUS_PUBLISHED, assert_valid_status


def assert_required_text(value, field):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field.capitalize()} is required")


def assert_published_at(entity):
    published = entity.status == STATUS_PUBLISHED
    if published != (entity.published_at is not None):
        raise ValidationError(
            "published_at must be set exactly when status is published"
        )


def assert_page(page):
    assert_required_text(page.title, "title")
    assert_required_text(page.slug, "slug")
    assert_valid_status(page.status)
    assert_published_at(page)

    if page.meta is not None and not isinstance(page.meta, dict):
        raise ValidationError("Meta must be an object")

    assert_stored_blocks(page.blocks_json)
