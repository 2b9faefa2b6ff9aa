from ..blocks import decode_blocks
from ..errors import ValidationError


def assert_block_ids(blocks):
    ids = [block.id for block in blocks]
    duplicates = sorted({block_id for block_id in ids if ids.count(block_id) > 1})
    if duplicates:
        raise ValidationError(
            f"Block ids must be unique within a page: {duplicates}"
        )


def assert_stored_blocks(raw):
    """Stored block text must decode back into a block sequence."""
    blocks = decode_blocks(raw)
    assert_block_ids(blocks)
    return blocks
