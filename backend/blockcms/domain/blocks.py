"""
Block registry.

A page holds an ordered list of blocks. Each block is ``{id, type, data}``
where ``data`` is an arbitrary JSON value whose shape is implied by ``type``.

The registry is a catalog of known shapes, not a gatekeeper:

- any string is accepted as ``type`` when a page is written
- ``data`` is stored and returned verbatim
- typed access happens lazily through ``decode_block_data`` at the point
  where a consumer needs it
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as SchemaError

from .errors import DecodeError, EncodeError, ValidationError


BLOCK_TYPE_HERO = "hero"
BLOCK_TYPE_TEXT = "text"
BLOCK_TYPE_IMAGE = "image"
BLOCK_TYPE_GALLERY = "gallery"
BLOCK_TYPE_VIDEO = "video"
BLOCK_TYPE_QUOTE = "quote"
BLOCK_TYPE_CODE = "code"
BLOCK_TYPE_FEATURES = "features"
BLOCK_TYPE_PRICING = "pricing"
BLOCK_TYPE_FAQ = "faq"
BLOCK_TYPE_TESTIMONIAL = "testimonial"
BLOCK_TYPE_CTA = "cta"
BLOCK_TYPE_MENU = "menu"


class Block(BaseModel):
    """A single content block embedded in a page."""

    id: str
    type: str
    data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type, "data": self.data}


class BlockData(BaseModel):
    # Unknown keys are dropped, missing keys fall back to field defaults
    model_config = ConfigDict(extra="ignore")


# ------------------------
# Nested shapes
# ------------------------

class CTA(BlockData):
    text: str = ""
    url: str = ""
    type: str = ""


class FeatureItem(BlockData):
    title: str = ""
    description: str = ""
    icon: str = ""


class PricingPlan(BlockData):
    name: str = ""
    price: str = ""
    description: str = ""
    features: List[str] = []
    button_text: str = ""
    button_url: str = ""
    highlighted: bool = False


class FAQItem(BlockData):
    question: str = ""
    answer: str = ""


class TestimonialItem(BlockData):
    quote: str = ""
    author: str = ""
    avatar_url: str = ""
    role: str = ""


class GalleryImage(BlockData):
    url: str = ""
    alt: str = ""
    caption: str = ""


# ------------------------
# Block data shapes
# ------------------------

class HeroBlockData(BlockData):
    title: str = ""
    subtitle: str = ""
    image_url: str = ""
    cta: Optional[CTA] = None
    background: str = ""


class TextBlockData(BlockData):
    content: str = ""  # HTML or Markdown
    align: str = ""


class ImageBlockData(BlockData):
    url: str = ""
    alt: str = ""
    caption: str = ""
    width: int = 0
    height: int = 0


class GalleryBlockData(BlockData):
    title: str = ""
    images: List[GalleryImage] = []
    columns: int = 0


class VideoBlockData(BlockData):
    url: str = ""  # YouTube, Vimeo, or direct video URL
    title: str = ""
    description: str = ""
    autoplay: bool = False
    loop: bool = False


class QuoteBlockData(BlockData):
    text: str = ""
    author: str = ""
    source: str = ""


class CodeBlockData(BlockData):
    code: str = ""
    language: str = ""
    filename: str = ""


class FeaturesBlockData(BlockData):
    title: str = ""
    subtitle: str = ""
    items: List[FeatureItem] = []
    columns: int = 0


class PricingBlockData(BlockData):
    title: str = ""
    subtitle: str = ""
    plans: List[PricingPlan] = []


class FAQBlockData(BlockData):
    title: str = ""
    items: List[FAQItem] = []


class TestimonialBlockData(BlockData):
    title: str = ""
    subtitle: str = ""
    testimonials: List[TestimonialItem] = []


class CTABlockData(BlockData):
    title: str = ""
    subtitle: str = ""
    button_text: str = ""
    button_url: str = ""
    button_style: str = ""
    background: str = ""


class MenuBlockData(BlockData):
    menu_id: str = ""  # id of a Menu aggregate
    style: str = ""


BLOCK_SHAPES: Dict[str, Type[BlockData]] = {
    BLOCK_TYPE_HERO: HeroBlockData,
    BLOCK_TYPE_TEXT: TextBlockData,
    BLOCK_TYPE_IMAGE: ImageBlockData,
    BLOCK_TYPE_GALLERY: GalleryBlockData,
    BLOCK_TYPE_VIDEO: VideoBlockData,
    BLOCK_TYPE_QUOTE: QuoteBlockData,
    BLOCK_TYPE_CODE: CodeBlockData,
    BLOCK_TYPE_FEATURES: FeaturesBlockData,
    BLOCK_TYPE_PRICING: PricingBlockData,
    BLOCK_TYPE_FAQ: FAQBlockData,
    BLOCK_TYPE_TESTIMONIAL: TestimonialBlockData,
    BLOCK_TYPE_CTA: CTABlockData,
    BLOCK_TYPE_MENU: MenuBlockData,
}

KNOWN_BLOCK_TYPES = frozenset(BLOCK_SHAPES)

ShapeT = TypeVar("ShapeT", bound=BaseModel)


def shape_for(block_type: str) -> Optional[Type[BlockData]]:
    return BLOCK_SHAPES.get(block_type)


def decode_block_data(block: Block | Dict[str, Any], shape: Type[ShapeT]) -> ShapeT:
    """
    Load a block's raw ``data`` into a typed shape.

    Raises:
    - DecodeError if ``data`` cannot be loaded into ``shape``
    """
    data = block.data if isinstance(block, Block) else (block or {}).get("data")
    if data is None:
        data = {}

    try:
        return shape.model_validate(data)
    except SchemaError as exc:
        raise DecodeError(f"Cannot decode block data as {shape.__name__}: {exc.errors()[0]['msg']}") from exc


def decode_typed(block: Block | Dict[str, Any]) -> Optional[BlockData]:
    """Decode using the registered shape for the block's type, if any."""
    block_type = block.type if isinstance(block, Block) else (block or {}).get("type")
    shape = shape_for(block_type)
    if shape is None:
        return None
    return decode_block_data(block, shape)


def encode_blocks(blocks: Optional[Iterable[Block | Dict[str, Any]]]) -> str:
    """Serialize a block sequence to the JSON text stored on a page."""
    if blocks is None:
        return "[]"

    items = [b.to_dict() if isinstance(b, Block) else b for b in blocks]
    try:
        return json.dumps(items, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise EncodeError(f"Failed to encode blocks: {exc}") from exc


def decode_blocks(raw: Optional[str]) -> List[Block]:
    """Inverse of ``encode_blocks``. Empty storage decodes to an empty list."""
    if not raw:
        return []

    try:
        items = json.loads(raw)
    except ValueError as exc:
        raise DecodeError("Stored blocks are not valid JSON") from exc

    if items is None:
        return []

    try:
        return [Block.model_validate(item) for item in items]
    except (SchemaError, TypeError) as exc:
        raise DecodeError("Stored blocks are malformed") from exc


def parse_blocks(payload: Any) -> List[Block]:
    """
    Validate blocks arriving in a write request.

    Only the envelope is checked: a list of objects with string ``id`` and
    ``type``, ids unique within the page. ``type`` is not checked against the
    catalog and ``data`` is kept verbatim.
    """
    if not isinstance(payload, list):
        raise ValidationError("Blocks must be a list")

    blocks: List[Block] = []
    seen_ids = set()

    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ValidationError(f"Block at position {index} must be an object")

        block_id = item.get("id")
        block_type = item.get("type")

        if not isinstance(block_id, str) or not block_id:
            raise ValidationError(f"Block at position {index} is missing an id")
        if not isinstance(block_type, str) or not block_type:
            raise ValidationError(f"Block at position {index} is missing a type")
        if block_id in seen_ids:
            raise ValidationError(f"Duplicate block id: {block_id}")

        seen_ids.add(block_id)
        blocks.append(Block(id=block_id, type=block_type, data=item.get("data")))

    return blocks
