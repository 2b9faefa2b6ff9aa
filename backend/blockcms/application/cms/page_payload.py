from typing import Any, Dict

from blockcms.domain.blocks import parse_blocks
from blockcms.domain.errors import ValidationError
from blockcms.domain.lifecycle.page import assert_valid_status

TEXT_FIELDS = ("title", "slug")


def parse_page_payload(data: Any) -> Dict[str, Any]:
    """
    Validate a create/update request body and return the fields it provides.

    ``blocks`` and ``meta`` set to null count as not provided.
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    changes: Dict[str, Any] = {}

    for field in TEXT_FIELDS:
        if field in data:
            value = data[field]
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{field.capitalize()} must be a string")
            changes[field] = (value or "").strip()

    if data.get("status") is not None:
        changes["status"] = assert_valid_status(data["status"])

    if data.get("blocks") is not None:
        changes["blocks"] = parse_blocks(data["blocks"])

    if data.get("meta") is not None:
        if not isinstance(data["meta"], dict):
            raise ValidationError("Meta must be an object")
        changes["meta"] = data["meta"]

    return changes
