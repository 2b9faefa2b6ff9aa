"""Menu item shapes and the global settings document."""
from __future__ import annotations

import json
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as SchemaError

from .errors import DecodeError, EncodeError, ValidationError


class MenuItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    label: str = ""
    url: str = ""
    target: str = ""  # "_blank", "_self", ...
    children: List["MenuItem"] = []


def parse_menu_items(payload: Any) -> List[Any]:
    """
    Items are stored as one opaque sequence. Only the outer list is checked;
    individual items are kept verbatim.
    """
    if not isinstance(payload, list):
        raise ValidationError("Menu items must be a list")
    return payload


def encode_menu_items(items: Optional[List[Any]]) -> str:
    try:
        return json.dumps(items if items is not None else [], ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise EncodeError(f"Failed to encode menu items: {exc}") from exc


def decode_menu_items(raw: Optional[str]) -> List[Any]:
    if not raw:
        return []
    try:
        return json.loads(raw) or []
    except ValueError as exc:
        raise DecodeError("Stored menu items are not valid JSON") from exc


def typed_menu_items(raw: Optional[str]) -> List[MenuItem]:
    try:
        return [MenuItem.model_validate(item) for item in decode_menu_items(raw)]
    except SchemaError as exc:
        raise DecodeError("Menu items do not match the menu item shape") from exc


# ------------------------
# Global settings
# ------------------------

GLOBAL_SETTINGS_KEY = "global_settings"
DEFAULT_SITE_NAME = "Block CMS"


class GlobalSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    site_name: str = DEFAULT_SITE_NAME
    logo: str = ""
    favicon: str = ""
    contact_email: str = ""
    header_menu_id: Optional[str] = None
    footer_menu_id: Optional[str] = None
