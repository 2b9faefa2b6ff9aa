from flask import request

from blockcms.domain.errors import ValidationError


def json_body():
    """The request body as a JSON object, or ValidationError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")
    return data


def optional_text(data, field):
    """String field or None when absent; null is treated as an empty string."""
    if field not in data:
        return None
    value = data[field]
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value.strip()


def pick_text_fields(data, fields):
    changes = {}
    for field in fields:
        value = optional_text(data, field)
        if value is not None:
            changes[field] = value
    return changes
