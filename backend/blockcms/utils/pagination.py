from dataclasses import dataclass
from typing import Any, List

DEFAULT_LIMIT = 20


@dataclass
class ListResult:
    items: List[Any]
    total: int


def parse_int_arg(args, name, default):
    raw = args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def parse_limit_offset(args, default_limit=DEFAULT_LIMIT):
    """
    Read ``limit``/``offset`` query args.

    Unparseable or non-positive limits fall back to the default; negative
    offsets are treated as zero.
    """
    limit = parse_int_arg(args, "limit", default_limit)
    if limit <= 0:
        limit = default_limit

    offset = parse_int_arg(args, "offset", 0)
    if offset < 0:
        offset = 0

    return limit, offset


def apply_limit_offset(query, limit, offset):
    """limit/offset <= 0 mean "no limit" / "no offset"."""
    if limit and limit > 0:
        query = query.limit(limit)
    if offset and offset > 0:
        query = query.offset(offset)
    return query
