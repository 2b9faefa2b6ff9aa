from typing import Any, Callable, Dict

from blockcms.utils.pagination import ListResult


def normalize_pagination(
    result: ListResult,
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    limit: int,
    offset: int,
) -> Dict[str, Any]:
    """Offset pagination envelope: ``total`` counts matches before limit/offset."""
    return {
        "data": [normalize_fn(item) for item in result.items],
        "total": result.total,
        "limit": limit,
        "offset": offset,
    }
