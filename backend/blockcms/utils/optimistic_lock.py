from datetime import timezone
from dateutil.parser import parse, ParserError
from blockcms.domain.errors import ConflictError, ValidationError


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def enforce_optimistic_lock(entity, header_value):
    """
    Enforces optimistic locking using the If-Unmodified-Since header.
    Raises ConflictError if the entity has been modified since.
    """
    if not header_value:
        return  # No optimistic lock requested

    try:
        client_ts = normalize_ts(parse(header_value))
    except (ParserError, ValueError, OverflowError) as exc:
        raise ValidationError("Invalid If-Unmodified-Since header") from exc

    if entity.updated_at is None:
        return

    # HTTP dates carry whole seconds only
    server_ts = normalize_ts(entity.updated_at).replace(microsecond=0)

    if server_ts > client_ts:
        raise ConflictError("Conflict detected. Resource has been modified.")
