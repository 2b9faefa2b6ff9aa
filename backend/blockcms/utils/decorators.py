from functools import wraps
from flask_jwt_extended import get_jwt, get_jwt_identity
from blockcms.domain.errors import AuthError, ForbiddenError, NotFoundError
from blockcms.repositories.user_repository import UserRepository
from blockcms.storage.scope import get_scope


def tenant_required(fn):
    """The credential must have been issued by the tenant serving this request."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        claims = get_jwt()
        if claims.get("tenant_id", "") != get_scope().tenant_id:
            raise ForbiddenError("Tenant mismatch")

        return fn(*args, **kwargs)
    return wrapper


def roles_required(*allowed_roles):
    """Role is read from the store, not the token, so demotions apply immediately."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                user = UserRepository(get_scope()).get_by_id(get_jwt_identity())
            except NotFoundError as exc:
                raise AuthError("User not found") from exc

            if user.role not in allowed_roles:
                raise ForbiddenError("Admin role required" if allowed_roles == ("admin",) else None)

            return fn(*args, **kwargs)
        return wrapper
    return decorator
