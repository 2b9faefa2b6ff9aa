"""
Request scope: the tenant identity plus the storage handle resolved for one
request.

Handlers fetch it once with ``get_scope()`` and pass it explicitly to every
repository; repositories never look up ambient state themselves.
"""
from __future__ import annotations

from dataclasses import dataclass

from flask import g, has_request_context
from sqlalchemy.orm import Session

from blockcms.extensions import db

SINGLE_TENANT_ID = ""


@dataclass(frozen=True)
class RequestScope:
    tenant_id: str
    session: Session
    # True when the session belongs to this request and must be closed on teardown
    owns_session: bool = False


def default_scope() -> RequestScope:
    """Shared store, used in single-tenant mode and outside requests."""
    return RequestScope(tenant_id=SINGLE_TENANT_ID, session=db.session)


def set_scope(scope: RequestScope) -> None:
    g.request_scope = scope


def get_scope() -> RequestScope:
    # Falls back to the shared handle when the tenant middleware is not installed
    if has_request_context():
        scope = g.get("request_scope")
        if scope is not None:
            return scope
    return default_scope()


def release_scope(exc=None) -> None:
    scope = g.pop("request_scope", None)
    if scope is None or not scope.owns_session:
        return
    if exc is not None:
        scope.session.rollback()
    scope.session.close()
