from flask import request
from blockcms.storage.scope import release_scope, set_scope
from blockcms.storage.tenancy import build_resolver

TENANT_EXEMPT_ENDPOINTS = {"health.health_check", "openapi_cms", "static"}


def tenant_middleware(app, on_store_ready=None):
    """
    Resolve the tenant store once per request, before any handler runs.
    Not installed at all in single-tenant mode.
    """
    resolver = build_resolver(app.config, on_store_ready=on_store_ready)
    if resolver is None:
        return None

    app.extensions["tenant_resolver"] = resolver

    @app.before_request
    def load_tenant():
        # Preflights carry no tenant work
        if request.method == "OPTIONS":
            return None
        if request.endpoint in TENANT_EXEMPT_ENDPOINTS or request.blueprint == "swagger_ui":
            return None
        # Attach tenant + storage handle to the request scope
        set_scope(resolver.resolve(request))

    @app.teardown_request
    def close_tenant_session(exc):
        release_scope(exc)

    return resolver
