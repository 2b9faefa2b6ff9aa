from blockcms.extensions import db


class TenantMixin:
    # Empty string in single-tenant mode. Isolation comes from always
    # filtering by the tenant carried in the request scope.
    tenant_id = db.Column(
        db.String(63),
        nullable=False,
        default="",
        index=True
    )
