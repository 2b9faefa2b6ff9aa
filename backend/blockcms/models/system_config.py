from blockcms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class SystemConfig(BaseModel, TenantMixin):
    __tablename__ = "system_configs"

    key = db.Column(db.String(100), nullable=False)
    value = db.Column(db.JSON, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "key", name="uq_system_config_tenant_key"),
    )
