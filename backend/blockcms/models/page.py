from blockcms.extensions import db
from blockcms.domain.blocks import decode_blocks, encode_blocks
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .soft_delete_mixin import SoftDeleteMixin


class Page(BaseModel, TenantMixin, SoftDeleteMixin):
    __tablename__ = "pages"

    title = db.Column(db.String(200), nullable=False)
    # Uniqueness per tenant is enforced by the repository so soft-deleted
    # pages do not keep their slug reserved
    slug = db.Column(db.String(200), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    blocks_json = db.Column("blocks", db.Text, nullable=False, default="[]")
    meta = db.Column(db.JSON(none_as_null=True), nullable=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    __table_args__ = (
        db.Index("idx_page_tenant_slug", "tenant_id", "slug"),
    )

    @property
    def blocks(self):
        return decode_blocks(self.blocks_json)

    @blocks.setter
    def blocks(self, value):
        self.blocks_json = encode_blocks(value)
