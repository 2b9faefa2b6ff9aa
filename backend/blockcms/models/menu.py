from blockcms.extensions import db
from blockcms.domain.navigation import decode_menu_items, encode_menu_items
from .base import BaseModel
from .tenant_mixin import TenantMixin


class Menu(BaseModel, TenantMixin):
    __tablename__ = "menus"

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    items_json = db.Column("items", db.Text, nullable=False, default="[]")

    @property
    def items(self):
        return decode_menu_items(self.items_json)

    @items.setter
    def items(self, value):
        self.items_json = encode_menu_items(value)
