from typing import Any, Dict

from blockcms.domain.invariants.page import assert_required_text
from blockcms.models.menu import Menu
from blockcms.utils.pagination import ListResult, apply_limit_offset
from blockcms.utils.transaction import transactional
from .base import BaseRepository


class MenuRepository(BaseRepository):
    model = Menu
    not_found_message = "Menu not found"

    def create(self, menu: Menu) -> Menu:
        assert_required_text(menu.name, "name")
        menu.tenant_id = self.tenant_id
        menu.ensure_id()
        if menu.items_json is None:
            menu.items_json = "[]"

        with transactional(self.session):
            self.session.add(menu)
        return menu

    def update(self, menu: Menu, changes: Dict[str, Any]) -> Menu:
        if "name" in changes:
            assert_required_text(changes["name"], "name")
            menu.name = changes["name"]
        if "description" in changes:
            menu.description = changes["description"] or ""
        if "items" in changes:
            menu.items = changes["items"]

        self._commit()
        return menu

    def delete(self, menu_id) -> None:
        menu = self.get_by_id(menu_id)
        with transactional(self.session):
            self.session.delete(menu)

    def list(self, limit=0, offset=0) -> ListResult:
        query = self._query()
        total = query.count()
        query = query.order_by(Menu.created_at.desc(), Menu.id.desc())
        return ListResult(items=apply_limit_offset(query, limit, offset).all(), total=total)
