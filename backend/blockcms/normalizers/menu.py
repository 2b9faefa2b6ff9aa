from .common import timestamps


def normalize_menu(menu):
    return {
        "id": menu.id,
        "name": menu.name,
        "description": menu.description or "",
        "items": menu.items,
        **timestamps(menu),
    }
