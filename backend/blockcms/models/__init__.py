from .page import Page
from .menu import Menu
from .post import Category, Post, post_categories
from .user import User
from .system_config import SystemConfig

__all__ = [
    "Page",
    "Menu",
    "Category",
    "Post",
    "post_categories",
    "User",
    "SystemConfig",
]
