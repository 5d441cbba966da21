"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.restaurant_repository import RestaurantRepository
from repositories.menu_item_repository import MenuItemRepository

__all__ = [
    "BaseRepository",
    "RestaurantRepository",
    "MenuItemRepository",
]
