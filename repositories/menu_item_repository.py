"""
Menu Item Repository - Data access layer for menu items
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import MenuItem


class MenuItemRepository(BaseRepository[MenuItem]):
    """Repository for menu item data access"""

    def __init__(self, db: Session):
        super().__init__(db, MenuItem)

    def get_by_id(self, item_id: UUID) -> Optional[MenuItem]:
        """Get menu item by ID"""
        return self.db.query(MenuItem).filter(MenuItem.item_id == item_id).first()

    def get_for_restaurant(
        self, restaurant_id: UUID, item_id: UUID
    ) -> Optional[MenuItem]:
        """Get menu item only if it belongs to the restaurant"""
        return (
            self.db.query(MenuItem)
            .filter(
                MenuItem.item_id == item_id,
                MenuItem.restaurant_id == restaurant_id,
            )
            .first()
        )

    def set_image_key(self, item: MenuItem, image_key: Optional[str]) -> MenuItem:
        """Store (or clear) the object key of the item's image"""
        item.image_key = image_key
        return self.update(item)
