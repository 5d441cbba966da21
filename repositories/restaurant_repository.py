"""
Restaurant Repository - Data access layer for restaurants and their menus
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import Restaurant, MenuCategory


class RestaurantRepository(BaseRepository[Restaurant]):
    """Repository for restaurant data access"""

    def __init__(self, db: Session):
        super().__init__(db, Restaurant)

    def get_by_id(self, restaurant_id: UUID) -> Optional[Restaurant]:
        """Get restaurant by ID"""
        return (
            self.db.query(Restaurant)
            .filter(Restaurant.restaurant_id == restaurant_id)
            .first()
        )

    def get_by_slug(self, slug: str) -> Optional[Restaurant]:
        return self.db.query(Restaurant).filter(Restaurant.slug == slug).first()

    def get_with_menu(self, restaurant_id: UUID) -> Optional[Restaurant]:
        """Get an active restaurant with categories and items eagerly loaded"""
        return (
            self.db.query(Restaurant)
            .options(
                selectinload(Restaurant.categories).selectinload(MenuCategory.items),
                selectinload(Restaurant.items),
            )
            .filter(
                Restaurant.restaurant_id == restaurant_id,
                Restaurant.is_active.is_(True),
            )
            .first()
        )
