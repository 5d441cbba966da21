from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from domain.mappers import MenuMapper
from domain.mappers.menu_mapper import ImageUrlBuilder
from domain.schemas.menu_schemas import MenuResponse
from repositories import RestaurantRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("jinaq.menu")


class MenuService:
    """Business logic for reading restaurant menus"""

    @staticmethod
    def get_menu(
        db: Session,
        restaurant_id: UUID,
        image_url_for: Optional[ImageUrlBuilder] = None,
    ) -> MenuResponse:
        """
        Return the full menu of an active restaurant.

        Raises:
            NotFoundError: restaurant does not exist or is inactive
        """
        restaurant = RestaurantRepository(db).get_with_menu(restaurant_id)
        if restaurant is None:
            logger.warning(f"menu_not_found restaurant_id={restaurant_id}")
            raise NotFoundError(f"Restaurant {restaurant_id} not found")

        menu = MenuMapper.to_response(restaurant, image_url_for)
        logger.info(
            f"menu_fetched restaurant_id={restaurant_id} "
            f"categories={len(menu.categories)} uncategorized={len(menu.uncategorized)}"
        )
        return menu
