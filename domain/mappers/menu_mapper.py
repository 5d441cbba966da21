"""
Menu domain mappers.
Handles transformation between ORM models and the public menu DTOs.
"""

from typing import Callable, Optional

from domain.models import MenuItem, Restaurant
from domain.schemas.menu_schemas import (
    MenuCategoryResponse,
    MenuItemResponse,
    MenuResponse,
)

ImageUrlBuilder = Callable[[str], str]


class MenuMapper:
    """Mapper for menu-related transformations."""

    @staticmethod
    def item_to_response(
        item: MenuItem, image_url_for: Optional[ImageUrlBuilder] = None
    ) -> MenuItemResponse:
        image_url = None
        if item.image_key and image_url_for is not None:
            image_url = image_url_for(item.image_key)
        return MenuItemResponse(
            item_id=item.item_id,
            category_id=item.category_id,
            name=item.name,
            description=item.description,
            price=item.price,
            image_key=item.image_key,
            image_url=image_url,
            is_available=item.is_available,
            position=item.position or 0,
            updated_at=item.updated_at,
        )

    @staticmethod
    def to_response(
        restaurant: Restaurant, image_url_for: Optional[ImageUrlBuilder] = None
    ) -> MenuResponse:
        """
        Convert a Restaurant with its categories and items to MenuResponse.

        Categories and items keep ascending ``position`` order; items without
        a category are listed under ``uncategorized``. Items belonging to
        another restaurant are never listed, and items pointing at another
        restaurant's category count as uncategorized.
        """
        by_position = lambda obj: (obj.position or 0, obj.name)
        own_category_ids = {c.category_id for c in restaurant.categories}

        categories = []
        for category in sorted(restaurant.categories, key=by_position):
            items = [
                MenuMapper.item_to_response(i, image_url_for)
                for i in sorted(category.items, key=by_position)
                if i.restaurant_id == restaurant.restaurant_id
            ]
            categories.append(
                MenuCategoryResponse(
                    category_id=category.category_id,
                    name=category.name,
                    position=category.position or 0,
                    items=items,
                )
            )

        uncategorized = [
            MenuMapper.item_to_response(i, image_url_for)
            for i in sorted(restaurant.items, key=by_position)
            if i.category_id not in own_category_ids
        ]

        return MenuResponse(
            restaurant_id=restaurant.restaurant_id,
            name=restaurant.name,
            currency=restaurant.currency,
            categories=categories,
            uncategorized=uncategorized,
        )
