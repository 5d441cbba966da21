"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.menu_schemas import (
    MenuItemResponse,
    MenuCategoryResponse,
    MenuResponse,
)

__all__ = [
    "MenuItemResponse",
    "MenuCategoryResponse",
    "MenuResponse",
]
