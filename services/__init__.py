"""Services package - Business logic layer"""

from services.menu_service import MenuService
from services.image_service import ImageService

__all__ = [
    "MenuService",
    "ImageService",
]
