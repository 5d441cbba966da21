"""
Menu routes - public menu retrieval and menu item image management.
"""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
import logging
from uuid import UUID

from adapters.s3_adapter import S3Storage
from api.dependencies import get_db, get_image_url_builder, get_storage
from api.responses import ERROR_RESPONSES
from app.config import settings
from domain.mappers.menu_mapper import ImageUrlBuilder
from domain.schemas.menu_schemas import MenuItemResponse, MenuResponse
from services.image_service import ImageService
from services.menu_service import MenuService

router = APIRouter(prefix="/menu", tags=["Menu"])
logger = logging.getLogger("jinaq.api.menu")


@router.get(
    "/{restaurant_id}", response_model=MenuResponse, responses=ERROR_RESPONSES
)
def get_menu(
    restaurant_id: UUID,
    db: Session = Depends(get_db),
    image_url_for: ImageUrlBuilder = Depends(get_image_url_builder),
):
    """
    Get the menu of a restaurant.

    Returns categories in display order with their items, plus items that
    are not in any category. Item images are returned as public URLs.
    """
    return MenuService.get_menu(db, restaurant_id, image_url_for)


@router.put(
    "/{restaurant_id}/items/{item_id}/image",
    response_model=MenuItemResponse,
    responses=ERROR_RESPONSES,
)
def upload_item_image(
    restaurant_id: UUID,
    item_id: UUID,
    file: UploadFile = File(..., description="Image file"),
    db: Session = Depends(get_db),
    storage: S3Storage = Depends(get_storage),
):
    """Upload (or replace) the image of a menu item."""
    # One byte over the limit is enough to reject the upload.
    content = file.file.read(settings.max_image_size_bytes + 1)
    logger.info(
        f"image_upload restaurant_id={restaurant_id} item_id={item_id} "
        f"filename={file.filename!r} content_type={file.content_type}"
    )
    return ImageService.replace_item_image(
        db,
        storage,
        restaurant_id,
        item_id,
        content,
        original_filename=file.filename,
        content_type=file.content_type,
    )


@router.delete(
    "/{restaurant_id}/items/{item_id}/image",
    response_model=MenuItemResponse,
    responses=ERROR_RESPONSES,
)
def delete_item_image(
    restaurant_id: UUID,
    item_id: UUID,
    db: Session = Depends(get_db),
    storage: S3Storage = Depends(get_storage),
):
    """Remove the image of a menu item."""
    return ImageService.remove_item_image(db, storage, restaurant_id, item_id)
