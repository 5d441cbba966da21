"""
Menu item images - upload to and delete from object storage.
"""

import logging
import os
import re
import uuid
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from adapters.s3_adapter import S3Storage
from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError, StorageError
from domain.mappers import MenuMapper
from domain.models import MenuItem
from domain.schemas.menu_schemas import MenuItemResponse
from repositories import MenuItemRepository

logger = logging.getLogger("jinaq.images")

_EXTENSION_RE = re.compile(r"^\.[a-z0-9]{1,10}$")
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class ImageService:
    """Business logic for menu item images"""

    @staticmethod
    def build_image_filename(item_id: UUID, original_filename: Optional[str]) -> str:
        """Unique object name for an item image, keeping a sane file extension."""
        ext = os.path.splitext(original_filename or "")[1].lower()
        if not _EXTENSION_RE.match(ext):
            ext = ""
        return f"{item_id}-{uuid.uuid4().hex}{ext}"

    @staticmethod
    def _get_item(db: Session, restaurant_id: UUID, item_id: UUID) -> MenuItem:
        item = MenuItemRepository(db).get_for_restaurant(restaurant_id, item_id)
        if item is None:
            raise NotFoundError(
                f"Menu item {item_id} not found for restaurant {restaurant_id}"
            )
        return item

    @staticmethod
    def replace_item_image(
        db: Session,
        storage: S3Storage,
        restaurant_id: UUID,
        item_id: UUID,
        content: bytes,
        original_filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> MenuItemResponse:
        """
        Upload a new image for a menu item and drop the previous one.

        Raises:
            NotFoundError: the item does not belong to the restaurant
            ServiceValidationError: empty or oversized file
            StorageError: the upload was rejected by the object store
        """
        item = ImageService._get_item(db, restaurant_id, item_id)

        if not content:
            raise ServiceValidationError("Uploaded image is empty")
        if len(content) > settings.max_image_size_bytes:
            raise ServiceValidationError(
                "Uploaded image is too large",
                details={
                    "size_bytes": len(content),
                    "max_size_bytes": settings.max_image_size_bytes,
                },
            )

        filename = ImageService.build_image_filename(item_id, original_filename)
        key = storage.upload_image(
            filename, content, content_type or DEFAULT_CONTENT_TYPE
        )
        previous_key = item.image_key

        repo = MenuItemRepository(db)
        try:
            item = repo.set_image_key(item, key)
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"image_key_update_failed item_id={item_id} key={key}")
            ImageService._delete_quietly(storage, key)
            raise

        if previous_key and previous_key != key:
            ImageService._delete_quietly(storage, previous_key)

        logger.info(f"item_image_replaced item_id={item_id} key={key}")
        return MenuMapper.item_to_response(item, storage.public_url)

    @staticmethod
    def remove_item_image(
        db: Session, storage: S3Storage, restaurant_id: UUID, item_id: UUID
    ) -> MenuItemResponse:
        """Delete the item's image from storage and clear its key."""
        item = ImageService._get_item(db, restaurant_id, item_id)
        if not item.image_key:
            raise NotFoundError(f"Menu item {item_id} has no image")

        storage.delete(item.image_key)
        item = MenuItemRepository(db).set_image_key(item, None)
        logger.info(f"item_image_removed item_id={item_id}")
        return MenuMapper.item_to_response(item, storage.public_url)

    @staticmethod
    def _delete_quietly(storage: S3Storage, key: str) -> None:
        try:
            storage.delete(key)
        except StorageError as exc:
            logger.warning(f"orphaned_image key={key}: {exc}")
