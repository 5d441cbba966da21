"""
API dependencies for dependency injection
"""

from functools import partial
from typing import Generator
from sqlalchemy.orm import Session

from adapters import s3_adapter
from adapters.s3_adapter import S3Storage
from app.config import settings
from domain.mappers.menu_mapper import ImageUrlBuilder
from domain.models import get_db_session


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_storage() -> S3Storage:
    """Object storage dependency; override in tests with app.dependency_overrides."""
    return s3_adapter.get_storage()


def get_image_url_builder() -> ImageUrlBuilder:
    """Public image URL builder for read-only routes; no storage client is created."""
    return partial(s3_adapter.build_public_url, settings.s3)
