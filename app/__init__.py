"""
App package - Application configuration and core utilities.
Contains settings and the exceptions shared by services and routes.
"""

from app.config import settings
from app.exceptions import (
    JinaqError,
    ServiceValidationError,
    InvalidHostHeaderError,
    NotFoundError,
    StorageError,
)

__all__ = [
    "settings",
    "JinaqError",
    "ServiceValidationError",
    "InvalidHostHeaderError",
    "NotFoundError",
    "StorageError",
]
