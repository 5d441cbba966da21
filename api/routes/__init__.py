"""API routes package"""

from . import health, menu

__all__ = ["health", "menu"]
