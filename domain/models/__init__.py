"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.restaurant import Restaurant
from domain.models.menu import MenuCategory, MenuItem

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Restaurant models
    "Restaurant",
    # Menu models
    "MenuCategory",
    "MenuItem",
]
