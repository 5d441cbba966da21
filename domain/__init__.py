"""
Domain layer - Business entities, models, schemas, and mappers.
"""

from domain import models, schemas, mappers

__all__ = ["models", "schemas", "mappers"]
