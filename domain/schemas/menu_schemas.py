"""Pydantic schemas for the public menu payload."""

from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID
from datetime import datetime


class MenuItemResponse(BaseModel):
    """Single orderable item as shown to guests."""

    item_id: UUID
    category_id: Optional[UUID] = None
    name: str
    description: Optional[str] = None
    price: int = Field(..., ge=0, description="Price in minor currency units")
    image_key: Optional[str] = None
    image_url: Optional[str] = None
    is_available: bool = True
    position: int = 0
    updated_at: Optional[datetime] = None


class MenuCategoryResponse(BaseModel):
    category_id: UUID
    name: str
    position: int = 0
    items: List[MenuItemResponse] = []


class MenuResponse(BaseModel):
    """Complete menu of one restaurant."""

    restaurant_id: UUID
    name: str
    currency: str
    categories: List[MenuCategoryResponse] = []
    uncategorized: List[MenuItemResponse] = []
