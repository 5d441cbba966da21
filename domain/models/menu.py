"""
Menu models - categories and the orderable items inside them.
"""

from sqlalchemy import (
    Column,
    Text,
    Boolean,
    Integer,
    TIMESTAMP,
    ForeignKey,
    CheckConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class MenuCategory(Base):
    """Section of a menu (mains, drinks, ...)"""

    __tablename__ = "menu_category"

    category_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("restaurant.restaurant_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(Text, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    restaurant = relationship("Restaurant", back_populates="categories")
    items = relationship(
        "MenuItem", back_populates="category", order_by="MenuItem.position"
    )


class MenuItem(Base):
    """Orderable item. Price is stored in minor currency units."""

    __tablename__ = "menu_item"

    item_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("restaurant.restaurant_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("menu_category.category_id", ondelete="SET NULL"),
        nullable=True,
    )
    name = Column(Text, nullable=False)
    description = Column(Text)
    price = Column(Integer, nullable=False, default=0)
    image_key = Column(Text)
    is_available = Column(Boolean, nullable=False, default=True)
    position = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (CheckConstraint("price >= 0", name="ck_menu_item_price"),)

    restaurant = relationship("Restaurant", back_populates="items")
    category = relationship("MenuCategory", back_populates="items")

    def __repr__(self):
        return f"<MenuItem(id={self.item_id}, name='{self.name}')>"
