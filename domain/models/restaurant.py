"""
Restaurant model - the owner of a menu.
"""

from sqlalchemy import Column, Text, Boolean, TIMESTAMP, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class Restaurant(Base):
    """A restaurant whose menu is served by the API"""

    __tablename__ = "restaurant"

    restaurant_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True, index=True)
    currency = Column(Text, nullable=False, default="KRW")
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    categories = relationship(
        "MenuCategory",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by="MenuCategory.position",
    )
    items = relationship(
        "MenuItem",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by="MenuItem.position",
    )

    def __repr__(self):
        return f"<Restaurant(id={self.restaurant_id}, slug='{self.slug}')>"
