"""
Base repository for the data access layer.
Subclasses bind a model and look entities up by their own primary key.
"""

from typing import Generic, TypeVar, Optional, Type
from uuid import UUID
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """Shared session handling plus create/update with commit and refresh."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement get_by_id() for {self.model.__name__}"
        )

    def create(self, entity: ModelType) -> ModelType:
        """Insert ``entity`` together with its cascaded children"""
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelType) -> ModelType:
        """Commit pending changes on an attached entity and reload it"""
        self.db.commit()
        self.db.refresh(entity)
        return entity
