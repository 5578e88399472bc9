"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, List, Type
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")

LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """Lower-cased LIKE pattern matching text as a literal substring"""
    escaped = (
        text.strip()
        .lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.

    Every model in the schema uses a UUID primary key named ``id``.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        """Get entity by ID"""
        return self.db.get(self.model, entity_id)

    def get_many(self, entity_ids: List[UUID]) -> List[ModelType]:
        """Entities whose id is in entity_ids; unknown ids are skipped"""
        if not entity_ids:
            return []
        return self.db.query(self.model).filter(self.model.id.in_(entity_ids)).all()

    def get_all(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        """Get all entities with pagination"""
        return self.db.query(self.model).offset(skip).limit(limit).all()

    def count(self) -> int:
        return self.db.query(func.count(self.model.id)).scalar() or 0

    def create(self, entity: ModelType) -> ModelType:
        """Create new entity"""
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelType) -> ModelType:
        """Update existing entity"""
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id: UUID) -> bool:
        """Delete entity by ID"""
        entity = self.get_by_id(entity_id)
        if entity:
            self.db.delete(entity)
            self.db.commit()
            return True
        return False

    def exists(self, entity_id: UUID) -> bool:
        """Check if entity exists"""
        return self.get_by_id(entity_id) is not None
