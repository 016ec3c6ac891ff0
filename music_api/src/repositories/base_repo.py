"""
Generic repository over a SQLAlchemy session.

Provides the entity store operations shared by every catalog entity:
find by id, list all, persist and persist-and-flush. Store failures
(``SQLAlchemyError``) are translated into ``StoreError`` after the
session has been rolled back.
"""

import structlog
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from music_api.src.errors import StoreError
from music_api.src.models.catalog import Base

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Repository for database operations on a single entity type."""

    def __init__(self, session: Session, model: Type[ModelT]):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy session (request scoped)
            model: Mapped entity class
        """
        self.session = session
        self.model = model

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        """
        Get entity by ID.

        Args:
            entity_id: Entity ID

        Returns:
            Entity or None if not found

        Raises:
            StoreError: On database error
        """
        try:
            entity = self.session.get(self.model, entity_id)
        except SQLAlchemyError as e:
            logger.error(
                "entity_get_by_id_failed",
                entity=self.entity_name,
                entity_id=entity_id,
                error=str(e)
            )
            raise StoreError(f"Failed to load {self.entity_name} {entity_id}", self.entity_name) from e

        if entity is None:
            logger.debug("entity_not_found", entity=self.entity_name, entity_id=entity_id)
        return entity

    def find_by_id_optional(self, entity_id: int) -> Optional[ModelT]:
        """
        Get entity by ID, for callers that branch on presence.

        Args:
            entity_id: Entity ID

        Returns:
            Entity or None if not found
        """
        return self.find_by_id(entity_id)

    def list_all(self) -> List[ModelT]:
        """
        List every entity ordered by ID.

        Returns:
            List of entities, empty if the table is empty

        Raises:
            StoreError: On database error
        """
        try:
            return list(
                self.session.scalars(select(self.model).order_by(self.model.id)).all()
            )
        except SQLAlchemyError as e:
            logger.error("entity_list_failed", entity=self.entity_name, error=str(e))
            raise StoreError(f"Failed to list {self.entity_name}", self.entity_name) from e

    def persist(self, entity: ModelT) -> None:
        """
        Add an entity to the unit of work and flush it.

        The flush assigns store-generated identities; the surrounding
        session commits at the end of the request.

        Args:
            entity: Entity to store

        Raises:
            StoreError: On database error (the session is rolled back)
        """
        try:
            self.session.add(entity)
            self.session.flush()
            logger.info("entity_persisted", entity=self.entity_name, entity_id=entity.id)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("entity_persist_failed", entity=self.entity_name, error=str(e))
            raise StoreError(f"Failed to persist {self.entity_name}", self.entity_name) from e

    def persist_and_flush(self, entity: ModelT) -> None:
        """
        Store an entity and commit immediately.

        Args:
            entity: Entity to store

        Raises:
            StoreError: On database error (the session is rolled back)
        """
        try:
            self.session.add(entity)
            self.session.flush()
            self.session.commit()
            logger.info("entity_flushed", entity=self.entity_name, entity_id=entity.id)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(
                "entity_persist_and_flush_failed",
                entity=self.entity_name,
                error=str(e)
            )
            raise StoreError(f"Failed to persist {self.entity_name}", self.entity_name) from e
