"""
Style service for music style CRUD operations.

Provides:
- Style creation with a coarse outcome message
- Lookup by ID and by name
- Listing of all styles
- Renaming of an existing style

Only creation absorbs store failures; every other operation lets a
``StoreError`` propagate to the caller.
"""

import structlog
from typing import List, Optional

from music_api.src.errors import StoreError
from music_api.src.mappers.style_mapper import StyleMapper
from music_api.src.models.catalog import StyleRequest, StyleResponse
from music_api.src.repositories.style_repo import StyleRepository

logger = structlog.get_logger(__name__)

CREATED = "Created"
CREATE_FAILED = "Error on create object"


class StyleService:
    """Service for style operations."""

    def __init__(self, repository: StyleRepository, mapper: StyleMapper):
        """
        Initialize style service.

        Args:
            repository: Style repository
            mapper: Style mapper
        """
        self.repository = repository
        self.mapper = mapper

    def create(self, request: StyleRequest) -> str:
        """
        Create a new style.

        Args:
            request: Style creation request

        Returns:
            "Created" on success, "Error on create object" if the store failed
        """
        entity = self.mapper.to_entity(request)
        try:
            self.repository.persist(entity)
        except StoreError as e:
            logger.error("style_create_failed", name=request.name, error=str(e))
            return CREATE_FAILED

        logger.info("style_created", name=request.name)
        return CREATED

    def find_by_id(self, style_id: int) -> Optional[StyleResponse]:
        """
        Get style by ID.

        Args:
            style_id: Style ID

        Returns:
            Style response or None if not found
        """
        entity = self.repository.find_by_id(style_id)
        return self.mapper.to_response(entity)

    def find_by_name(self, name: str) -> Optional[StyleResponse]:
        """
        Get style by exact name.

        Args:
            name: Style name

        Returns:
            Style response or None if not found
        """
        entity = self.repository.find_by_name(name)
        return self.mapper.to_response(entity)

    def list_all(self) -> List[StyleResponse]:
        """
        List all styles.

        Returns:
            Style responses in store order, empty if there are none
        """
        entities = self.repository.list_all()
        return self.mapper.to_list(entities)

    def update(self, response: StyleResponse) -> Optional[StyleResponse]:
        """
        Rename an existing style.

        Args:
            response: Style ID to update and its new name

        Returns:
            Updated style or None if no style has that ID

        Raises:
            StoreError: If the store fails to save the change
        """
        entity = self.repository.find_by_id_optional(response.id)
        if entity is None:
            logger.info("style_update_not_found", style_id=response.id)
            return None

        entity.name = response.name
        self.repository.persist_and_flush(entity)

        logger.info("style_updated", style_id=entity.id, name=entity.name)
        return self.mapper.to_response(entity)
