"""
Style repository for database operations.
"""

import structlog
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from music_api.src.errors import StoreError
from music_api.src.models.catalog import Style
from music_api.src.repositories.base_repo import BaseRepository

logger = structlog.get_logger(__name__)


class StyleRepository(BaseRepository[Style]):
    """Repository for style database operations."""

    def __init__(self, session: Session):
        super().__init__(session, Style)

    def find_by_name(self, name: str) -> Optional[Style]:
        """
        Get the first style with exactly the given name.

        Args:
            name: Style name

        Returns:
            Style with the lowest ID among matches, or None
        """
        try:
            return self.session.scalars(
                select(Style).where(Style.name == name).order_by(Style.id).limit(1)
            ).first()
        except SQLAlchemyError as e:
            logger.error("style_get_by_name_failed", name=name, error=str(e))
            raise StoreError(f"Failed to load style '{name}'", self.entity_name) from e
