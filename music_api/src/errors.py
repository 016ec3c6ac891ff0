"""
Error hierarchy for the music catalog service.

    CatalogError
    |__ StoreError          entity store (database) failure
    |__ AlbumClientError    remote albums service failure

Store errors wrap the original SQLAlchemy exception as ``__cause__``.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for all music catalog errors."""


class StoreError(CatalogError):
    """Raised when the entity store fails to read or write an entity."""

    def __init__(self, message: str, entity: Optional[str] = None):
        super().__init__(message)
        self.entity = entity


class AlbumClientError(CatalogError):
    """Raised when the remote albums service call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
