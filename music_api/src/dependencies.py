"""
FastAPI dependency injection for database sessions, repositories and services.

Provides injectable dependencies for:
- Database sessions (request scoped)
- Repository instances
- Mapper and service instances
- The remote album client
- Request metadata (correlation ID)

All dependencies use FastAPI's dependency injection system and are designed
to be composable and testable through ``app.dependency_overrides``.
"""

import structlog
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from music_api.src.clients.album_client import AlbumClient
from music_api.src.database import get_session
from music_api.src.mappers.style_mapper import StyleMapper
from music_api.src.repositories.style_repo import StyleRepository
from music_api.src.services.style_service import StyleService

logger = structlog.get_logger(__name__)


# ============================================================================
# DATABASE SESSION
# ============================================================================


def get_db(session: Session = Depends(get_session)) -> Session:
    """
    Get the request-scoped database session.

    Example:
        @router.get("/styles")
        def list_styles(db: Session = Depends(get_db)):
            ...
    """
    return session


# ============================================================================
# REPOSITORY DEPENDENCIES
# ============================================================================


def get_style_repository(db: Session = Depends(get_db)) -> StyleRepository:
    """
    Get style repository instance.

    Args:
        db: Database session

    Returns:
        Style repository bound to the request session
    """
    return StyleRepository(db)


# ============================================================================
# SERVICE DEPENDENCIES
# ============================================================================


@lru_cache()
def get_style_mapper() -> StyleMapper:
    """Get the shared (stateless) style mapper."""
    return StyleMapper()


def get_style_service(
    repository: StyleRepository = Depends(get_style_repository),
    mapper: StyleMapper = Depends(get_style_mapper)
) -> StyleService:
    """
    Get style service instance.

    Args:
        repository: Style repository
        mapper: Style mapper

    Returns:
        Style service

    Example:
        @router.get("/styles/{style_id}")
        def get_style(
            style_id: int,
            service: StyleService = Depends(get_style_service)
        ):
            return service.find_by_id(style_id)
    """
    return StyleService(repository, mapper)


def get_album_client(request: Request) -> AlbumClient:
    """
    Get the album client created during application startup.

    Raises:
        RuntimeError: If the client is not initialized
    """
    client = getattr(request.app.state, "album_client", None)
    if client is None:
        logger.error("album_client_not_initialized")
        raise RuntimeError("Album client not initialized. Start the application lifespan first.")
    return client


# ============================================================================
# UTILITY DEPENDENCIES
# ============================================================================


def get_correlation_id(request: Request) -> Optional[str]:
    """
    Get correlation ID for request tracing.

    Set by the request logging middleware from the X-Correlation-ID
    header, or generated when the header is missing.
    """
    return getattr(request.state, "correlation_id", None)
