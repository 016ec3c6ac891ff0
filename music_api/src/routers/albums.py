"""
Albums router.

Exposes the remote albums lookup through this API.
"""

import structlog
from fastapi import APIRouter, Depends, Query

from music_api.src.clients.album_client import AlbumClient
from music_api.src.dependencies import get_album_client
from music_api.src.models.catalog import AlbumsResponse, ErrorResponse

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/albums",
    tags=["Albums"],
    responses={
        502: {"model": ErrorResponse, "description": "Albums service failure"}
    }
)


@router.get(
    "",
    response_model=AlbumsResponse,
    summary="Get Albums",
    description="Fetch albums data for an ID from the remote albums service."
)
def get_albums(
    album_id: int = Query(..., alias="id", description="Album ID"),
    client: AlbumClient = Depends(get_album_client)
) -> AlbumsResponse:
    """Proxy a lookup to the remote albums service."""
    logger.debug("album_lookup", album_id=album_id)
    return client.get_by_id(album_id)
