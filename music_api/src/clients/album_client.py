"""HTTP client for the remote albums service.

Wraps an ``httpx.Client`` bound to the service base URL. Timeouts come
from settings; there is no retry logic.
"""

from typing import Optional

import httpx
import structlog

from music_api.src.errors import AlbumClientError
from music_api.src.models.catalog import AlbumsResponse

logger = structlog.get_logger(__name__)

ALBUMS_PATH = "/albuns"


class AlbumClient:
    """Remote albums service client."""

    def __init__(
        self,
        base_url: str = "http://localhost:9090",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize album client.

        Args:
            base_url: Albums service base URL
            timeout: Request timeout in seconds
            client: Preconfigured httpx client (overrides base_url and timeout)
        """
        self.base_url = base_url
        self.client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def get_by_id(self, album_id: int) -> AlbumsResponse:
        """Fetch albums data by numeric ID.

        Args:
            album_id: Album ID sent as the ``id`` query parameter

        Returns:
            Decoded albums document

        Raises:
            AlbumClientError: On transport failure, non-2xx status or bad JSON
        """
        try:
            response = self.client.get(ALBUMS_PATH, params={"id": album_id})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning("album_fetch_rejected", album_id=album_id, status_code=status_code)
            raise AlbumClientError(
                f"Albums service answered {status_code} for album {album_id}",
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error("album_fetch_failed", album_id=album_id, error=str(e))
            raise AlbumClientError(f"Albums service unreachable: {e}") from e

        try:
            return AlbumsResponse.model_validate(response.json())
        except ValueError as e:
            logger.error("album_decode_failed", album_id=album_id, error=str(e))
            raise AlbumClientError(
                f"Albums service returned an invalid document for album {album_id}",
                status_code=response.status_code,
            ) from e

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.client.close()

    def __enter__(self) -> "AlbumClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
