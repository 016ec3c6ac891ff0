"""Clients for remote services."""

from music_api.src.clients.album_client import AlbumClient

__all__ = ["AlbumClient"]
