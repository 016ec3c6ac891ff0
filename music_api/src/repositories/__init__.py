"""Data access layer.

Repositories wrap the SQLAlchemy session and contain no business logic.
"""

from music_api.src.repositories.base_repo import BaseRepository
from music_api.src.repositories.style_repo import StyleRepository

__all__ = [
    "BaseRepository",
    "StyleRepository",
]
