"""Mappers between persistence entities and API schemas."""

from music_api.src.mappers.style_mapper import StyleMapper

__all__ = ["StyleMapper"]
