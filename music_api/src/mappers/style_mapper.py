"""
Translation between style entities and their wire shapes.
"""

from typing import Iterable, List, Optional

from music_api.src.models.catalog import Style, StyleRequest, StyleResponse


class StyleMapper:
    """Stateless mapper between ``Style`` entities and API schemas."""

    def to_response(self, entity: Optional[Style]) -> Optional[StyleResponse]:
        """
        Map an entity to its response shape.

        Args:
            entity: Style entity, or None when the store had no match

        Returns:
            Style response, or None for an absent entity
        """
        if entity is None:
            return None
        return StyleResponse(id=entity.id, name=entity.name)

    def to_entity(self, request: StyleRequest) -> Style:
        """
        Build a transient entity from a create request.

        The identity is left unset for the store to generate.
        """
        return Style(name=request.name)

    def to_list(self, entities: Optional[Iterable[Style]]) -> List[StyleResponse]:
        """Map entities to responses, preserving order."""
        if not entities:
            return []
        return [self.to_response(entity) for entity in entities]
