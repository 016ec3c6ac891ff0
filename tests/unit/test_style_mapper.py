"""
Unit tests for the style mapper.
"""

from music_api.src.mappers.style_mapper import StyleMapper
from music_api.src.models.catalog import Style, StyleRequest, StyleResponse


class TestStyleMapper:
    """Test entity <-> schema mapping."""

    def setup_method(self):
        self.mapper = StyleMapper()

    def test_to_response(self):
        """ID and name are copied."""
        response = self.mapper.to_response(Style(id=5, name="Blues"))

        assert response == StyleResponse(id=5, name="Blues")

    def test_to_response_none(self):
        """An absent entity maps to None."""
        assert self.mapper.to_response(None) is None

    def test_to_entity_has_no_id(self):
        """The identity is left for the store to assign."""
        entity = self.mapper.to_entity(StyleRequest(name="Forró"))

        assert isinstance(entity, Style)
        assert entity.id is None
        assert entity.name == "Forró"

    def test_to_list_preserves_order(self):
        entities = [Style(id=3, name="C"), Style(id=1, name="A"), Style(id=2, name="B")]

        result = self.mapper.to_list(entities)

        assert [style.id for style in result] == [3, 1, 2]

    def test_to_list_empty(self):
        """Empty and None inputs both yield an empty list."""
        assert self.mapper.to_list([]) == []
        assert self.mapper.to_list(None) == []

    def test_round_trip_keeps_name(self):
        """entity -> response -> request -> entity keeps the name."""
        original = Style(id=9, name="Bossa Nova")

        response = self.mapper.to_response(original)
        rebuilt = self.mapper.to_entity(StyleRequest(name=response.name))

        assert rebuilt.name == original.name
        assert rebuilt.id is None
