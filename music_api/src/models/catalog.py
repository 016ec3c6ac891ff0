"""
Music catalog models.

Provides both SQLAlchemy ORM models and Pydantic schemas for:
- Style, Artist and Album entities (database)
- Style requests and responses (API)
- The albums document returned by the remote albums service

Uses SQLAlchemy 2.0 declarative syntax.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from pydantic import BaseModel, Field, model_validator

# Largest value of the 32-bit INTEGER identity columns
MAX_ENTITY_ID = 2**31 - 1


# ============================================================================
# SQLAlchemy Base
# ============================================================================


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


# ============================================================================
# SQLAlchemy Models
# ============================================================================


class Style(Base):
    """
    Music style (genre) entity.

    The identity is generated by the store when the style is first
    persisted; the name is not constrained at this layer.
    """
    __tablename__ = "style"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )
    name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True
    )

    albums: Mapped[List["Album"]] = relationship(
        "Album",
        back_populates="style"
    )

    __table_args__ = (
        Index("idx_style_name", "name"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Style(id={self.id}, name='{self.name}')>"


class Artist(Base):
    """Recording artist entity."""
    __tablename__ = "artists"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )
    name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True
    )

    albums: Mapped[List["Album"]] = relationship(
        "Album",
        back_populates="artist"
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Artist(id={self.id}, name='{self.name}')>"


class Album(Base):
    """
    Album entity.

    Every album references exactly one style and exactly one artist;
    both foreign keys are NOT NULL so an album cannot be stored
    without its associations.
    """
    __tablename__ = "albuns"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )
    name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True
    )
    style_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("style.id"),
        nullable=False
    )
    artists_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("artists.id"),
        nullable=False
    )

    style: Mapped[Style] = relationship(
        "Style",
        back_populates="albums"
    )
    artist: Mapped[Artist] = relationship(
        "Artist",
        back_populates="albums"
    )

    __table_args__ = (
        Index("idx_albuns_style_id", "style_id"),
        Index("idx_albuns_artists_id", "artists_id"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Album(id={self.id}, name='{self.name}', "
            f"style_id={self.style_id}, artists_id={self.artists_id})>"
        )


# ============================================================================
# Pydantic Request Models
# ============================================================================


class StyleRequest(BaseModel):
    """Create style request schema."""
    name: Optional[str] = Field(
        None,
        max_length=100,
        description="Style name"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Rock"
            }
        }
    }


# ============================================================================
# Pydantic Response Models
# ============================================================================


class StyleResponse(BaseModel):
    """
    Style response schema.

    Also used as the request body of an update, where ``id`` selects the
    style to change and ``name`` is its new name.
    """
    id: int = Field(
        ...,
        ge=1,
        le=MAX_ENTITY_ID,
        description="Style ID"
    )
    name: Optional[str] = Field(
        None,
        max_length=100,
        description="Style name"
    )

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": 1,
                "name": "Rock"
            }
        }
    }


class MessageResponse(BaseModel):
    """Outcome message returned by write operations."""
    message: str = Field(
        ...,
        min_length=1,
        description="Outcome message"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "message": "Created"
            }
        }
    }


class ErrorResponse(BaseModel):
    """Error response schema."""
    detail: str = Field(
        ...,
        min_length=1,
        description="Error message"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "detail": "Style not found"
            }
        }
    }


# ============================================================================
# Remote Albums Document
# ============================================================================


class AlbumsResponse(BaseModel):
    """
    Albums document returned by the remote albums service.

    The remote structure is not fixed, so unknown keys are kept as-is.
    A bare JSON list is accepted and exposed under ``albums``.
    """
    albums: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Album records returned by the remote service"
    )

    model_config = {
        "extra": "allow"
    }

    @model_validator(mode="before")
    @classmethod
    def wrap_list_payload(cls, data: Any) -> Any:
        """Accept a top-level JSON array as the album collection."""
        if isinstance(data, list):
            return {"albums": data}
        return data
