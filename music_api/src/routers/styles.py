"""
Styles router for music style management.

Provides REST API endpoints for:
- Style creation
- Style lookup by ID and by name
- Style listing
- Style renaming
"""

import structlog
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from fastapi.responses import JSONResponse

from music_api.src.dependencies import get_correlation_id, get_style_service
from music_api.src.models.catalog import (
    ErrorResponse,
    MAX_ENTITY_ID,
    MessageResponse,
    StyleRequest,
    StyleResponse,
)
from music_api.src.services.style_service import CREATED, StyleService

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/styles",
    tags=["Styles"],
    responses={
        422: {"description": "Validation Error"},
        503: {"model": ErrorResponse, "description": "Entity store unavailable"}
    }
)


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Style",
    description="""
    Create a new music style.

    **Request Body:**
    - name: Style name (up to 100 characters)

    **Responses:**
    - 201: `{"message": "Created"}`
    - 500: `{"message": "Error on create object"}` when the store rejected the write
    """,
    responses={
        500: {"model": MessageResponse, "description": "Style could not be stored"}
    }
)
def create_style(
    style_request: StyleRequest,
    service: StyleService = Depends(get_style_service),
    correlation_id: Optional[str] = Depends(get_correlation_id)
):
    """Create a style and report the outcome message."""
    result = service.create(style_request)

    if result != CREATED:
        logger.warning("style_create_rejected", correlation_id=correlation_id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=MessageResponse(message=result).model_dump()
        )

    return MessageResponse(message=result)


@router.get(
    "",
    response_model=List[StyleResponse],
    summary="List Styles",
    description="List every style ordered by ID."
)
def list_styles(
    service: StyleService = Depends(get_style_service)
) -> List[StyleResponse]:
    """List all styles."""
    return service.list_all()


@router.get(
    "/search",
    response_model=StyleResponse,
    summary="Find Style By Name",
    responses={
        404: {"model": ErrorResponse, "description": "Style not found"}
    }
)
def find_style_by_name(
    name: str = Query(..., min_length=1, max_length=100, description="Exact style name"),
    service: StyleService = Depends(get_style_service)
) -> StyleResponse:
    """Get a style by its exact name."""
    style = service.find_by_name(name)
    if style is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Style '{name}' not found"
        )
    return style


@router.get(
    "/{style_id}",
    response_model=StyleResponse,
    summary="Get Style",
    responses={
        404: {"model": ErrorResponse, "description": "Style not found"}
    }
)
def get_style(
    style_id: int = Path(..., ge=1, le=MAX_ENTITY_ID, description="Style ID"),
    service: StyleService = Depends(get_style_service)
) -> StyleResponse:
    """Get a style by ID."""
    style = service.find_by_id(style_id)
    if style is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Style {style_id} not found"
        )
    return style


@router.put(
    "",
    response_model=StyleResponse,
    summary="Update Style",
    description="""
    Rename an existing style.

    **Request Body:**
    - id: ID of the style to update
    - name: New style name

    **Error Responses:**
    - 404: No style has that ID
    """,
    responses={
        404: {"model": ErrorResponse, "description": "Style not found"}
    }
)
def update_style(
    style_update: StyleResponse,
    service: StyleService = Depends(get_style_service)
) -> StyleResponse:
    """Rename a style."""
    style = service.update(style_update)
    if style is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Style {style_update.id} not found"
        )
    return style
