"""Properties API router.

A property owns one calendar; deleting it removes its stays and blocked
dates as well.
"""

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from rentdar.api.deps import get_db, not_found
from rentdar.models.property import Property
from rentdar.schemas.common import MessageResponse
from rentdar.schemas.property import PropertyCreate, PropertyListResponse, PropertyResponse
from rentdar.services import calendar_service
from rentdar.services.errors import NotFoundError

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


async def _get_property_or_404(property_id: uuid.UUID, db: AsyncSession) -> Property:
    try:
        return await calendar_service.get_property(db, property_id)
    except NotFoundError as exc:
        raise not_found(exc) from exc


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a property with an empty calendar",
)
async def create_property(
    body: PropertyCreate,
    db: AsyncSession = Depends(get_db),
) -> Property:
    return await calendar_service.create_property(db, body.model_dump())


@router.get(
    "",
    response_model=PropertyListResponse,
    summary="List properties",
)
async def list_properties(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
) -> PropertyListResponse:
    """Properties newest first; ``total`` counts all of them, not just the page."""
    items, total = await calendar_service.list_properties(db, skip=skip, limit=limit)
    return PropertyListResponse(
        items=[PropertyResponse.model_validate(p) for p in items],
        total=total,
    )


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Get a property",
)
async def get_property(
    property_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Property:
    return await _get_property_or_404(property_id, db)


@router.delete(
    "/{property_id}",
    response_model=MessageResponse,
    summary="Delete a property and its calendar",
)
async def delete_property(
    property_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    prop = await _get_property_or_404(property_id, db)
    await calendar_service.delete_property(db, prop)
    return {"message": "Property deleted"}
