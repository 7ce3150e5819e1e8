"""Blocked dates API router: owner closures such as maintenance or personal use."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from rentdar.api.deps import conflict, get_db, not_found
from rentdar.models.blocked_range import BlockedRange
from rentdar.schemas.blocked_range import BlockedRangeCreate, BlockedRangeListResponse, BlockedRangeResponse
from rentdar.schemas.common import MessageResponse
from rentdar.services import calendar_service
from rentdar.services.errors import BookingConflictError, NotFoundError

router = APIRouter(prefix="/api/v1/blocked-ranges", tags=["blocked-ranges"])


@router.post(
    "",
    response_model=BlockedRangeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Block dates on a property",
)
async def create_blocked_range(
    body: BlockedRangeCreate,
    db: AsyncSession = Depends(get_db),
) -> BlockedRange:
    """Close ``start_date`` through ``end_date`` (inclusive).

    Rejected with 409 when any of those days is booked or already blocked.
    A stay checking out on ``start_date`` does not conflict.
    """
    try:
        return await calendar_service.create_blocked_range(db, body.model_dump())
    except NotFoundError as exc:
        raise not_found(exc) from exc
    except BookingConflictError as exc:
        raise conflict(exc) from exc


@router.get(
    "",
    response_model=BlockedRangeListResponse,
    summary="List blocked ranges",
)
async def list_blocked_ranges(
    property_id: uuid.UUID | None = Query(None, description="Filter by property"),
    db: AsyncSession = Depends(get_db),
) -> BlockedRangeListResponse:
    items = await calendar_service.fetch_blocked_ranges(db, property_id)
    return BlockedRangeListResponse(
        items=[BlockedRangeResponse.model_validate(b) for b in items],
        total=len(items),
    )


@router.delete(
    "/{blocked_id}",
    response_model=MessageResponse,
    summary="Unblock dates",
)
async def delete_blocked_range(
    blocked_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    try:
        blocked = await calendar_service.get_blocked_range(db, blocked_id)
    except NotFoundError as exc:
        raise not_found(exc) from exc
    await calendar_service.delete_entity(db, blocked)
    return {"message": "Blocked range deleted"}
