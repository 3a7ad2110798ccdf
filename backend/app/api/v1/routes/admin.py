"""
Admin Routes

Operator endpoints for drop management, protected by X-API-Key.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import verify_api_key
from app.db.session import get_async_db
from app.features.drops import (
    DropCreate,
    DropNotFoundError,
    DropQualificationService,
    DropRepository,
    DropResponse,
    DropUpdate,
    GrantResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(verify_api_key)],
)

# Fields a PATCH may explicitly clear
NULLABLE_DROP_FIELDS = {"description", "end_date", "image_url"}


@router.post("/drops", response_model=DropResponse, status_code=201)
async def create_drop(
    request: DropCreate,
    db: AsyncSession = Depends(get_async_db),
):
    """Create a drop."""
    drops = DropRepository(db)
    if await drops.get_by_slug(request.slug):
        raise HTTPException(status_code=409, detail="Slug already in use")

    try:
        drop = await drops.create(**request.model_dump())
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Slug already in use")

    logger.info(f"Drop created: {drop.slug}")
    return drop


@router.patch("/drops/{drop_id}", response_model=DropResponse)
async def update_drop(
    drop_id: str,
    request: DropUpdate,
    db: AsyncSession = Depends(get_async_db),
):
    """Change a drop; omitted fields are left as they are."""
    drops = DropRepository(db)
    drop = await drops.get_by_id(drop_id)
    if drop is None:
        raise HTTPException(status_code=404, detail="Drop not found")

    changes = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_DROP_FIELDS
    }
    basic = changes.get("required_miles_basic", drop.required_miles_basic)
    premium = changes.get("required_miles_premium", drop.required_miles_premium)
    exclusive = changes.get("required_miles_exclusive", drop.required_miles_exclusive)
    if not (basic <= premium <= exclusive):
        raise HTTPException(
            status_code=422,
            detail="Thresholds must satisfy basic <= premium <= exclusive"
        )

    drop = await drops.update(drop, **changes)
    await db.commit()
    return drop


@router.post("/drops/{drop_id}/grant", response_model=GrantResponse)
async def grant_drop_access(
    drop_id: str,
    db: AsyncSession = Depends(get_async_db),
):
    """Grant access to every user who currently qualifies."""
    try:
        granted = await DropQualificationService(db).grant_access(drop_id)
    except DropNotFoundError:
        raise HTTPException(status_code=404, detail="Drop not found")
    return GrantResponse(drop_id=drop_id, granted_count=granted)
