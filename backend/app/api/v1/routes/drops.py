"""
Drop Routes

- /drops - Published drops with the caller's access
- /drops/{drop_id}/access/{user_id} - Access check
- /drops/{drop_id}/view - Record first view
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.drops import (
    AccessCheckResponse,
    DropAccessResponse,
    DropQualificationService,
    DropRepository,
    DropWithAccess,
)

router = APIRouter(prefix="/drops", tags=["Drops"])


class ViewRequest(BaseModel):
    user_id: str


@router.get("", response_model=list[DropWithAccess])
async def list_drops(
    user_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_db),
):
    """Published drops, newest release first, with the user's grant if any."""
    drops = await DropRepository(db).get_published()

    grants = {}
    if user_id:
        service = DropQualificationService(db)
        grants = {g.drop_id: g for g in await service.list_user_access(user_id)}

    response = []
    for drop in drops:
        item = DropWithAccess.model_validate(drop)
        grant = grants.get(drop.id)
        if grant is not None:
            item.access = DropAccessResponse.model_validate(grant)
        response.append(item)
    return response


@router.get("/{drop_id}/access/{user_id}", response_model=AccessCheckResponse)
async def check_access(
    drop_id: str,
    user_id: str,
    db: AsyncSession = Depends(get_async_db),
):
    """Whether the user holds a grant for the drop."""
    has_access = await DropQualificationService(db).has_access(user_id, drop_id)
    return AccessCheckResponse(has_access=has_access)


@router.post("/{drop_id}/view")
async def record_view(
    drop_id: str,
    request: ViewRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """Record the first time a user opened a drop they can access."""
    service = DropQualificationService(db)
    if not await service.has_access(request.user_id, drop_id):
        raise HTTPException(status_code=404, detail="No access to this drop")
    first_view = await service.mark_viewed(request.user_id, drop_id)
    return {"first_view": first_view}
