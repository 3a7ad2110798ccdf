"""
Mileage Routes

- /mileage/{user_id} - Current summary and progress toward the next tier
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.mileage import MileageSummaryRepository, MileageSummaryResponse

router = APIRouter(prefix="/mileage", tags=["Mileage"])


@router.get("/{user_id}", response_model=MileageSummaryResponse)
async def get_mileage(
    user_id: str,
    db: AsyncSession = Depends(get_async_db),
):
    """Get a user's mileage summary."""
    summary = await MileageSummaryRepository(db).get_for_user(user_id)
    if summary is None:
        raise HTTPException(status_code=404, detail="No mileage summary for user")
    return MileageSummaryResponse.from_summary(summary)
