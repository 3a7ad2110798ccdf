"""
User Routes

- /users/{user_id} - Profile and Strava connection state
- /users/{user_id}/activities - Recent imported runs
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.activities import ActivityRepository, ActivityResponse
from app.features.users import UserNotFoundError, UserRepository, UserResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_async_db),
):
    """Get a user's profile. Tokens are never returned."""
    try:
        return await UserRepository(db).get_or_raise(user_id)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")


@router.get("/{user_id}/activities", response_model=list[ActivityResponse])
async def get_user_activities(
    user_id: str,
    limit: int = Query(default=20, ge=1, le=200),
    in_region_only: bool = False,
    db: AsyncSession = Depends(get_async_db),
):
    """Recent imported runs, newest first."""
    try:
        await UserRepository(db).get_or_raise(user_id)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")

    return await ActivityRepository(db).get_user_activities(
        user_id,
        limit=limit,
        in_region_only=in_region_only,
    )
