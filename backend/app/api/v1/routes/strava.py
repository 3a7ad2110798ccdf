"""
Strava Routes

Endpoints for Strava integration:
- /strava/connect - Initiate OAuth flow
- /strava/callback - Handle OAuth callback
- /strava/sync - Import new activities now
- /strava/sync/stats - Background sync queue stats
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from app.api.v1.deps import get_importer, get_strava_oauth, get_token_manager
from app.config import settings
from app.features.strava import (
    AthleteAlreadyLinkedError,
    NotConnectedError,
    ProviderUnavailableError,
    StravaError,
    StravaOAuth,
    TokenManager,
    TokenRefreshError,
)
from app.features.strava.sync import ActivityImporter, get_sync_stats, trigger_user_sync
from app.features.users import UserNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/strava", tags=["Strava"])


# =============================================================================
# Schemas
# =============================================================================

class SyncRequest(BaseModel):
    user_id: str


class SyncResponse(BaseModel):
    message: str
    total: int
    inserted: int
    skipped: int


def _require_configured():
    if not settings.strava_configured:
        raise HTTPException(
            status_code=503,
            detail="Strava integration not configured"
        )


def _dashboard_url(status: str) -> str:
    return f"{settings.app_url.rstrip('/')}/dashboard?strava={status}"


# =============================================================================
# OAuth Flow
# =============================================================================

@router.get("/connect")
async def strava_connect(
    user_id: str = Query(..., min_length=1, description="Application user ID"),
    oauth: StravaOAuth = Depends(get_strava_oauth),
):
    """
    Initiate Strava OAuth flow.

    The user ID travels through Strava as the `state` parameter.
    """
    _require_configured()
    logger.info(f"Strava OAuth initiated for user {user_id}")
    return RedirectResponse(url=oauth.get_authorization_url(state=user_id), status_code=302)


@router.get("/callback")
async def strava_callback(
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    oauth: StravaOAuth = Depends(get_strava_oauth),
    tokens: TokenManager = Depends(get_token_manager),
):
    """
    Handle Strava OAuth callback.

    Exchanges the code, stores credentials and profile, starts an import
    in the background and redirects to the dashboard.
    """
    if error:
        logger.warning(f"Strava OAuth error: {error}")
        return RedirectResponse(url=_dashboard_url("denied"), status_code=302)
    if not code:
        raise HTTPException(status_code=400, detail="No authorization code provided")
    if not state:
        raise HTTPException(status_code=400, detail="No user ID provided")
    _require_configured()

    try:
        token_data = await oauth.exchange_code(code)
        await tokens.apply_token_response(state, token_data)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except AthleteAlreadyLinkedError:
        raise HTTPException(
            status_code=409,
            detail="This Strava account is already connected to another user"
        )
    except (StravaError, KeyError) as e:
        logger.error(f"Token exchange failed for user {state}: {e}")
        raise HTTPException(status_code=502, detail="Failed to exchange code for token")

    await trigger_user_sync(state)

    return RedirectResponse(url=_dashboard_url("connected"), status_code=302)


# =============================================================================
# Sync
# =============================================================================

@router.post("/sync", response_model=SyncResponse)
async def strava_sync(
    request: SyncRequest,
    importer: ActivityImporter = Depends(get_importer),
):
    """Import new activities for a user and recalculate mileage."""
    _require_configured()
    try:
        result = await importer.import_activities(request.user_id)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except NotConnectedError:
        raise HTTPException(status_code=400, detail="User has not connected Strava")
    except TokenRefreshError:
        raise HTTPException(status_code=502, detail="Failed to refresh Strava token")
    except ProviderUnavailableError:
        raise HTTPException(status_code=502, detail="Strava is unavailable")
    except StravaError as e:
        logger.error(f"Strava sync failed for user {request.user_id}: {e}")
        raise HTTPException(status_code=502, detail="Failed to fetch activities from Strava")

    return SyncResponse(message="Activities synced successfully", **result.to_dict())


@router.get("/sync/stats")
async def strava_sync_stats():
    """Background sync queue statistics."""
    return get_sync_stats()
