"""
Shared route dependencies.

Strava collaborators are provided through dependencies so that they can
be overridden with `app.dependency_overrides`.
"""

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db.session import get_async_db
from app.features.strava import StravaClient, StravaOAuth, TokenManager
from app.features.strava.sync import ActivityImporter


async def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """Verify operator API key."""
    if not settings.admin_api_key:
        raise HTTPException(status_code=503, detail="Admin API not configured")
    if x_api_key != settings.admin_api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")
    return x_api_key


def get_strava_oauth() -> StravaOAuth:
    return StravaOAuth()


def get_strava_client() -> StravaClient:
    return StravaClient()


def get_token_manager(
    db: AsyncSession = Depends(get_async_db),
    oauth: StravaOAuth = Depends(get_strava_oauth),
) -> TokenManager:
    return TokenManager(db, oauth=oauth)


def get_importer(
    db: AsyncSession = Depends(get_async_db),
    client: StravaClient = Depends(get_strava_client),
    tokens: TokenManager = Depends(get_token_manager),
) -> ActivityImporter:
    return ActivityImporter(db, client=client, tokens=tokens)
