"""
Strava integration module.

Usage:
    from app.features.strava import StravaOAuth, StravaClient, TokenManager
    from app.features.strava.sync import ActivityImporter

Components:
- StravaOAuth: OAuth flow (auth URL, token exchange, refresh)
- StravaClient: API client (athlete, paginated activities)
- TokenManager: Credential refresh and storage on the User row
- ActivityImporter: Incremental import (see sync/)
"""

from .oauth import StravaOAuth, StravaOAuthError, DEFAULT_SCOPE
from .client import (
    StravaClient,
    StravaError,
    StravaAPIError,
    StravaAuthError,
    StravaRateLimitError,
    ProviderUnavailableError,
)
from .tokens import (
    TokenManager,
    NotConnectedError,
    TokenRefreshError,
    AthleteAlreadyLinkedError,
)

__all__ = [
    # OAuth
    "StravaOAuth",
    "StravaOAuthError",
    "DEFAULT_SCOPE",
    # Client
    "StravaClient",
    "StravaError",
    "StravaAPIError",
    "StravaAuthError",
    "StravaRateLimitError",
    "ProviderUnavailableError",
    # Tokens
    "TokenManager",
    "NotConnectedError",
    "TokenRefreshError",
    "AthleteAlreadyLinkedError",
]
