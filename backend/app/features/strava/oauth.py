"""
Strava OAuth flow.

Handles:
- Authorization URL generation
- Code exchange for tokens
- Token refresh
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from app.config import settings
from .client import ProviderUnavailableError, StravaError

logger = logging.getLogger(__name__)

# Private activities count toward mileage too
DEFAULT_SCOPE = "read,activity:read_all"


class StravaOAuthError(StravaError):
    """Token endpoint rejected the request."""
    pass


class StravaOAuth:
    """
    Strava OAuth handler.

    Usage:
        oauth = StravaOAuth()
        auth_url = oauth.get_authorization_url(state=user_id)
        tokens = await oauth.exchange_code(code)
        tokens = await oauth.refresh_token(refresh_token)
    """

    AUTHORIZE_URL = "https://www.strava.com/oauth/authorize"
    TOKEN_URL = "https://www.strava.com/oauth/token"

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.client_id = client_id or settings.strava_client_id
        self.client_secret = client_secret or settings.strava_client_secret
        self.timeout = timeout or settings.strava_request_timeout_seconds
        self._transport = transport

    def get_authorization_url(
        self,
        state: str,
        redirect_uri: Optional[str] = None,
        scope: str = DEFAULT_SCOPE
    ) -> str:
        """
        Generate Strava OAuth authorization URL.

        Args:
            state: Opaque value echoed back to the callback (the user ID)
            redirect_uri: Callback URL (default: settings.strava_redirect_uri)
            scope: OAuth scope

        Returns:
            Authorization URL string
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri or settings.strava_redirect_uri,
            "response_type": "code",
            "scope": scope,
            "approval_prompt": "force",
            "state": state,
        }
        return f"{self.AUTHORIZE_URL}?{urlencode(params)}"

    async def _post_token(self, data: dict, action: str) -> dict:
        payload = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            **data,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(self.TOKEN_URL, data=payload)
        except httpx.TransportError as e:
            raise ProviderUnavailableError(f"Strava token {action} failed: {e}") from e

        if response.status_code >= 500:
            raise ProviderUnavailableError(
                f"Strava token {action} failed: {response.status_code}"
            )
        if response.status_code != 200:
            logger.error(f"Strava token {action} failed: {response.text}")
            raise StravaOAuthError(
                f"Token {action} failed: {response.status_code}"
            )

        return response.json()

    async def exchange_code(self, code: str) -> dict:
        """
        Exchange authorization code for tokens.

        Args:
            code: Authorization code from Strava callback

        Returns:
            {
                "access_token": "...",
                "refresh_token": "...",
                "expires_at": 1234567890,
                "athlete": {"id": 123, "firstname": "...", ...}
            }

        Raises:
            StravaOAuthError: If Strava rejects the code
            ProviderUnavailableError: If Strava is unreachable
        """
        return await self._post_token(
            {"code": code, "grant_type": "authorization_code"},
            "exchange",
        )

    async def refresh_token(self, refresh_token: str) -> dict:
        """
        Refresh an expired access token.

        Returns:
            {
                "access_token": "...",
                "refresh_token": "...",
                "expires_at": 1234567890
            }

        Raises:
            StravaOAuthError: If Strava rejects the refresh token
            ProviderUnavailableError: If Strava is unreachable
        """
        return await self._post_token(
            {"refresh_token": refresh_token, "grant_type": "refresh_token"},
            "refresh",
        )
