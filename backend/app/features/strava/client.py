"""
Strava API client.

Provides methods for interacting with the Strava API.
Handles authentication headers, pagination, timeouts, and error mapping.

Strava API Limits:
- 200 requests per 15 minutes
- 2,000 requests per day

Error mapping:
- network error, timeout, 5xx -> ProviderUnavailableError
- 401 -> StravaAuthError
- 429 -> StravaRateLimitError
- any other non-200 -> StravaAPIError
"""

import logging
from datetime import datetime
from typing import Optional

import httpx

from app.config import settings
from app.shared.dates import to_epoch

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class StravaError(Exception):
    """Base Strava error."""
    pass


class StravaAPIError(StravaError):
    """Strava API error."""
    pass


class StravaAuthError(StravaError):
    """Authentication/authorization error."""
    pass


class StravaRateLimitError(StravaError):
    """Rate limit exceeded."""
    pass


class ProviderUnavailableError(StravaError):
    """Strava unreachable, timed out, or returned 5xx."""
    pass


def raise_for_strava_status(response: httpx.Response) -> None:
    """Map a non-200 Strava response to the error hierarchy."""
    status = response.status_code
    if status == 200:
        return
    if status == 401:
        raise StravaAuthError("Invalid or expired token")
    if status == 429:
        raise StravaRateLimitError("Strava rate limit exceeded")
    if status >= 500:
        raise ProviderUnavailableError(f"Strava returned {status}")
    raise StravaAPIError(f"API error: {status} - {response.text}")


# =============================================================================
# Strava Client
# =============================================================================

class StravaClient:
    """
    Async client for the Strava activities API.

    Usage:
        client = StravaClient()
        activities = await client.get_all_activities(token, after=horizon)
    """

    API_URL = "https://www.strava.com/api/v3"
    MAX_PER_PAGE = 200

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.timeout = timeout or settings.strava_request_timeout_seconds
        self._transport = transport

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.API_URL,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _api_request(
        self,
        client: httpx.AsyncClient,
        method: str,
        endpoint: str,
        access_token: str,
        params: Optional[dict] = None
    ):
        """
        Make an authenticated API request.

        Raises:
            ProviderUnavailableError: Network failure, timeout or 5xx
            StravaRateLimitError: If rate limit exceeded
            StravaAuthError: If authentication fails
            StravaAPIError: If API returns another error
        """
        try:
            response = await client.request(
                method,
                endpoint,
                headers={"Authorization": f"Bearer {access_token}"},
                params=params,
            )
        except httpx.TimeoutException as e:
            raise ProviderUnavailableError(f"Strava request timed out: {endpoint}") from e
        except httpx.TransportError as e:
            raise ProviderUnavailableError(f"Strava request failed: {e}") from e

        if "X-RateLimit-Usage" in response.headers:
            logger.debug(
                f"Strava rate limit: {response.headers.get('X-RateLimit-Usage')} "
                f"/ {response.headers.get('X-RateLimit-Limit')}"
            )

        raise_for_strava_status(response)
        return response.json()

    async def get_activities(
        self,
        access_token: str,
        after: Optional[datetime] = None,
        page: int = 1,
        per_page: int = MAX_PER_PAGE
    ) -> list[dict]:
        """
        Get one page of athlete activities.

        Args:
            access_token: Valid access token
            after: Only activities that started after this time (naive UTC)
            page: Page number (default 1)
            per_page: Results per page (max 200)
        """
        async with self._http() as client:
            return await self._get_page(client, access_token, after, page, per_page)

    async def _get_page(
        self,
        client: httpx.AsyncClient,
        access_token: str,
        after: Optional[datetime],
        page: int,
        per_page: int
    ) -> list[dict]:
        params = {"page": page, "per_page": min(per_page, self.MAX_PER_PAGE)}
        if after is not None:
            params["after"] = to_epoch(after)

        activities = await self._api_request(
            client, "GET", "/athlete/activities", access_token, params
        )
        if not isinstance(activities, list):
            raise StravaAPIError("Unexpected activities payload")
        return activities

    async def get_all_activities(
        self,
        access_token: str,
        after: Optional[datetime] = None,
        per_page: int = MAX_PER_PAGE
    ) -> list[dict]:
        """
        Fetch every page of activities after a horizon.

        Stops at the first empty page or the first page shorter than
        `per_page`. Nothing is returned if any page fails.
        """
        per_page = min(per_page, self.MAX_PER_PAGE)
        activities: list[dict] = []
        page = 1

        async with self._http() as client:
            while True:
                batch = await self._get_page(client, access_token, after, page, per_page)
                activities.extend(batch)
                if len(batch) < per_page:
                    break
                page += 1

        logger.debug(f"Fetched {len(activities)} activities in {page} page(s)")
        return activities
