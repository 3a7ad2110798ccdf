"""
Tests for /api/v1/strava routes.
"""

from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import pytest

from app.api.v1.deps import get_importer, get_strava_oauth
from app.api.v1.routes import strava as strava_routes
from app.config import settings
from app.features.strava import (
    NotConnectedError,
    ProviderUnavailableError,
    StravaOAuth,
    StravaOAuthError,
    TokenRefreshError,
)
from app.features.strava.sync import ImportResult
from app.features.users import UserNotFoundError
from app.main import app


@pytest.fixture
def fake_importer():
    importer = MagicMock()
    importer.import_activities = AsyncMock(
        return_value=ImportResult(total=3, inserted=2, skipped=1)
    )
    app.dependency_overrides[get_importer] = lambda: importer
    return importer


@pytest.fixture
def fake_oauth():
    oauth = StravaOAuth(client_id="12345", client_secret="s3cret")
    oauth.exchange_code = AsyncMock(return_value={
        "access_token": "a",
        "refresh_token": "r",
        "expires_at": 1800000000,
        "athlete": {
            "id": 555,
            "firstname": "Ada",
            "lastname": "Lovelace",
            "profile": "https://example.com/ada.jpg",
            "city": "Washington",
            "state": "DC",
        },
    })
    app.dependency_overrides[get_strava_oauth] = lambda: oauth
    return oauth


@pytest.fixture
def triggered(monkeypatch):
    trigger = AsyncMock()
    monkeypatch.setattr(strava_routes, "trigger_user_sync", trigger)
    return trigger


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    """GET /health."""

    async def test_health(self, client):
        """Health check reports healthy."""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


# =============================================================================
# Connect
# =============================================================================

class TestConnect:
    """GET /strava/connect."""

    async def test_redirects_to_strava(self, client):
        """Redirects to Strava with scope, state and forced approval."""
        response = await client.get("/api/v1/strava/connect", params={"user_id": "user-1"})

        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        params = parse_qs(location.query)
        assert location.netloc == "www.strava.com"
        assert params["state"] == ["user-1"]
        assert params["scope"] == ["read,activity:read_all"]
        assert params["approval_prompt"] == ["force"]

    async def test_not_configured(self, client, monkeypatch):
        """Missing Strava credentials give 503."""
        monkeypatch.setattr(settings, "strava_client_id", None)

        response = await client.get("/api/v1/strava/connect", params={"user_id": "user-1"})

        assert response.status_code == 503

    async def test_user_id_required(self, client):
        """user_id is a required query parameter."""
        response = await client.get("/api/v1/strava/connect")
        assert response.status_code == 422


# =============================================================================
# OAuth callback
# =============================================================================

class TestCallback:
    """GET /strava/callback."""

    async def test_connects_and_redirects(self, client, db, make_user, fake_oauth, triggered):
        """A good code stores the grant, starts a sync and redirects."""
        user = await make_user(connected=False)

        response = await client.get(
            "/api/v1/strava/callback",
            params={"code": "abc", "state": user.id, "scope": "read,activity:read_all"},
        )

        assert response.status_code == 302
        assert response.headers["location"] == "https://www.districtrun.co/dashboard?strava=connected"
        fake_oauth.exchange_code.assert_awaited_once_with("abc")
        triggered.assert_awaited_once_with(user.id)

        await db.refresh(user)
        assert user.strava_athlete_id == 555
        assert user.strava_connected is True
        assert user.first_name == "Ada"
        assert user.profile_picture_url == "https://example.com/ada.jpg"

    async def test_denied(self, client, fake_oauth, triggered):
        """A denied authorization redirects without exchanging."""
        response = await client.get(
            "/api/v1/strava/callback",
            params={"error": "access_denied", "state": "user-1"},
        )

        assert response.status_code == 302
        assert response.headers["location"].endswith("/dashboard?strava=denied")
        fake_oauth.exchange_code.assert_not_awaited()
        triggered.assert_not_awaited()

    async def test_missing_code(self, client, fake_oauth):
        """No code gives 400."""
        response = await client.get("/api/v1/strava/callback", params={"state": "user-1"})
        assert response.status_code == 400

    async def test_missing_state(self, client, fake_oauth):
        """No state gives 400."""
        response = await client.get("/api/v1/strava/callback", params={"code": "abc"})
        assert response.status_code == 400

    async def test_unknown_user(self, client, fake_oauth, triggered):
        """A state naming no user gives 404."""
        response = await client.get(
            "/api/v1/strava/callback",
            params={"code": "abc", "state": "nobody"},
        )
        assert response.status_code == 404
        triggered.assert_not_awaited()

    async def test_exchange_rejected(self, client, make_user, fake_oauth, triggered):
        """A rejected exchange gives 502."""
        user = await make_user(connected=False)
        fake_oauth.exchange_code.side_effect = StravaOAuthError("Token exchange failed: 400")

        response = await client.get(
            "/api/v1/strava/callback",
            params={"code": "bad", "state": user.id},
        )

        assert response.status_code == 502
        triggered.assert_not_awaited()

    async def test_athlete_already_linked(self, client, db, make_user, fake_oauth, triggered):
        """A Strava athlete connected to one account is refused for another."""
        owner = await make_user()
        other = await make_user(connected=False)
        fake_oauth.exchange_code.return_value["athlete"]["id"] = owner.strava_athlete_id

        response = await client.get(
            "/api/v1/strava/callback",
            params={"code": "abc", "state": other.id},
        )

        assert response.status_code == 409
        triggered.assert_not_awaited()
        await db.refresh(other)
        assert other.strava_connected is False


# =============================================================================
# Manual sync
# =============================================================================

class TestSync:
    """POST /strava/sync."""

    async def test_success(self, client, fake_importer):
        """Import counts are returned."""
        response = await client.post("/api/v1/strava/sync", json={"user_id": "user-1"})

        assert response.status_code == 200
        assert response.json() == {
            "message": "Activities synced successfully",
            "total": 3,
            "inserted": 2,
            "skipped": 1,
        }
        fake_importer.import_activities.assert_awaited_once_with("user-1")

    @pytest.mark.parametrize("error,status", [
        (UserNotFoundError("User nobody not found"), 404),
        (NotConnectedError("not connected"), 400),
        (TokenRefreshError("refresh failed"), 502),
        (ProviderUnavailableError("Strava returned 503"), 502),
    ])
    async def test_error_mapping(self, client, fake_importer, error, status):
        """Import errors map to HTTP status codes."""
        fake_importer.import_activities.side_effect = error

        response = await client.post("/api/v1/strava/sync", json={"user_id": "user-1"})

        assert response.status_code == status

    async def test_body_required(self, client, fake_importer):
        """user_id is required in the body."""
        response = await client.post("/api/v1/strava/sync", json={})
        assert response.status_code == 422
