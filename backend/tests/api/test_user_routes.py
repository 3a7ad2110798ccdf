"""
Tests for user profile and activity listing routes.
"""

from datetime import datetime

import pytest

from app.features.activities.models import Activity


@pytest.fixture
def add_activity(db):
    async def _add(user_id: str, strava_id: int, day: int, in_region: bool = True):
        db.add(Activity(
            user_id=user_id,
            strava_activity_id=strava_id,
            activity_type="Run",
            activity_date=datetime(2026, 3, day, 7, 0),
            distance_meters=10000,
            distance_miles=6.21,
            moving_time_seconds=3000,
            in_dc_region=in_region,
        ))
        await db.commit()
    return _add


# =============================================================================
# Profile
# =============================================================================

class TestUserProfile:
    """GET /users/{user_id}."""

    async def test_profile_hides_tokens(self, client, make_user):
        """The profile never includes Strava tokens."""
        user = await make_user(first_name="Ada")

        response = await client.get(f"/api/v1/users/{user.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["first_name"] == "Ada"
        assert body["strava_connected"] is True
        assert "strava_access_token" not in body
        assert "strava_refresh_token" not in body

    async def test_unconnected_user(self, client, make_user):
        """Unconnected users report strava_connected false."""
        user = await make_user(connected=False)

        response = await client.get(f"/api/v1/users/{user.id}")

        assert response.status_code == 200
        assert response.json()["strava_connected"] is False

    async def test_unknown_user(self, client):
        """Unknown users get 404."""
        response = await client.get("/api/v1/users/nobody")
        assert response.status_code == 404


# =============================================================================
# Activities
# =============================================================================

class TestUserActivities:
    """GET /users/{user_id}/activities."""

    async def test_newest_first_with_pace(self, client, make_user, add_activity):
        """Runs come newest first with pace per mile."""
        user = await make_user()
        await add_activity(user.id, 1, day=2)
        await add_activity(user.id, 2, day=9)

        response = await client.get(f"/api/v1/users/{user.id}/activities")

        assert response.status_code == 200
        body = response.json()
        assert [a["strava_activity_id"] for a in body] == [2, 1]
        assert body[0]["pace_min_per_mile"] == pytest.approx(50 / 6.21)

    async def test_in_region_filter_and_limit(self, client, make_user, add_activity):
        """in_region_only and limit narrow the list."""
        user = await make_user()
        await add_activity(user.id, 1, day=2)
        await add_activity(user.id, 2, day=5, in_region=False)
        await add_activity(user.id, 3, day=9)

        response = await client.get(
            f"/api/v1/users/{user.id}/activities",
            params={"in_region_only": "true", "limit": 1},
        )

        assert [a["strava_activity_id"] for a in response.json()] == [3]

    async def test_other_users_runs_excluded(self, client, make_user, add_activity):
        """Only the requested user's runs are listed."""
        alice = await make_user()
        bob = await make_user()
        await add_activity(bob.id, 7, day=3)

        response = await client.get(f"/api/v1/users/{alice.id}/activities")

        assert response.json() == []

    async def test_unknown_user(self, client):
        """Unknown users get 404."""
        response = await client.get("/api/v1/users/nobody/activities")
        assert response.status_code == 404
