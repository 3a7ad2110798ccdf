"""
Tests for date helpers and calendar windows.
"""

from datetime import datetime

from app.shared.dates import (
    from_epoch,
    month_start,
    parse_strava_date,
    previous_month_start,
    to_epoch,
    year_start,
)


# =============================================================================
# Calendar windows
# =============================================================================

class TestWindows:
    """Tests for month and year window starts."""

    def test_month_start(self):
        """Month start drops day and time."""
        assert month_start(datetime(2026, 3, 15, 12, 30, 5)) == datetime(2026, 3, 1)

    def test_previous_month_start(self):
        """Previous month start within the same year."""
        assert previous_month_start(datetime(2026, 3, 15)) == datetime(2026, 2, 1)

    def test_previous_month_start_january(self):
        """January rolls back to December of the prior year."""
        assert previous_month_start(datetime(2026, 1, 10)) == datetime(2025, 12, 1)

    def test_year_start(self):
        """Year start is January 1st at midnight."""
        assert year_start(datetime(2026, 7, 4, 9, 0)) == datetime(2026, 1, 1)


# =============================================================================
# Epoch conversion
# =============================================================================

class TestEpoch:
    """Tests for epoch <-> naive UTC conversion."""

    def test_round_trip(self):
        """A naive UTC datetime survives to_epoch/from_epoch."""
        moment = datetime(2026, 1, 8, 17, 0, 0)
        assert from_epoch(to_epoch(moment)) == moment

    def test_known_value(self):
        """Naive datetimes are read as UTC."""
        assert to_epoch(datetime(1970, 1, 2)) == 86400


# =============================================================================
# Strava dates
# =============================================================================

class TestParseStravaDate:
    """Tests for parse_strava_date."""

    def test_zulu(self):
        """Z suffix parses as UTC."""
        assert parse_strava_date("2026-01-08T17:00:00Z") == datetime(2026, 1, 8, 17, 0, 0)

    def test_offset_converted_to_utc(self):
        """Offsets are normalized to naive UTC."""
        assert parse_strava_date("2026-01-08T12:00:00-05:00") == datetime(2026, 1, 8, 17, 0, 0)

    def test_missing(self):
        """None and empty string give None."""
        assert parse_strava_date(None) is None
        assert parse_strava_date("") is None

    def test_malformed(self):
        """Unparseable text gives None."""
        assert parse_strava_date("yesterday") is None
