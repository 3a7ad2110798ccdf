"""
Tests for meters -> miles conversion.
"""

import pytest

from app.shared.units import meters_to_miles, round_miles


# =============================================================================
# meters_to_miles
# =============================================================================

class TestMetersToMiles:
    """Tests for meters_to_miles."""

    def test_one_mile(self):
        """1609.34 m is one mile after rounding."""
        assert meters_to_miles(1609.34) == 1.0

    def test_ten_km(self):
        """10 km -> 6.21 mi."""
        assert meters_to_miles(10000) == 6.21

    @pytest.mark.parametrize("meters,miles", [
        (20000, 12.43),
        (15000, 9.32),
        (5000, 3.11),
        (42195, 26.22),
    ])
    def test_common_distances(self, meters, miles):
        """Race distances convert to the expected two-place miles."""
        assert meters_to_miles(meters) == miles

    def test_zero(self):
        """Zero distance is zero miles."""
        assert meters_to_miles(0) == 0.0

    def test_none(self):
        """Missing distance is treated as zero."""
        assert meters_to_miles(None) == 0.0

    def test_rounds_half_up(self):
        """A product just over half a hundredth rounds up."""
        # 8.047 m * 0.000621371 = 0.00500017... -> 0.01
        assert meters_to_miles(8.047) == 0.01


# =============================================================================
# round_miles
# =============================================================================

class TestRoundMiles:
    """Tests for round_miles."""

    def test_two_places(self):
        """Float noise from summing is rounded away."""
        assert round_miles(27.959999999) == 27.96

    def test_one_place(self):
        """Community totals use one decimal place."""
        assert round_miles(1234.56, places=1) == 1234.6

    def test_none(self):
        """An empty sum is zero."""
        assert round_miles(None) == 0.0
