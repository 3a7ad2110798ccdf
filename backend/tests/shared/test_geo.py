"""
Tests for the eligible-region check.
"""

import pytest

from app.shared.geo import BoundingBox, DC_METRO_BOX, classify_start, is_in_region


# =============================================================================
# Test is_in_region
# =============================================================================

class TestIsInRegion:
    """Tests for is_in_region with the DC metro box."""

    def test_downtown_dc(self):
        """Downtown DC is in region."""
        assert is_in_region(38.9072, -77.0369) is True

    def test_center_of_box(self):
        """Center of the box is in region."""
        assert is_in_region(39.0, -77.0) is True

    def test_north_of_box(self):
        """Just north of the box is out."""
        assert is_in_region(39.3, -77.0) is False

    def test_south_of_box(self):
        """Just south of the box is out."""
        assert is_in_region(38.79, -77.0) is False

    def test_west_of_box(self):
        """Just west of the box is out."""
        assert is_in_region(39.0, -77.51) is False

    def test_east_of_box(self):
        """Just east of the box is out."""
        assert is_in_region(39.0, -76.89) is False

    @pytest.mark.parametrize("lat,lon", [
        (38.8, -77.5),
        (38.8, -76.9),
        (39.2, -77.5),
        (39.2, -76.9),
    ])
    def test_corners_are_inclusive(self, lat, lon):
        """All four corners count as in region."""
        assert is_in_region(lat, lon) is True

    def test_edges_are_inclusive(self):
        """Points on each edge count as in region."""
        assert is_in_region(38.8, -77.2) is True
        assert is_in_region(39.2, -77.2) is True
        assert is_in_region(39.0, -77.5) is True
        assert is_in_region(39.0, -76.9) is True

    def test_other_city(self):
        """New York is out of region."""
        assert is_in_region(40.7128, -74.0060) is False

    def test_custom_box(self):
        """A custom box replaces the default."""
        box = BoundingBox(min_lat=0.0, max_lat=1.0, min_lon=0.0, max_lon=1.0)
        assert is_in_region(0.5, 0.5, box) is True
        assert is_in_region(39.0, -77.0, box) is False


# =============================================================================
# Test classify_start
# =============================================================================

class TestClassifyStart:
    """Tests for classify_start; missing coordinates are never in region."""

    def test_both_present(self):
        """Coordinates inside the box are in region."""
        assert classify_start(38.9, -77.03) is True

    def test_missing_latitude(self):
        """No latitude, not in region."""
        assert classify_start(None, -77.03) is False

    def test_missing_longitude(self):
        """No longitude, not in region."""
        assert classify_start(38.9, None) is False

    def test_missing_both(self):
        """No coordinates, not in region."""
        assert classify_start(None, None) is False

    def test_default_box(self):
        """Default box matches the DC metro bounds."""
        assert DC_METRO_BOX.min_lat == 38.8
        assert DC_METRO_BOX.max_lat == 39.2
        assert DC_METRO_BOX.min_lon == -77.5
        assert DC_METRO_BOX.max_lon == -76.9
