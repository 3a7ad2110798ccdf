"""
Tests for access tier derivation.
"""

import pytest

from app.features.mileage.tiers import AccessTier, next_tier, tier_for_miles


# =============================================================================
# Test tier_for_miles
# =============================================================================

class TestTierForMiles:
    """Tests for tier_for_miles."""

    @pytest.mark.parametrize("miles,expected", [
        (0.0, AccessTier.NONE),
        (49.99, AccessTier.NONE),
        (50.0, AccessTier.BASIC),
        (99.99, AccessTier.BASIC),
        (100.0, AccessTier.PREMIUM),
        (149.99, AccessTier.PREMIUM),
        (150.0, AccessTier.EXCLUSIVE),
        (500.0, AccessTier.EXCLUSIVE),
    ])
    def test_boundaries(self, miles, expected):
        """Each threshold is inclusive on its lower edge."""
        assert tier_for_miles(miles) is expected

    def test_monotonic(self):
        """More miles never yields a lower tier."""
        previous = AccessTier.NONE
        miles = 0.0
        while miles <= 200.0:
            tier = tier_for_miles(miles)
            assert tier >= previous
            previous = tier
            miles += 0.25

    def test_values_match_storage(self):
        """Enum values are the strings stored in the database."""
        assert [t.value for t in AccessTier] == ["none", "basic", "premium", "exclusive"]


# =============================================================================
# Tier ordering
# =============================================================================

class TestTierOrdering:
    """Tiers compare by rank."""

    def test_ordering(self):
        """none < basic < premium < exclusive."""
        assert AccessTier.NONE < AccessTier.BASIC < AccessTier.PREMIUM < AccessTier.EXCLUSIVE

    def test_not_alphabetical(self):
        """Ordering is by rank, not by value string."""
        assert AccessTier.EXCLUSIVE > AccessTier.PREMIUM


# =============================================================================
# Test next_tier
# =============================================================================

class TestNextTier:
    """Tests for next_tier."""

    def test_from_zero(self):
        """No miles: basic is 50 away."""
        assert next_tier(0.0) == (AccessTier.BASIC, 50.0)

    def test_partial_progress(self):
        """Remaining miles are rounded to two places."""
        assert next_tier(27.96) == (AccessTier.BASIC, 22.04)

    def test_basic_to_premium(self):
        """Basic runners aim for premium."""
        assert next_tier(75.5) == (AccessTier.PREMIUM, 24.5)

    def test_premium_to_exclusive(self):
        """Premium runners aim for exclusive."""
        assert next_tier(120.0) == (AccessTier.EXCLUSIVE, 30.0)

    def test_exclusive_has_no_next(self):
        """Nothing above exclusive."""
        assert next_tier(150.0) is None
