"""Tests for geo.coordinates module."""

import dataclasses

import pytest

from geo.coordinates import Coordinates
from shared.constants import DEFAULT_THRESHOLD_SQUARED


class TestCoordinates:
    """Tests for Coordinates."""

    def test_frozen(self):
        """Coordinates are immutable."""
        point = Coordinates(1.0, 2.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            point.latitude = 3.0

    def test_distance_squared(self):
        """Planar squared distance."""
        assert Coordinates(0, 0).distance_squared(Coordinates(3, 4)) == 25

    def test_almost_equals_identical(self):
        """Identical points match with the default threshold."""
        assert Coordinates(45.1, 6.2).almost_equals(Coordinates(45.1, 6.2))

    def test_almost_equals_threshold_inclusive(self):
        """Distance equal to the threshold still matches."""
        assert Coordinates(0, 0).almost_equals(Coordinates(0, 0.5), threshold_squared=0.25)
        assert not Coordinates(0, 0).almost_equals(Coordinates(0, 0.6), threshold_squared=0.25)

    def test_default_threshold_is_tight(self):
        """Default threshold separates points a micro-degree apart."""
        assert DEFAULT_THRESHOLD_SQUARED < 1e-12
        assert not Coordinates(0, 0).almost_equals(Coordinates(0, 1e-6))

    def test_rounded(self):
        """Rounding applies to both axes."""
        assert Coordinates(1.23456, 6.54321).rounded(2) == Coordinates(1.23, 6.54)

    def test_to_xy(self):
        """x is longitude, y is latitude."""
        assert Coordinates(10.0, 20.0).to_xy() == (20.0, 10.0)
