"""Tests for contours.square module."""

import math

import pytest

from contours.levels import FixedLevelGenerator, IntervalLevelGenerator
from contours.square import ContourSquare, interpolate_crossing
from dem.grid import DemDataPoint
from geo.coordinates import Coordinates
from shared.constants import MS_MASK_BL, MS_MASK_TL_BR


def p(lat, lon, elevation):
    return DemDataPoint(Coordinates(float(lat), float(lon)), float(elevation))


def cell(nw, sw, se, ne):
    """Unit cell with SW corner at the origin."""
    return ContourSquare(p(1, 0, nw), p(0, 0, sw), p(0, 1, se), p(1, 1, ne))


def as_tuples(segment):
    return (
        (segment.point1.latitude, segment.point1.longitude),
        (segment.point2.latitude, segment.point2.longitude),
    )


class TestInterpolateCrossing:
    """Tests for interpolate_crossing."""

    def test_midpoint(self):
        """Level halfway between corners lands in the middle."""
        point, on_sample = interpolate_crossing(p(0, 0, 0), p(0, 1, 10), 5)
        assert point == Coordinates(0.0, 0.5)
        assert not on_sample

    def test_exact_high_corner(self):
        """Level equal to the high corner returns that corner."""
        point, on_sample = interpolate_crossing(p(0, 0, 0), p(0, 1, 5), 5)
        assert point == Coordinates(0.0, 1.0)
        assert on_sample


class TestMask:
    """Tests for ContourSquare.mask."""

    def test_single_corner(self):
        """Only SW high gives the BL bit."""
        assert cell(0, 10, 0, 0).mask(5) == MS_MASK_BL

    def test_saddle(self):
        """NW and SE high is a diagonal case."""
        assert cell(10, 0, 10, 0).mask(5) == MS_MASK_TL_BR

    def test_equal_counts_as_high(self):
        """Sample exactly on the level is high."""
        assert cell(0, 5, 0, 0).mask(5) == MS_MASK_BL


class TestSegments:
    """Tests for ContourSquare.segments_at / segments."""

    def test_flat_cell(self):
        """Cell entirely above or below produces nothing."""
        assert cell(10, 10, 10, 10).segments_at(5) == []
        assert cell(0, 0, 0, 0).segments_at(5) == []

    def test_single_high_corner(self):
        """High SW corner: segment runs bottom -> left, high ground on the left."""
        (segment,) = cell(0, 10, 0, 0).segments_at(5)
        assert as_tuples(segment) == ((0.0, 0.5), (0.5, 0.0))
        assert segment.level == 5
        assert not segment.is_hypothesis

    def test_single_low_corner_reverses(self):
        """Low SW corner: segment runs left -> bottom."""
        (segment,) = cell(10, 0, 10, 10).segments_at(5)
        assert as_tuples(segment) == ((0.5, 0.0), (0.0, 0.5))

    def test_horizontal_split(self):
        """High south edge: segment runs east -> west."""
        (segment,) = cell(0, 10, 10, 0).segments_at(5)
        assert as_tuples(segment) == ((0.5, 1.0), (0.5, 0.0))

    def test_hypothesis_on_exact_sample(self):
        """Crossing on a sample exactly at the level marks a hypothesis."""
        (segment,) = cell(0, 5, 10, 0).segments_at(5)
        assert as_tuples(segment) == ((0.5, 1.0), (0.0, 0.0))
        assert segment.is_hypothesis

    def test_zero_length_on_exact_sample(self):
        """Isolated sample on the level degenerates to a point."""
        (segment,) = cell(0, 5, 0, 0).segments_at(5)
        assert segment.is_zero_length()
        assert segment.is_hypothesis

    def test_saddle_connected_through_center(self):
        """Centre at or above the level joins the high corners."""
        segments = cell(10, 0, 10, 0).segments_at(5)
        assert [as_tuples(s) for s in segments] == [
            ((0.5, 1.0), (1.0, 0.5)),
            ((0.5, 0.0), (0.0, 0.5)),
        ]

    def test_saddle_separated(self):
        """Centre below the level keeps high corners apart."""
        segments = cell(10, 0, 10, 0).segments_at(6)
        assert len(segments) == 2
        first, second = (as_tuples(s) for s in segments)
        assert first[0] == pytest.approx((0.4, 1.0))
        assert first[1] == pytest.approx((0.0, 0.6))
        assert second[0] == pytest.approx((0.6, 0.0))
        assert second[1] == pytest.approx((1.0, 0.4))

    def test_levels_from_generator(self):
        """One segment per proposed level."""
        square = cell(0, 30, 0, 0)
        segments = square.segments(FixedLevelGenerator([10, 20, 40]))
        assert [s.level for s in segments] == [10.0, 20.0]

    def test_interval_generator(self):
        """Interval generator proposes levels within the cell range."""
        segments = cell(0, 25, 0, 0).segments(IntervalLevelGenerator(10))
        assert [s.level for s in segments] == [10.0, 20.0]

    def test_nan_corner(self):
        """Cells with missing samples are skipped."""
        square = cell(0, math.nan, 10, 0)
        assert square.segments(IntervalLevelGenerator(1)) == []
