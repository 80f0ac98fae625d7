"""Tests for dem.grid module."""

import numpy as np
import pytest

from dem.grid import DemDataPoint, ElevationGrid
from geo.coordinates import Coordinates


@pytest.fixture
def grid():
    data = np.arange(12, dtype=float).reshape(3, 4)
    return ElevationGrid(data, Coordinates(10.0, 20.0), Coordinates(12.0, 23.0))


class TestElevationGrid:
    """Tests for ElevationGrid."""

    def test_shape(self, grid):
        """Rows are latitudes, columns longitudes."""
        assert grid.points_lat == 3
        assert grid.points_lon == 4

    def test_points_on_parallel(self, grid):
        """Row samples come west to east with their coordinates."""
        points = grid.get_points_on_parallel(1, 0, 4)
        assert [p.elevation for p in points] == [4.0, 5.0, 6.0, 7.0]
        assert [p.longitude for p in points] == [20.0, 21.0, 22.0, 23.0]
        assert all(p.latitude == 11.0 for p in points)

    def test_points_on_parallel_offset(self, grid):
        """Start column and count select a slice."""
        (point,) = grid.get_points_on_parallel(2, 3, 1)
        assert point == DemDataPoint(Coordinates(12.0, 23.0), 11.0)

    def test_points_on_parallel_clipped(self, grid):
        """Count past the east edge is clipped."""
        assert len(grid.get_points_on_parallel(0, 2, 10)) == 2

    def test_edges_exact(self, grid):
        """Corner samples sit exactly on the bounds."""
        assert grid.coordinates_at(0, 0) == Coordinates(10.0, 20.0)
        assert grid.coordinates_at(2, 3) == Coordinates(12.0, 23.0)

    def test_from_north_up(self):
        """Image-ordered rasters are flipped so row 0 is south."""
        grid = ElevationGrid.from_north_up(
            np.array([[1.0, 1.0], [2.0, 2.0]]), Coordinates(0, 0), Coordinates(1, 1)
        )
        assert [p.elevation for p in grid.get_points_on_parallel(0, 0, 2)] == [2.0, 2.0]

    def test_elevation_range_ignores_nan(self):
        """NaN samples are ignored."""
        grid = ElevationGrid(
            np.array([[np.nan, 3.0], [-1.0, 7.0]]), Coordinates(0, 0), Coordinates(1, 1)
        )
        assert grid.elevation_range() == (-1.0, 7.0)

    def test_elevation_range_all_nan(self):
        """No finite samples gives a zero range."""
        grid = ElevationGrid(np.full((2, 2), np.nan), Coordinates(0, 0), Coordinates(1, 1))
        assert grid.elevation_range() == (0.0, 0.0)

    def test_not_2d(self):
        """1D data should raise ValueError."""
        with pytest.raises(ValueError):
            ElevationGrid(np.zeros(5), Coordinates(0, 0), Coordinates(1, 1))

    def test_too_small(self):
        """Single row should raise ValueError."""
        with pytest.raises(ValueError):
            ElevationGrid(np.zeros((1, 5)), Coordinates(0, 0), Coordinates(1, 1))
