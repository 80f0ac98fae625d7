"""Pytest configuration and fixtures for contour tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from dem.grid import ElevationGrid  # noqa: E402
from geo.coordinates import Coordinates  # noqa: E402


def _unit_grid(data) -> ElevationGrid:
    arr = np.asarray(data, dtype=float)
    rows, cols = arr.shape
    return ElevationGrid(arr, Coordinates(0.0, 0.0), Coordinates(rows - 1.0, cols - 1.0))


@pytest.fixture
def make_grid():
    """Factory for grids with unit spacing: sample (i, j) sits at lat=i, lon=j."""
    return _unit_grid


@pytest.fixture
def hill_grid() -> ElevationGrid:
    """5x5 grid of zeros with a single 10 m peak in the middle."""
    data = np.zeros((5, 5))
    data[2, 2] = 10.0
    return _unit_grid(data)


@pytest.fixture
def basin_grid() -> ElevationGrid:
    """5x5 grid at 10 m with a single pit in the middle."""
    data = np.full((5, 5), 10.0)
    data[2, 2] = 0.0
    return _unit_grid(data)
