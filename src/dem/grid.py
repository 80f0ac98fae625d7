"""
Elevation grid sources.

The contour graph only needs row access to a regular grid of samples; the
``DemGrid`` protocol captures that, ``ElevationGrid`` is an in-memory numpy
implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import numpy as np

from geo.coordinates import Coordinates
from shared.constants import MIN_GRID_SIZE

if TYPE_CHECKING:
    from collections.abc import Sequence

GRID_NDIM = 2


@dataclass(frozen=True)
class DemDataPoint:
    """Single elevation sample."""

    coordinates: Coordinates
    elevation: float

    @property
    def latitude(self) -> float:
        return self.coordinates.latitude

    @property
    def longitude(self) -> float:
        return self.coordinates.longitude


class DemGrid(Protocol):
    """Row-oriented view of a regular elevation grid (row 0 is the south edge)."""

    @property
    def points_lat(self) -> int: ...

    @property
    def points_lon(self) -> int: ...

    def get_points_on_parallel(
        self, lat: int, lon: int, count: int
    ) -> Sequence[DemDataPoint]: ...


class ElevationGrid:
    """
    Regular grid backed by a numpy array.

    Args:
        data: Elevations indexed ``data[lat_index][lon_index]``; row 0 is south.
        start: South-west corner.
        end: North-east corner.

    """

    def __init__(self, data: np.ndarray, start: Coordinates, end: Coordinates) -> None:
        arr = np.asarray(data, dtype=np.float64)
        if arr.ndim != GRID_NDIM:
            msg = f'Elevation grid must be 2D, got shape {arr.shape}'
            raise ValueError(msg)
        rows, cols = arr.shape
        if rows < MIN_GRID_SIZE or cols < MIN_GRID_SIZE:
            msg = f'Elevation grid needs at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE} samples, got {rows}x{cols}'
            raise ValueError(msg)
        self._data = arr
        self.start = start
        self.end = end
        # linspace keeps the last sample exactly on the north/east edge
        self._lats = [float(v) for v in np.linspace(start.latitude, end.latitude, rows)]
        self._lons = [float(v) for v in np.linspace(start.longitude, end.longitude, cols)]

    @classmethod
    def from_north_up(
        cls, data: np.ndarray, start: Coordinates, end: Coordinates
    ) -> ElevationGrid:
        """Build from an image-ordered raster whose first row is the north edge."""
        return cls(np.flipud(np.asarray(data)), start, end)

    @property
    def points_lat(self) -> int:
        return self._data.shape[0]

    @property
    def points_lon(self) -> int:
        return self._data.shape[1]

    @property
    def data(self) -> np.ndarray:
        return self._data

    def coordinates_at(self, lat: int, lon: int) -> Coordinates:
        return Coordinates(self._lats[lat], self._lons[lon])

    def get_points_on_parallel(self, lat: int, lon: int, count: int) -> list[DemDataPoint]:
        """Return ``count`` samples of row ``lat`` starting at column ``lon``."""
        latitude = self._lats[lat]
        row = self._data[lat]
        return [
            DemDataPoint(Coordinates(latitude, self._lons[j]), float(row[j]))
            for j in range(lon, min(lon + count, self.points_lon))
        ]

    def elevation_range(self) -> tuple[float, float]:
        """Min/max over finite samples; ``(0.0, 0.0)`` when there are none."""
        valid_mask = np.isfinite(self._data)
        if not np.any(valid_mask):
            return 0.0, 0.0
        return float(np.min(self._data[valid_mask])), float(np.max(self._data[valid_mask]))
