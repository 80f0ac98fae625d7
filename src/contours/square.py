"""
Генерация сегментов изолиний в одной ячейке сетки (marching squares).

Граница ячейки обходится против часовой стрелки (SW -> SE -> NE -> NW). Каждое
ребро, углы которого лежат по разные стороны уровня, даёт пересечение:
*выход*, когда обход покидает возвышенность, и *вход*, когда возвращается.
Пара выход/вход даёт сегмент, у которого возвышенность слева, поэтому холмы
замыкаются против часовой стрелки, а впадины по часовой.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from contours.segment import ContourSegment
from geo.coordinates import Coordinates
from shared.constants import (
    MARCHING_SQUARES_CENTER_WEIGHT,
    MS_AMBIGUOUS_CASES,
    MS_MASK_BL,
    MS_MASK_BR,
    MS_MASK_TL,
    MS_MASK_TR,
    MS_NO_CONTOUR_CASES,
)

if TYPE_CHECKING:
    from contours.levels import ContourLevelGenerator
    from dem.grid import DemDataPoint

SADDLE_CROSSINGS = 4


def interpolate_crossing(
    low: DemDataPoint, high: DemDataPoint, level: float
) -> tuple[Coordinates, bool]:
    """
    Точка пересечения уровнем ``level`` ребра между ``low`` и ``high``.

    Интерполяция всегда идёт от нижнего угла, поэтому две ячейки с общим
    ребром получают одинаковые точки. Возвращает ``(point, on_sample)``;
    ``on_sample`` истинно, когда верхний угол лежит точно на уровне.
    """
    if high.elevation == level:
        return high.coordinates, True
    t = (level - low.elevation) / (high.elevation - low.elevation)
    lat = low.latitude + t * (high.latitude - low.latitude)
    lon = low.longitude + t * (high.longitude - low.longitude)
    return Coordinates(lat, lon), False


class ContourSquare:
    """Ячейка сетки между двумя соседними отсчётами двух соседних строк."""

    __slots__ = ('north_east', 'north_west', 'south_east', 'south_west')

    def __init__(
        self,
        north_west: DemDataPoint,
        south_west: DemDataPoint,
        south_east: DemDataPoint,
        north_east: DemDataPoint,
    ) -> None:
        self.north_west = north_west
        self.south_west = south_west
        self.south_east = south_east
        self.north_east = north_east

    def _walk(self) -> tuple[DemDataPoint, DemDataPoint, DemDataPoint, DemDataPoint]:
        return self.south_west, self.south_east, self.north_east, self.north_west

    def mask(self, level: float) -> int:
        mask = 0
        if self.north_west.elevation >= level:
            mask |= MS_MASK_TL
        if self.north_east.elevation >= level:
            mask |= MS_MASK_TR
        if self.south_east.elevation >= level:
            mask |= MS_MASK_BR
        if self.south_west.elevation >= level:
            mask |= MS_MASK_BL
        return mask

    def segments(
        self,
        generator: ContourLevelGenerator,
        *,
        center_weight: float = MARCHING_SQUARES_CENTER_WEIGHT,
    ) -> list[ContourSegment]:
        """Все сегменты ячейки для уровней, предложенных генератором."""
        elevations = [p.elevation for p in self._walk()]
        if any(math.isnan(e) for e in elevations):
            return []
        result: list[ContourSegment] = []
        for level in generator.levels(min(elevations), max(elevations)):
            result.extend(self.segments_at(level, center_weight=center_weight))
        return result

    def segments_at(
        self,
        level: float,
        *,
        center_weight: float = MARCHING_SQUARES_CENTER_WEIGHT,
    ) -> list[ContourSegment]:
        mask = self.mask(level)
        if mask in MS_NO_CONTOUR_CASES:
            return []

        walk = self._walk()
        # (is_exit, point, on_sample) в порядке обхода против часовой
        crossings: list[tuple[bool, Coordinates, bool]] = []
        for i, a in enumerate(walk):
            b = walk[(i + 1) % len(walk)]
            a_high = a.elevation >= level
            if a_high == (b.elevation >= level):
                continue
            low, high = (b, a) if a_high else (a, b)
            point, on_sample = interpolate_crossing(low, high, level)
            crossings.append((a_high, point, on_sample))

        # выходы и входы чередуются; начинаем с выхода
        if not crossings[0][0]:
            crossings = crossings[1:] + crossings[:1]

        if len(crossings) == SADDLE_CROSSINGS:
            assert mask in MS_AMBIGUOUS_CASES
            center = sum(p.elevation for p in walk) * center_weight
            x0, n0, x1, n1 = crossings
            pairs = [(x0, n0), (x1, n1)] if center >= level else [(x0, n1), (x1, n0)]
        else:
            pairs = [(crossings[0], crossings[1])]

        return [
            ContourSegment(
                start[1],
                end[1],
                level,
                is_hypothesis=start[2] or end[2],
            )
            for start, end in pairs
        ]
