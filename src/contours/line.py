"""Изолиния одного уровня: наращивание сегментами, склейка и ориентация."""

from __future__ import annotations

from collections import deque
from enum import Enum
from itertools import islice
from typing import TYPE_CHECKING

from shared.constants import DEFAULT_THRESHOLD_SQUARED

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contours.segment import ContourSegment
    from geo.coordinates import Coordinates

SINGLE_POINT_LENGTH = 2


class PointLocation(Enum):
    OUTSIDE = 0
    INSIDE = 1
    ON_BOUNDARY = 2


def signed_area(points: Iterable[Coordinates]) -> float:
    """Площадь по формуле шнурка (x = долгота, y = широта); положительна против часовой."""
    pts = list(points)
    if len(pts) < 3:
        return 0.0
    total = 0.0
    prev = pts[-1]
    for cur in pts:
        total += prev.longitude * cur.latitude - cur.longitude * prev.latitude
        prev = cur
    return total / 2.0


def locate_point(points: Iterable[Coordinates], point: Coordinates) -> PointLocation:
    """Проверка точки в кольце по правилу чётности; кольцо считается замкнутым."""
    pts = list(points)
    if len(pts) < 3:
        return PointLocation.OUTSIDE
    x, y = point.longitude, point.latitude
    inside = False
    prev = pts[-1]
    for cur in pts:
        x1, y1 = prev.longitude, prev.latitude
        x2, y2 = cur.longitude, cur.latitude
        cross = (x2 - x1) * (y - y1) - (y2 - y1) * (x - x1)
        if (
            cross == 0
            and min(x1, x2) <= x <= max(x1, x2)
            and min(y1, y2) <= y <= max(y1, y2)
        ):
            return PointLocation.ON_BOUNDARY
        if (y1 > y) != (y2 > y):
            x_at = x1 + (y - y1) * (x2 - x1) / (y2 - y1)
            if x < x_at:
                inside = not inside
        prev = cur
    return PointLocation.INSIDE if inside else PointLocation.OUTSIDE


class ContourLine:
    """
    Полилиния одного уровня высоты.

    Вокруг холмов точки идут против часовой стрелки, вокруг впадин по часовой.
    Замкнутая линия больше не размыкается. Линия, поглощённая другой,
    становится *отброшенной*: замкнутой и без точек.
    """

    def __init__(
        self,
        points: Iterable[Coordinates],
        level: float,
        threshold_squared: float = DEFAULT_THRESHOLD_SQUARED,
    ) -> None:
        self._points: deque[Coordinates] = deque(points)
        self.level = level
        self.is_closed = False
        self._update_is_closed(threshold_squared)

    @classmethod
    def from_segment(cls, segment: ContourSegment) -> ContourLine:
        assert not segment.is_hypothesis, 'new lines start from firm segments only'
        return cls((segment.point1, segment.point2), segment.level)

    @property
    def points(self) -> deque[Coordinates]:
        return self._points

    @property
    def first(self) -> Coordinates:
        return self._points[0]

    @property
    def last(self) -> Coordinates:
        return self._points[-1]

    @property
    def is_single_point(self) -> bool:
        return self.is_closed and len(self._points) == SINGLE_POINT_LENGTH

    @property
    def is_discarded(self) -> bool:
        return self.is_closed and not self._points

    @property
    def signed_area(self) -> float:
        return signed_area(self._points)

    @property
    def is_counter_clockwise(self) -> bool:
        return self.signed_area > 0

    def try_add(
        self,
        segment: ContourSegment,
        threshold_squared: float = DEFAULT_THRESHOLD_SQUARED,
    ) -> bool:
        """Продлевает любой из концов сегментом, который его продолжает."""
        if self.is_closed or segment.level != self.level:
            return False
        if segment.point1.almost_equals(self.last, threshold_squared):
            self._points.append(segment.point2)
        elif segment.point2.almost_equals(self.first, threshold_squared):
            self._points.appendleft(segment.point1)
        else:
            return False
        self._update_is_closed(threshold_squared)
        segment.validate_hypothesis()
        return True

    def try_merge(
        self,
        other: ContourLine,
        threshold_squared: float = DEFAULT_THRESHOLD_SQUARED,
    ) -> bool:
        """
        Поглощает ``other``, если у линий есть общий конец.

        ``self`` остаётся с объединёнными точками, ``other`` отбрасывается.
        """
        if self.is_closed or other.is_closed or other.level != self.level or other is self:
            return False
        if self.last.almost_equals(other.first, threshold_squared):
            self._points.extend(islice(other._points, 1, None))
        elif self.first.almost_equals(other.last, threshold_squared):
            other._points.extend(islice(self._points, 1, None))
            self._points = other._points
        else:
            return False
        other._discard()
        self._update_is_closed(threshold_squared)
        return True

    def append(
        self,
        other: ContourLine,
        threshold_squared: float = DEFAULT_THRESHOLD_SQUARED,
    ) -> None:
        """Дописывает все точки ``other``; добавление линии к себе самой замыкает её."""
        if other is self:
            self._points.append(self.first)
        else:
            self._points.extend(other._points)
            other._discard()
        self._update_is_closed(threshold_squared)

    def insert_first(self, point: Coordinates) -> None:
        self._points.appendleft(point)

    def close(self, threshold_squared: float = DEFAULT_THRESHOLD_SQUARED) -> None:
        self._update_is_closed(threshold_squared)

    def is_point_inside(self, point: Coordinates) -> bool:
        return locate_point(self._points, point) is PointLocation.INSIDE

    def is_point_inside_or_on_boundary(self, point: Coordinates) -> bool:
        return locate_point(self._points, point) is not PointLocation.OUTSIDE

    def _discard(self) -> None:
        self.is_closed = True
        self._points = deque()

    def _update_is_closed(self, threshold_squared: float) -> None:
        if self._points and self.last.almost_equals(self.first, threshold_squared):
            self.is_closed = True

    def __repr__(self) -> str:
        state = 'discarded' if self.is_discarded else 'closed' if self.is_closed else 'open'
        return f'ContourLine(level={self.level}, points={len(self._points)}, {state})'
