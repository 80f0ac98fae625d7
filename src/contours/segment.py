"""Ориентированный сегмент изолинии внутри ячейки."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shared.constants import DEFAULT_THRESHOLD_SQUARED

if TYPE_CHECKING:
    from geo.coordinates import Coordinates


class ContourSegment:
    """
    Отрезок изолинии внутри одной ячейки сетки.

    Возвышенность лежит слева от ``point1 -> point2``. Гипотетический сегмент
    касается отсчёта, лежащего точно на уровне, поэтому его связность
    неизвестна, пока его не примет линия.
    """

    __slots__ = ('_is_hypothesis', 'level', 'point1', 'point2')

    def __init__(
        self,
        point1: Coordinates,
        point2: Coordinates,
        level: float,
        *,
        is_hypothesis: bool = False,
    ) -> None:
        self.point1 = point1
        self.point2 = point2
        self.level = level
        self._is_hypothesis = is_hypothesis

    @property
    def is_hypothesis(self) -> bool:
        return self._is_hypothesis

    def validate_hypothesis(self) -> None:
        self._is_hypothesis = False

    def is_zero_length(self, threshold_squared: float = DEFAULT_THRESHOLD_SQUARED) -> bool:
        return self.point1.almost_equals(self.point2, threshold_squared)

    def __repr__(self) -> str:
        kind = 'hypothesis' if self._is_hypothesis else 'firm'
        return f'ContourSegment({self.point1} -> {self.point2}, level={self.level}, {kind})'
