"""Политики выбора уровней изолиний."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Protocol

from shared.constants import CONTOUR_BASE_M, LEVEL_KEY_SCALE

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


def level_key(level: float) -> int:
    """Ключ словаря для уровня, квантованный до 1/LEVEL_KEY_SCALE."""
    return round(level * LEVEL_KEY_SCALE)


class ContourLevelGenerator(Protocol):
    def levels(self, min_elevation: float, max_elevation: float) -> Iterable[float]:
        """Уровни для ячейки, высоты углов которой лежат в [min, max]."""
        ...


class IntervalLevelGenerator:
    """
    Уровни ``base + k * interval`` для целых ``k``.

    Возвращаются только уровни из ``(min, max]``: уровень, равный минимуму
    ячейки, не разделяет её углы. Одно и то же ``k`` всегда даёт одно и то же
    число, поэтому соседние ячейки получают побитно равные уровни.
    """

    def __init__(self, interval: float, base: float = CONTOUR_BASE_M) -> None:
        if not interval > 0:
            msg = f'Contour interval must be positive, got {interval}'
            raise ValueError(msg)
        self.interval = float(interval)
        self.base = float(base)

    def levels(self, min_elevation: float, max_elevation: float) -> list[float]:
        if not (math.isfinite(min_elevation) and math.isfinite(max_elevation)):
            return []
        k = math.floor((min_elevation - self.base) / self.interval)
        result: list[float] = []
        level = self.base + k * self.interval
        while level <= max_elevation:
            if level > min_elevation:
                result.append(level)
            k += 1
            level = self.base + k * self.interval
        return result

    def __repr__(self) -> str:
        return f'IntervalLevelGenerator(interval={self.interval}, base={self.base})'


class FixedLevelGenerator:
    """Явный список уровней, приведённых к сетке ключей уровней."""

    def __init__(self, levels: Sequence[float]) -> None:
        self._levels = sorted({level_key(v) / LEVEL_KEY_SCALE for v in levels})

    def levels(self, min_elevation: float, max_elevation: float) -> list[float]:
        return [v for v in self._levels if min_elevation < v <= max_elevation]

    def __repr__(self) -> str:
        return f'FixedLevelGenerator({self._levels})'
