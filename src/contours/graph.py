"""
Модуль построения графа изолиний.

Строки сетки обходятся с юга на север. Каждая пара соседних строк режется на
ячейки, ячейка даёт короткие ориентированные сегменты, а сегменты
пристраиваются к линиям, затронутым предыдущей парой строк. Продолжиться в
следующую пару могут только линии, затронутые текущей, поэтому сопоставление
остаётся локальным при любом размере сетки.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, TypeVar

from contours.levels import level_key
from contours.line import ContourLine
from contours.polygons import rings_to_polygons
from contours.square import ContourSquare
from geo.coordinates import Coordinates
from shared.constants import (
    BOUNDARY_MAX_ROTATIONS,
    CONTOUR_PARALLEL_WORKERS,
    DEFAULT_THRESHOLD_SQUARED,
    NO_ROUNDING,
    SCAN_RETRY_PASSES,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Sequence

    from shapely.geometry import Polygon

    from contours.levels import ContourLevelGenerator
    from contours.segment import ContourSegment
    from dem.grid import DemDataPoint, DemGrid

    ProgressCallback = Callable[[float], object]

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Линии, затронутые одной парой строк, по ключу уровня
ScanIndex = dict[int, list[ContourLine]]

# Стороны границы сетки по часовой стрелке
NORTH, EAST, SOUTH, WEST = range(4)


class ContourGraph:
    """Изолинии сетки, сгруппированные по уровню высоты."""

    def __init__(
        self,
        threshold_squared: float = DEFAULT_THRESHOLD_SQUARED,
        max_workers: int = CONTOUR_PARALLEL_WORKERS,
    ) -> None:
        self.threshold_squared = threshold_squared
        self.max_workers = max(1, int(max_workers))
        self._lines_by_level: dict[int, list[ContourLine]] = {}
        self._level_values: dict[int, float] = {}

    # --- Доступ

    @property
    def count(self) -> int:
        return sum(len(lines) for lines in self._lines_by_level.values())

    @property
    def lines(self) -> list[ContourLine]:
        return [line for lines in self._lines_by_level.values() for line in lines]

    @property
    def levels(self) -> list[float]:
        return sorted(self._level_values.values())

    def lines_at(self, level: float) -> list[ContourLine]:
        return list(self._lines_by_level.get(level_key(level), ()))

    # --- Построение

    def add(
        self,
        grid: DemGrid,
        generator: ContourLevelGenerator,
        *,
        close_lines: bool = False,
        simplify: bool = False,
        progress: ProgressCallback | None = None,
    ) -> None:
        """
        Строит изолинии всех уровней, предложенных ``generator``, по ``grid``.

        Args:
            grid: Источник высот по строкам, строка 0 на южном краю
            generator: Политика уровней, опрашивается для каждой ячейки
            close_lines: Замыкать линии, выходящие на край, вдоль границы
            simplify: Склеивать оставшиеся открытые линии после прохода
            progress: Колбэк процентов после каждой пары строк и 100 в конце

        """
        rows = grid.points_lat
        cols = grid.points_lon
        before = self.count
        previous_scan: ScanIndex = {}
        south = grid.get_points_on_parallel(0, 0, cols)
        for lat in range(rows - 1):
            north = grid.get_points_on_parallel(lat + 1, 0, cols)
            segments = [
                segment
                for segment in _row_segments(south, north, generator)
                if not segment.is_zero_length(self.threshold_squared)
            ]
            previous_scan = self._add_scan(segments, previous_scan)
            south = north
            if progress is not None:
                progress(lat / (rows - 1) * 100)
        self.cleanup()
        if progress is not None:
            progress(100.0)
        logger.info(
            'Изолинии построены: сетка %sx%s, линий %s (новых %s), уровней %s',
            rows,
            cols,
            self.count,
            self.count - before,
            len(self._lines_by_level),
        )
        if simplify:
            self.simplify()
        if close_lines:
            self.close_lines(grid)

    def _add_scan(self, segments: list[ContourSegment], previous_scan: ScanIndex) -> ScanIndex:
        current_scan: ScanIndex = {}
        touched: set[ContourLine] = set()

        unknown = self._add_segments(segments, previous_scan, current_scan, touched)
        passes = 0
        while unknown and passes < SCAN_RETRY_PASSES:
            unknown = self._add_segments(unknown, previous_scan, current_scan, touched)
            passes += 1

        if unknown:
            logger.debug('Принудительно принимаем гипотетических сегментов: %s', len(unknown))
            for segment in unknown:
                segment.validate_hypothesis()
            left = self._add_segments(unknown, previous_scan, current_scan, touched)
            assert not left
        return current_scan

    def _add_segments(
        self,
        segments: Iterable[ContourSegment],
        previous_scan: ScanIndex,
        current_scan: ScanIndex,
        touched: set[ContourLine],
    ) -> list[ContourSegment]:
        unknown: list[ContourSegment] = []
        for segment in segments:
            line = self._add_segment(segment, previous_scan, current_scan)
            if line is None:
                unknown.append(segment)
            elif line not in touched:
                touched.add(line)
                current_scan.setdefault(level_key(line.level), []).append(line)
        return unknown

    def _add_segment(
        self,
        segment: ContourSegment,
        previous_scan: ScanIndex,
        current_scan: ScanIndex,
    ) -> ContourLine | None:
        key = level_key(segment.level)
        threshold = self.threshold_squared
        previous_lines = previous_scan.get(key)

        current_lines = current_scan.get(key)
        if current_lines:
            # сначала последние затронутые
            for line in reversed(current_lines):
                if line.try_add(segment, threshold):
                    merged = self._merge(line, reversed(current_lines))
                    if previous_lines:
                        return self._merge(merged, previous_lines)
                    return merged

        if previous_lines:
            for line in previous_lines:
                if line.try_add(segment, threshold):
                    return self._merge(line, previous_lines)

        if segment.is_hypothesis:
            return None

        line = ContourLine.from_segment(segment)
        self._lines_by_level.setdefault(key, []).append(line)
        self._level_values.setdefault(key, segment.level)
        return line

    def _merge(self, edited: ContourLine, candidates: Iterable[ContourLine]) -> ContourLine:
        """Первый кандидат, стыкующийся с ``edited``, поглощает его."""
        for line in candidates:
            if line is not edited and line.try_merge(edited, self.threshold_squared):
                return line
        return edited

    # --- Постобработка

    def cleanup(self) -> None:
        """Удаляет поглощённые линии; линии из одной точки сохраняются."""
        self._for_each_level(_cleanup_level)

    def simplify(self) -> int:
        """
        Склеивает открытые линии одного уровня с совпадающими концами.

        Returns:
            Число выполненных склеек

        """
        self.cleanup()
        merged = sum(self._for_each_level(self._simplify_level))
        if merged > 0:
            logger.info('Упрощение склеило линий: %s', merged)
        return merged

    def _simplify_level(self, lines: list[ContourLine]) -> int:
        keep = [line for line in lines if line.is_closed and not line.is_discarded]
        open_lines = [line for line in lines if not line.is_closed]
        merged = 0
        for i, a in enumerate(open_lines):
            for j, b in enumerate(open_lines):
                if a.is_closed:
                    break
                if i != j and not b.is_closed and a.try_merge(b, self.threshold_squared):
                    merged += 1
        lines[:] = keep + [line for line in open_lines if not line.is_discarded]
        return merged

    def close_lines(self, grid: DemGrid) -> None:
        """Замыкает линии, выходящие на край сетки, обходом вдоль границы."""
        south_west = grid.get_points_on_parallel(0, 0, 1)[0].coordinates
        north_east = grid.get_points_on_parallel(
            grid.points_lat - 1, grid.points_lon - 1, 1
        )[0].coordinates
        for lines in self._lines_by_level.values():
            _close_level(lines, south_west, north_east, self.threshold_squared)
        self.cleanup()

    def _for_each_level(self, func: Callable[[list[ContourLine]], T]) -> list[T]:
        groups = list(self._lines_by_level.values())
        num_workers = min(self.max_workers, max(1, os.cpu_count() or 1), len(groups))
        if num_workers > 1:
            with ThreadPoolExecutor(max_workers=num_workers) as executor:
                return list(executor.map(func, groups))
        return [func(lines) for lines in groups]

    # --- Полигоны

    def polygons_by_level(
        self,
        rounding: int = NO_ROUNDING,
        progress: ProgressCallback | None = None,
    ) -> Iterator[tuple[float, list[Polygon]]]:
        keys = sorted(self._lines_by_level, key=self._level_values.__getitem__)
        for done, key in enumerate(keys, start=1):
            rings = [
                [p.to_xy() for p in line.points]
                for line in self._lines_by_level[key]
            ]
            polygons = rings_to_polygons(rings, rounding=rounding)
            if progress is not None:
                progress(done / len(keys) * 100)
            yield self._level_values[key], polygons

    def to_polygons(
        self,
        rounding: int = NO_ROUNDING,
        progress: ProgressCallback | None = None,
    ) -> list[Polygon]:
        """
        Объединяет линии каждого уровня через XOR в полигоны с дырами.

        Args:
            rounding: Число знаков округления координат, -1 без округления
            progress: Колбэк процентов после каждого уровня

        Returns:
            Полигоны в порядке x = долгота, y = широта

        """
        return [
            polygon
            for _, polygons in self.polygons_by_level(rounding, progress)
            for polygon in polygons
        ]


def _row_segments(
    south: Sequence[DemDataPoint],
    north: Sequence[DemDataPoint],
    generator: ContourLevelGenerator,
) -> Iterator[ContourSegment]:
    for j in range(len(south) - 1):
        square = ContourSquare(north[j], south[j], south[j + 1], north[j + 1])
        yield from square.segments(generator)


def _cleanup_level(lines: list[ContourLine]) -> None:
    lines[:] = [line for line in lines if not (line.is_discarded and not line.is_single_point)]


def _edge_of(point: Coordinates, south_west: Coordinates, north_east: Coordinates) -> int | None:
    if point.latitude == north_east.latitude:
        return NORTH
    if point.longitude == north_east.longitude:
        return EAST
    if point.latitude == south_west.latitude:
        return SOUTH
    if point.longitude == south_west.longitude:
        return WEST
    return None


def _find_partner(
    edge: int,
    look_from: Coordinates,
    candidates: list[ContourLine],
    south_west: Coordinates,
    north_east: Coordinates,
) -> ContourLine | None:
    """Ближайшая открытая линия, чей конец лежит на ``edge`` дальше ``look_from`` по часовой."""
    found: list[tuple[float, ContourLine]] = []
    for line in candidates:
        if line.is_closed:
            continue
        last = line.last
        if edge == NORTH:
            if last.latitude == north_east.latitude and last.longitude > look_from.longitude:
                found.append((last.longitude, line))
        elif edge == EAST:
            if last.longitude == north_east.longitude and last.latitude < look_from.latitude:
                found.append((-last.latitude, line))
        elif edge == SOUTH:
            if last.latitude == south_west.latitude and last.longitude < look_from.longitude:
                found.append((-last.longitude, line))
        elif last.longitude == south_west.longitude and last.latitude > look_from.latitude:
            found.append((last.latitude, line))
    if not found:
        return None
    return min(found, key=lambda item: item[0])[1]


def _corner_after(edge: int, south_west: Coordinates, north_east: Coordinates) -> Coordinates:
    if edge == NORTH:
        return north_east
    if edge == EAST:
        return Coordinates(south_west.latitude, north_east.longitude)
    if edge == SOUTH:
        return south_west
    return Coordinates(north_east.latitude, south_west.longitude)


def _close_level(
    lines: list[ContourLine],
    south_west: Coordinates,
    north_east: Coordinates,
    threshold_squared: float,
) -> None:
    open_lines = [line for line in lines if not line.is_closed]
    for line in open_lines:
        if line.is_closed:
            continue
        edge = _edge_of(line.first, south_west, north_east)
        if edge is None:
            continue
        look_from = line.first
        for rotation in range(BOUNDARY_MAX_ROTATIONS + 1):
            partner = _find_partner(edge, look_from, open_lines, south_west, north_east)
            if partner is not None:
                partner.append(line, threshold_squared)
                break
            if rotation == BOUNDARY_MAX_ROTATIONS:
                logger.debug('Нет пары на границе для %r, замыкаем линию на себя', line)
                line.append(line, threshold_squared)
                break
            look_from = _corner_after(edge, south_west, north_east)
            line.insert_first(look_from)
            edge = (edge + 1) % 4
