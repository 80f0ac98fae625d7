"""
Сборка полигонов из колец изолиний.

Все кольца одного уровня объединяются через XOR: кольцо внутри другого
вырезает дыру, кольцо внутри дыры снова становится островом.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from functools import reduce
from typing import TYPE_CHECKING

from shapely.geometry import GeometryCollection, MultiPolygon, Polygon
from shapely.geometry.polygon import orient
from shapely.validation import make_valid

from shared.constants import MIN_RING_POINTS, NO_ROUNDING

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger(__name__)

Ring = Sequence[tuple[float, float]]


def flatten_polygons(geom: BaseGeometry) -> list[Polygon]:
    """Извлекает непустые полигоны из любой геометрии."""
    if geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    if isinstance(geom, (MultiPolygon, GeometryCollection)):
        return [p for g in geom.geoms for p in flatten_polygons(g)]
    return []


def ring_to_geometry(ring: Ring) -> BaseGeometry | None:
    """
    Область, ограниченная кольцом ``ring``.

    Returns:
        Область (исправленная ``make_valid`` при самокасании) или ``None``,
        если различных точек слишком мало или площадь нулевая

    """
    if len(set(ring)) < MIN_RING_POINTS:
        return None
    geom = Polygon(ring)
    if not geom.is_valid:
        geom = MultiPolygon(flatten_polygons(make_valid(geom)))
    if geom.is_empty or geom.area == 0:
        return None
    return geom


def round_polygon(polygon: Polygon, digits: int) -> Polygon:
    def _round(coords: Iterable[tuple[float, ...]]) -> list[tuple[float, float]]:
        return [(round(x, digits), round(y, digits)) for x, y, *_ in coords]

    return Polygon(
        _round(polygon.exterior.coords),
        [_round(interior.coords) for interior in polygon.interiors],
    )


def rings_to_polygons(rings: Iterable[Ring], rounding: int = NO_ROUNDING) -> list[Polygon]:
    """
    Объединяет все кольца через XOR в полигоны с дырами.

    Args:
        rings: Последовательности точек ``(x, y)``; замыкающая точка не обязательна
        rounding: Число знаков округления координат, -1 без округления

    Returns:
        Полигоны с внешним контуром против часовой и дырами по часовой

    """
    areas = [geom for geom in (ring_to_geometry(r) for r in rings) if geom is not None]
    if not areas:
        return []
    combined = reduce(lambda acc, geom: acc.symmetric_difference(geom), areas)
    polygons = [orient(p, sign=1.0) for p in flatten_polygons(combined)]
    if rounding > NO_ROUNDING:
        polygons = [round_polygon(p, rounding) for p in polygons]
    logger.debug('XOR %s колец дал полигонов: %s', len(areas), len(polygons))
    return polygons
