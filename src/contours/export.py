"""Экспорт изолиний и полигонов в GeoJSON."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shapely.geometry import LineString, mapping

from shared.constants import NO_ROUNDING

if TYPE_CHECKING:
    from collections.abc import Callable

    from contours.graph import ContourGraph
    from contours.line import ContourLine

MIN_LINE_POINTS = 2


def line_feature(line: ContourLine) -> dict[str, Any] | None:
    points = [p.to_xy() for p in line.points]
    if len(points) < MIN_LINE_POINTS:
        return None
    return {
        'type': 'Feature',
        'geometry': mapping(LineString(points)),
        'properties': {
            'level': line.level,
            'closed': line.is_closed,
            'counter_clockwise': line.is_counter_clockwise,
        },
    }


def lines_to_feature_collection(graph: ContourGraph) -> dict[str, Any]:
    features = [f for f in (line_feature(line) for line in graph.lines) if f is not None]
    return {'type': 'FeatureCollection', 'features': features}


def polygons_to_feature_collection(
    graph: ContourGraph,
    rounding: int = NO_ROUNDING,
    progress: Callable[[float], object] | None = None,
) -> dict[str, Any]:
    features = [
        {
            'type': 'Feature',
            'geometry': mapping(polygon),
            'properties': {'level': level},
        }
        for level, polygons in graph.polygons_by_level(rounding, progress)
        for polygon in polygons
    ]
    return {'type': 'FeatureCollection', 'features': features}
