"""Tests for contours.export module."""

from contours.export import (
    line_feature,
    lines_to_feature_collection,
    polygons_to_feature_collection,
)
from contours.graph import ContourGraph
from contours.levels import FixedLevelGenerator
from contours.line import ContourLine
from geo.coordinates import Coordinates


class TestLineExport:
    """Tests for line features."""

    def test_hill_line(self, hill_grid):
        """Closed hill line is exported with its properties."""
        graph = ContourGraph()
        graph.add(hill_grid, FixedLevelGenerator([5.0]))
        collection = lines_to_feature_collection(graph)
        assert collection['type'] == 'FeatureCollection'
        (feature,) = collection['features']
        assert feature['geometry']['type'] == 'LineString'
        assert feature['properties'] == {
            'level': 5.0,
            'closed': True,
            'counter_clockwise': True,
        }

    def test_coordinates_are_lon_lat(self):
        """GeoJSON positions are (longitude, latitude)."""
        line = ContourLine([Coordinates(10, 20), Coordinates(11, 21)], 1.0)
        feature = line_feature(line)
        assert list(feature['geometry']['coordinates']) == [(20.0, 10.0), (21.0, 11.0)]

    def test_single_point_line_skipped(self):
        """Lines shorter than two points are not exported."""
        line = ContourLine([Coordinates(1, 1)], 1.0)
        assert line_feature(line) is None


class TestPolygonExport:
    """Tests for polygon features."""

    def test_hill_polygon(self, hill_grid):
        """One polygon feature tagged with its level."""
        graph = ContourGraph()
        graph.add(hill_grid, FixedLevelGenerator([5.0]))
        collection = polygons_to_feature_collection(graph, rounding=3)
        (feature,) = collection['features']
        assert feature['geometry']['type'] == 'Polygon'
        assert feature['properties'] == {'level': 5.0}

    def test_empty_graph(self):
        """Empty graph exports an empty collection."""
        collection = polygons_to_feature_collection(ContourGraph())
        assert collection == {'type': 'FeatureCollection', 'features': []}

    def test_progress_forwarded(self, hill_grid):
        """Percent callback is reported once per level."""
        graph = ContourGraph()
        graph.add(hill_grid, FixedLevelGenerator([2.5, 5.0]))
        seen = []
        collection = polygons_to_feature_collection(graph, progress=seen.append)
        assert seen == [50.0, 100.0]
        assert [f['properties']['level'] for f in collection['features']] == [2.5, 5.0]
