"""
Tests for route model helpers.
"""

from waymaker.features.routing import Coordinates, ensure_waypoint_ids, positioned
from waymaker.features.routing.models import line_coordinates, line_feature_collection


class TestLineCoordinates:

    def test_junctions_not_duplicated(self):
        first = line_feature_collection([[6.0, 45.0], [6.1, 45.1]])
        second = line_feature_collection([[6.1, 45.1, 1200.0], [6.2, 45.2, 1300.0]])
        geometry = {"type": "FeatureCollection", "features": first["features"] + second["features"]}

        assert line_coordinates(geometry) == [[6.0, 45.0], [6.1, 45.1], [6.2, 45.2, 1300.0]]

    def test_non_line_features_skipped(self):
        geometry = {
            "type": "FeatureCollection",
            "features": [{"type": "Feature", "geometry": {"type": "Point", "coordinates": [6.0, 45.0]}}],
        }
        assert line_coordinates(geometry) == []


class TestWaypoints:

    def test_placeholder(self):
        assert Coordinates(lat=0, lng=0).is_placeholder
        assert not Coordinates(lat=0, lng=6.8).is_placeholder

    def test_positioned_returns_copies(self):
        waypoint = Coordinates(lat=45.9, lng=6.8, id="a")
        result = positioned([waypoint, Coordinates(lat=0, lng=0)])

        assert result == [waypoint]
        assert result[0] is not waypoint

    def test_ids_kept_and_filled(self):
        waypoints = [
            Coordinates(lat=45.9, lng=6.8, id="a"),
            Coordinates(lat=45.91, lng=6.81),
            Coordinates(lat=45.92, lng=6.82, id="a"),
        ]

        first = ensure_waypoint_ids(waypoints)
        second = ensure_waypoint_ids(waypoints)

        assert first[0].id == "a"
        assert first[1].id.startswith("waypoint-")
        assert first[2].id != "a"
        assert [wp.id for wp in first] == [wp.id for wp in second]
        assert waypoints[1].id is None
