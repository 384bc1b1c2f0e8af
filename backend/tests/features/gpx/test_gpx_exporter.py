"""
Tests for GPX exporter.

Exports are read back with gpxpy to check the document structure.
"""

from datetime import datetime, timezone

import gpxpy
import pytest

from waymaker.features.gpx import GPXExporterService, GPXExportOptions, GPXParserService
from waymaker.features.pois import (
    Refuge,
    RefugeType,
    WaterPoint,
    WaterPointType,
    WaterQuality,
)
from waymaker.features.routing import (
    Coordinates,
    ElevationPoint,
    HikingRoute,
    RouteStage,
    RouteType,
    StageDivider,
)
from waymaker.features.routing.models import line_feature_collection


FIXED_TIME = datetime(2024, 7, 1, 8, 0, tzinfo=timezone.utc)


def _stage(number, line, ascent=100, descent=20, profile=None):
    return RouteStage(
        id=f"r-stage-{number}",
        name=f"Stage {number}",
        start_point=Coordinates(lat=line[0][1], lng=line[0][0]),
        end_point=Coordinates(lat=line[-1][1], lng=line[-1][0]),
        distance=2.5,
        ascent=ascent,
        descent=descent,
        estimated_time=60,
        elevation_profile=profile or [],
        geometry=line_feature_collection(line),
    )


@pytest.fixture
def route():
    first = [[6.85, 45.90, 1000.04], [6.86, 45.91, 1100.0], [6.87, 45.92, 1200.0]]
    second = [[6.87, 45.92, 1200.0], [6.88, 45.93, 1150.0]]
    stages = [_stage(1, first, 200, 0), _stage(2, second, 0, 50)]
    return HikingRoute(
        id="r",
        name="Linear itinerary",
        type=RouteType.POINT_TO_POINT,
        stages=stages,
        total_distance=5.0,
        total_ascent=200,
        total_descent=50,
        min_elevation=1000,
        max_elevation=1200,
        geometry={
            "type": "FeatureCollection",
            "features": [s.geometry["features"][0] for s in stages],
        },
    )


def _export(route, **kwargs):
    xml = GPXExporterService.export(route, now=FIXED_TIME, **kwargs)
    return xml, gpxpy.parse(xml)


# =============================================================================
# Test Document
# =============================================================================

class TestGPXDocument:

    def test_gpx_11_header(self, route):
        xml, gpx = _export(route)

        assert 'version="1.1"' in xml
        assert 'creator="WayMaker"' in xml
        assert gpx.name == "Linear itinerary"
        assert gpx.description == "Itinerary generated by WayMaker"
        assert gpx.time == FIXED_TIME

    def test_one_track_per_stage(self, route):
        _, gpx = _export(route, options=GPXExportOptions(split_by_stages=True))

        assert [t.name for t in gpx.tracks] == ["Stage 1", "Stage 2"]
        assert gpx.tracks[0].description == "Distance: 2.50 km, Elevation: +200 m/-0 m"
        assert len(gpx.tracks[0].segments[0].points) == 3
        assert len(gpx.tracks[1].segments[0].points) == 2

    def test_single_track(self, route):
        _, gpx = _export(route, options=GPXExportOptions(split_by_stages=False))

        assert len(gpx.tracks) == 1
        track = gpx.tracks[0]
        assert track.name == "Linear itinerary"
        assert track.description == "Total distance: 5.00 km, Elevation: +200 m/-50 m"
        # Stage junction appears once
        assert len(track.segments[0].points) == 4

    def test_elevation_rounded(self, route):
        _, gpx = _export(route)

        points = gpx.tracks[0].segments[0].points
        assert points[0].elevation == 1000.0
        assert points[0].latitude == pytest.approx(45.90)
        assert points[0].longitude == pytest.approx(6.85)

    def test_elevation_omitted(self, route):
        xml, gpx = _export(route, options=GPXExportOptions(include_elevation=False))

        assert "<ele>" not in xml
        assert all(p.elevation is None for t in gpx.tracks for p in t.segments[0].points)

    def test_elevation_from_profile(self):
        """2D geometry takes elevation from the stage profile."""
        line = [[6.85, 45.90], [6.86, 45.91]]
        profile = [
            ElevationPoint(distance=0.0, elevation=1500.0, lat=45.90, lng=6.85),
            ElevationPoint(distance=1.0, elevation=1600.0, lat=45.91, lng=6.86),
        ]
        stage = _stage(1, line, profile=profile)
        route = HikingRoute(
            id="r2", name="Linear itinerary", type=RouteType.POINT_TO_POINT,
            stages=[stage], total_distance=2.5, total_ascent=100, total_descent=0,
            min_elevation=1500, max_elevation=1600, geometry=stage.geometry,
        )

        _, gpx = _export(route)

        elevations = [p.elevation for p in gpx.tracks[0].segments[0].points]
        assert elevations == [1500.0, 1600.0]


# =============================================================================
# Test Waypoints
# =============================================================================

class TestGPXWaypoints:

    def test_stage_markers(self, route):
        _, gpx = _export(route)

        assert [(w.name, w.symbol) for w in gpx.waypoints] == [
            ("Start", "Flag, Green"),
            ("End of stage 1", "Waypoint"),
            ("Finish", "Flag, Red"),
        ]
        assert gpx.waypoints[1].latitude == pytest.approx(45.92)

    def test_markers_disabled(self, route):
        _, gpx = _export(route, options=GPXExportOptions(include_waypoints=False))
        assert gpx.waypoints == []

    def test_refuges_and_water(self, route):
        refuge = Refuge(
            id="osm-1", name="Refuge du Lac", type=RefugeType.STAFFED,
            lat=45.91, lng=6.87, elevation=2100,
        )
        water = WaterPoint(
            id="osm-2", name="Source", type=WaterPointType.SPRING,
            lat=45.92, lng=6.88, quality=WaterQuality.POTABLE,
        )
        options = GPXExportOptions(
            include_waypoints=False, include_refuges=True, include_water_points=True
        )

        _, gpx = _export(route, options=options, refuges=[refuge], water_points=[water])

        lodge, source = gpx.waypoints
        assert lodge.name == "Refuge du Lac"
        assert lodge.symbol == "Lodge"
        assert lodge.description == "Type: staffed, Altitude: 2100 m"
        assert lodge.elevation == 2100
        assert source.symbol == "Water Source"
        assert source.description == "Type: spring, Quality: potable"
        assert source.elevation is None

    def test_pois_included_by_default(self, route):
        refuge = Refuge(id="osm-1", name="Refuge", type=RefugeType.BIVOUAC, lat=45.91, lng=6.87)

        _, gpx = _export(route, refuges=[refuge])

        assert gpx.waypoints[-1].name == "Refuge"
        assert gpx.waypoints[-1].symbol == "Lodge"

    def test_pois_disabled(self, route):
        refuge = Refuge(id="osm-1", name="Refuge", type=RefugeType.BIVOUAC, lat=45.91, lng=6.87)
        options = GPXExportOptions(include_refuges=False, include_water_points=False)

        _, gpx = _export(route, options=options, refuges=[refuge])

        assert "Refuge" not in [w.name for w in gpx.waypoints]


class TestGPXReimport:

    def test_exported_file_parses(self, route):
        xml, _ = _export(route, options=GPXExportOptions(split_by_stages=True))

        result = GPXParserService.parse(xml)

        assert [t.name for t in result.tracks] == ["Stage 1", "Stage 2"]
        assert [w.name for w in result.waypoints] == ["Start", "End of stage 1", "Finish"]
        assert result.metadata.name == "Linear itinerary"

    def test_divided_route_round_trip(self):
        """Default export of a re-staged route re-imports to its own endpoints."""
        line = [
            [6.80 + i * 0.001, 45.90 + i * 0.0005, 1000.0 + i]
            for i in range(300)
        ]
        stage = _stage(1, line)
        route = HikingRoute(
            id="r3", name="Linear itinerary", type=RouteType.POINT_TO_POINT,
            stages=[stage], total_distance=2.5, total_ascent=299, total_descent=0,
            min_elevation=1000, max_elevation=1299, geometry=stage.geometry,
        )
        divided = StageDivider.divide(route, 3)
        start = divided.stages[0].start_point
        finish = divided.stages[-1].end_point

        xml, _ = _export(divided)
        waypoints = GPXParserService.to_waypoints(GPXParserService.parse(xml))

        assert len(waypoints) <= 20
        assert (waypoints[0].lat, waypoints[0].lng) == pytest.approx((start.lat, start.lng), abs=1e-9)
        assert (waypoints[-1].lat, waypoints[-1].lng) == pytest.approx((finish.lat, finish.lng), abs=1e-9)
        assert (finish.lat, finish.lng) == (line[-1][1], line[-1][0])
