"""
Tests for GPX parser.
"""

import pytest

from waymaker.features.gpx import GPXParserService
from waymaker.features.routing import Coordinates
from waymaker.shared.exceptions import GPXParseError


GPX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">\n'
)


def _gpx(body: str) -> str:
    return GPX_HEADER + body + "</gpx>\n"


def _trkpts(n: int) -> str:
    return "".join(
        f'<trkpt lat="{45.9 + i * 0.0001:.6f}" lon="{6.86 + i * 0.0001:.6f}"><ele>{1000 + i}</ele></trkpt>'
        for i in range(n)
    )


SAMPLE_GPX = _gpx(
    '<metadata><name>Tour du Mont Blanc</name><desc>Day hikes</desc>'
    '<author><name>Club alpin</name></author></metadata>'
    '<wpt lat="45.9237" lon="6.8694"><name>Chamonix</name></wpt>'
    '<wpt lat="45.8326" lon="6.8652"></wpt>'
    '<rte><name>Planned</name>'
    '<rtept lat="45.90" lon="6.85"><name>A</name></rtept>'
    '<rtept lat="45.92" lon="6.87"/>'
    '<rtept lat="45.94" lon="6.89"/>'
    '</rte>'
    '<trk><name>Recorded</name><trkseg>' + _trkpts(50) + '</trkseg></trk>'
)


# =============================================================================
# Test Parsing
# =============================================================================

class TestGPXParse:
    """Tests for document parsing."""

    def test_counts(self):
        result = GPXParserService.parse(SAMPLE_GPX)

        assert len(result.waypoints) == 2
        assert len(result.routes) == 1
        assert len(result.tracks) == 1
        assert len(result.routes[0].waypoints) == 3
        assert len(result.tracks[0].waypoints) == 50

    def test_metadata(self):
        metadata = GPXParserService.parse(SAMPLE_GPX).metadata

        assert metadata.name == "Tour du Mont Blanc"
        assert metadata.description == "Day hikes"
        assert metadata.author == "Club alpin"

    def test_no_metadata(self):
        result = GPXParserService.parse(_gpx('<wpt lat="45.9" lon="6.8"/>'))
        assert result.metadata is None

    def test_waypoint_names_and_ids(self):
        result = GPXParserService.parse(SAMPLE_GPX)

        assert result.waypoints[0].name == "Chamonix"
        assert result.waypoints[0].id == "gpx-waypoint-0"
        assert result.waypoints[1].name == "Point waypoint-1"
        assert result.waypoints[0].lat == pytest.approx(45.9237)
        assert result.waypoints[0].lng == pytest.approx(6.8694)

    def test_track_and_route_ids(self):
        result = GPXParserService.parse(SAMPLE_GPX)

        assert result.routes[0].name == "Planned"
        assert result.routes[0].waypoints[2].id == "gpx-route-0-pt2"
        assert result.tracks[0].waypoints[3].id == "gpx-track-0-seg0-pt3"

    def test_ids_are_stable(self):
        first = GPXParserService.parse(SAMPLE_GPX)
        second = GPXParserService.parse(SAMPLE_GPX)
        assert [w.id for w in first.tracks[0].waypoints] == [w.id for w in second.tracks[0].waypoints]

    def test_default_track_name(self):
        result = GPXParserService.parse(_gpx('<trk><trkseg>' + _trkpts(2) + '</trkseg></trk>'))
        assert result.tracks[0].name == "Track track-0"

    def test_track_bounds_and_distance(self):
        track = GPXParserService.parse(SAMPLE_GPX).tracks[0]

        assert track.bounds.min_lat == pytest.approx(45.9)
        assert track.bounds.max_lat == pytest.approx(45.9049)
        assert track.total_distance > 0

    def test_bytes_with_bom(self):
        content = b"\xef\xbb\xbf" + SAMPLE_GPX.encode("utf-8")
        result = GPXParserService.parse(content)
        assert len(result.waypoints) == 2

    def test_gpx_10(self):
        content = (
            '<?xml version="1.0"?>\n'
            '<gpx version="1.0" creator="test" xmlns="http://www.topografix.com/GPX/1/0">'
            '<wpt lat="45.9" lon="6.8"><name>Old</name></wpt></gpx>'
        )
        result = GPXParserService.parse(content)
        assert result.waypoints[0].name == "Old"

    def test_empty_document(self):
        result = GPXParserService.parse(_gpx(""))

        assert result.is_empty
        assert GPXParserService.to_waypoints(result) == []


class TestGPXParseErrors:

    def test_malformed_xml(self):
        with pytest.raises(GPXParseError):
            GPXParserService.parse("<gpx><wpt lat='45' lon='6'></gpx>")

    def test_not_gpx_root(self):
        with pytest.raises(GPXParseError) as exc_info:
            GPXParserService.parse('<?xml version="1.0"?><kml><Document/></kml>')
        assert "kml" in str(exc_info.value)

    def test_plain_text(self):
        with pytest.raises(GPXParseError):
            GPXParserService.parse("not xml at all")

    def test_invalid_encoding(self):
        with pytest.raises(GPXParseError):
            GPXParserService.parse(b"\xff\xfe<gpx/>")


# =============================================================================
# Test Waypoint Selection
# =============================================================================

class TestToWaypoints:
    """Route > track > loose waypoints."""

    def test_route_wins_over_track(self):
        result = GPXParserService.parse(SAMPLE_GPX)

        waypoints = GPXParserService.to_waypoints(result)

        assert len(waypoints) == 3
        assert waypoints[0].name == "A"

    def test_track_simplified(self):
        result = GPXParserService.parse(_gpx('<trk><trkseg>' + _trkpts(500) + '</trkseg></trk>'))

        waypoints = GPXParserService.to_waypoints(result, max_points=20)

        assert len(waypoints) == 20
        assert waypoints[0].id == "gpx-track-0-seg0-pt0"
        assert waypoints[-1].id == "gpx-track-0-seg0-pt499"

    def test_loose_waypoints(self):
        result = GPXParserService.parse(_gpx(
            '<wpt lat="45.9" lon="6.8"/><wpt lat="45.91" lon="6.81"/>'
        ))
        assert [w.id for w in GPXParserService.to_waypoints(result)] == [
            "gpx-waypoint-0", "gpx-waypoint-1"
        ]


class TestSimplifyTrackPoints:

    def _points(self, n):
        return [Coordinates(lat=45.9 + i * 0.001, lng=6.86, id=f"p{i}") for i in range(n)]

    def test_short_track_unchanged(self):
        points = self._points(15)
        assert GPXParserService.simplify_track_points(points, 20) == points

    def test_five_hundred_points(self):
        points = self._points(500)

        simplified = GPXParserService.simplify_track_points(points, 20)

        assert len(simplified) == 20
        assert simplified[0].id == "p0"
        assert simplified[-1].id == "p499"
        assert simplified[1].id == "p25"

    @pytest.mark.parametrize("n", [21, 39, 41, 99, 1001])
    def test_never_exceeds_cap(self, n):
        simplified = GPXParserService.simplify_track_points(self._points(n), 20)

        assert len(simplified) <= 20
        assert simplified[0].id == "p0"
        assert simplified[-1].id == f"p{n - 1}"

    def test_order_preserved(self):
        simplified = GPXParserService.simplify_track_points(self._points(300), 10)
        indices = [int(p.id[1:]) for p in simplified]
        assert indices == sorted(indices)

    def test_cap_below_two(self):
        with pytest.raises(ValueError):
            GPXParserService.simplify_track_points(self._points(10), 1)
