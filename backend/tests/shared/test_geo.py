"""
Tests for shared geographic functions.

Tests haversine distance, polyline helpers and bounds.
"""

import pytest
import math

from waymaker.shared.geo import (
    haversine,
    distance,
    cumulative_distances,
    path_length,
    distance_to_polyline,
    calculate_bounds,
    polyline_bounds,
    Bounds,
    EARTH_RADIUS_KM,
)
from waymaker.features.routing.models import Coordinates


# =============================================================================
# Test Haversine Distance
# =============================================================================

class TestHaversine:
    """Tests for haversine function."""

    def test_same_point(self):
        """Distance between same point should be 0."""
        dist = haversine(45.92, 6.86, 45.92, 6.86)
        assert dist == 0.0

    def test_known_distance_chamonix_zermatt(self):
        """Chamonix to Zermatt is ~68 km as the crow flies."""
        dist = haversine(45.9237, 6.8694, 46.0207, 7.7491)
        assert 65 < dist < 72

    def test_small_distance(self):
        """0.001 degree latitude ≈ 111 meters."""
        dist = haversine(45.0, 6.0, 45.001, 6.0)
        assert 0.1 < dist < 0.12

    def test_symmetry(self):
        """Distance A->B should equal B->A."""
        dist_ab = haversine(45.0, 6.0, 46.0, 7.0)
        dist_ba = haversine(46.0, 7.0, 45.0, 6.0)
        assert dist_ab == pytest.approx(dist_ba, rel=1e-12)

    def test_north_south_distance(self):
        """1 degree latitude ≈ 111 km everywhere."""
        dist = haversine(0.0, 0.0, 1.0, 0.0)
        assert 110 < dist < 112

    def test_earth_radius_constant(self):
        assert EARTH_RADIUS_KM == 6371.0

    def test_antipodal_points(self):
        """Half the circumference, no math domain error."""
        dist = haversine(0.0, 0.0, 0.0, 180.0)
        assert dist == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)

    def test_triangle_inequality(self):
        a, b, c = (45.0, 6.0), (45.5, 6.4), (46.0, 7.0)
        ab = haversine(*a, *b)
        bc = haversine(*b, *c)
        ac = haversine(*a, *c)
        assert ac <= ab + bc + 1e-9

    def test_distance_on_objects(self):
        """distance() reads lat/lng attributes."""
        a = Coordinates(lat=45.0, lng=6.0)
        b = Coordinates(lat=45.1, lng=6.1)
        assert distance(a, b) == haversine(45.0, 6.0, 45.1, 6.1)
        assert distance(a, b) == distance(b, a)


# =============================================================================
# Test Polyline Helpers
# =============================================================================

class TestPolyline:
    """Tests for [lng, lat] polyline helpers."""

    def test_cumulative_distances_start_at_zero(self):
        coords = [[6.0, 45.0], [6.0, 45.01], [6.0, 45.02]]
        distances = cumulative_distances(coords)

        assert len(distances) == 3
        assert distances[0] == 0.0
        assert distances[1] < distances[2]
        assert distances[2] == pytest.approx(2 * distances[1], rel=1e-6)

    def test_cumulative_distances_ignore_elevation(self):
        flat = [[6.0, 45.0], [6.0, 45.01]]
        with_ele = [[6.0, 45.0, 1000.0], [6.0, 45.01, 1500.0]]
        assert cumulative_distances(flat) == cumulative_distances(with_ele)

    def test_empty_polyline(self):
        assert cumulative_distances([]) == []
        assert path_length([]) == 0.0

    def test_distance_to_polyline_on_line(self):
        coords = [[6.0, 45.0], [6.0, 45.1]]
        assert distance_to_polyline(45.05, 6.0, coords) == pytest.approx(0.0, abs=1e-6)

    def test_distance_to_polyline_beside_line(self):
        """A point 0.01° east of a north-south line at 45°N is ~0.79 km away."""
        coords = [[6.0, 45.0], [6.0, 45.1]]
        dist = distance_to_polyline(45.05, 6.01, coords)
        assert 0.75 < dist < 0.82

    def test_distance_to_polyline_beyond_end(self):
        """Past the end, the nearest point is the endpoint."""
        coords = [[6.0, 45.0], [6.0, 45.1]]
        dist = distance_to_polyline(45.2, 6.0, coords)
        assert dist == pytest.approx(haversine(45.2, 6.0, 45.1, 6.0), rel=1e-6)

    def test_distance_to_empty_polyline(self):
        assert distance_to_polyline(45.0, 6.0, []) == math.inf


# =============================================================================
# Test Bounds
# =============================================================================

class TestBounds:
    """Tests for bounding boxes."""

    def test_calculate_bounds(self):
        points = [
            Coordinates(lat=45.0, lng=6.5),
            Coordinates(lat=45.5, lng=6.0),
            Coordinates(lat=44.8, lng=6.9),
        ]
        bounds = calculate_bounds(points)
        assert bounds == Bounds(min_lat=44.8, max_lat=45.5, min_lng=6.0, max_lng=6.9)

    def test_calculate_bounds_empty(self):
        assert calculate_bounds([]) is None

    def test_polyline_bounds(self):
        bounds = polyline_bounds([[6.0, 45.0], [7.0, 44.0]])
        assert bounds == Bounds(min_lat=44.0, max_lat=45.0, min_lng=6.0, max_lng=7.0)

    def test_expand_km(self):
        """111 km ≈ 1 degree on every side."""
        bounds = Bounds(45.0, 46.0, 6.0, 7.0).expand_km(111.0)
        assert bounds.min_lat == pytest.approx(44.0)
        assert bounds.max_lat == pytest.approx(47.0)
        assert bounds.min_lng == pytest.approx(5.0)
        assert bounds.max_lng == pytest.approx(8.0)
