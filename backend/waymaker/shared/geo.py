"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.

Coordinate conventions:
- scalar functions take (lat, lon) in degrees
- polylines are GeoJSON-ordered [lng, lat] or [lng, lat, ele] lists
"""
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0

# Rough length of one degree of latitude, used for bbox buffers
KM_PER_DEGREE = 111.0


def haversine(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    # Clamp: rounding can push `a` slightly above 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance(a, b) -> float:
    """Distance in km between two objects exposing `lat` and `lng`."""
    return haversine(a.lat, a.lng, b.lat, b.lng)


def segment_distance(p1: Sequence[float], p2: Sequence[float]) -> float:
    """Distance in km between two [lng, lat(, ele)] coordinates."""
    return haversine(p1[1], p1[0], p2[1], p2[0])


def cumulative_distances(coordinates: Sequence[Sequence[float]]) -> List[float]:
    """
    Cumulative distance from the first coordinate.

    Args:
        coordinates: [lng, lat(, ele)] polyline

    Returns:
        List of the same length, starting at 0.0 (km)
    """
    if not coordinates:
        return []

    distances = [0.0]
    total = 0.0
    for i in range(1, len(coordinates)):
        total += segment_distance(coordinates[i - 1], coordinates[i])
        distances.append(total)

    return distances


def path_length(coordinates: Sequence[Sequence[float]]) -> float:
    """Total length of a [lng, lat] polyline in km."""
    distances = cumulative_distances(coordinates)
    return distances[-1] if distances else 0.0


def distance_to_segment(
    lat: float, lng: float,
    start: Sequence[float], end: Sequence[float]
) -> float:
    """
    Distance in km from a point to a polyline segment.

    The projection parameter is found on a local equirectangular plane;
    the distance itself is measured with haversine.
    """
    x1, y1 = start[0], start[1]
    x2, y2 = end[0], end[1]

    scale = math.cos(math.radians(lat))
    dx = (x2 - x1) * scale
    dy = y2 - y1

    if dx == 0 and dy == 0:
        return haversine(lat, lng, y1, x1)

    t = ((lng - x1) * scale * dx + (lat - y1) * dy) / (dx * dx + dy * dy)
    t = max(0.0, min(1.0, t))

    proj_lng = x1 + t * (x2 - x1)
    proj_lat = y1 + t * (y2 - y1)

    return haversine(lat, lng, proj_lat, proj_lng)


def distance_to_polyline(
    lat: float, lng: float,
    coordinates: Sequence[Sequence[float]]
) -> float:
    """Minimum distance in km from a point to a [lng, lat] polyline."""
    if not coordinates:
        return math.inf
    if len(coordinates) == 1:
        return haversine(lat, lng, coordinates[0][1], coordinates[0][0])

    return min(
        distance_to_segment(lat, lng, coordinates[i], coordinates[i + 1])
        for i in range(len(coordinates) - 1)
    )


@dataclass
class Bounds:
    """Latitude/longitude extent of a set of points."""
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def expand(self, degrees: float) -> "Bounds":
        """Return bounds grown by `degrees` on every side."""
        return Bounds(
            min_lat=self.min_lat - degrees,
            max_lat=self.max_lat + degrees,
            min_lng=self.min_lng - degrees,
            max_lng=self.max_lng + degrees,
        )

    def expand_km(self, radius_km: float) -> "Bounds":
        """Grow bounds by a radius, converted with ~111 km per degree."""
        return self.expand(radius_km / KM_PER_DEGREE)


def calculate_bounds(points: Iterable) -> Optional[Bounds]:
    """
    Bounding box of objects exposing `lat` and `lng`.

    Returns:
        Bounds, or None for an empty input
    """
    bounds: Optional[Bounds] = None

    for p in points:
        if bounds is None:
            bounds = Bounds(p.lat, p.lat, p.lng, p.lng)
            continue
        bounds.min_lat = min(bounds.min_lat, p.lat)
        bounds.max_lat = max(bounds.max_lat, p.lat)
        bounds.min_lng = min(bounds.min_lng, p.lng)
        bounds.max_lng = max(bounds.max_lng, p.lng)

    return bounds


def polyline_bounds(coordinates: Sequence[Sequence[float]]) -> Optional[Bounds]:
    """Bounding box of a [lng, lat] polyline."""
    if not coordinates:
        return None

    lats = [c[1] for c in coordinates]
    lngs = [c[0] for c in coordinates]

    return Bounds(min(lats), max(lats), min(lngs), max(lngs))
