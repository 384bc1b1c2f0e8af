"""
Route domain models.

Plain dataclasses with NO service imports. Geometry is kept as GeoJSON
FeatureCollection dicts so it can be handed to any map layer as-is.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from waymaker.shared.ids import content_id


class RouteType(str, Enum):
    """Shape of a route."""
    POINT_TO_POINT = "point-to-point"
    LOOP = "loop"


@dataclass
class Coordinates:
    """A waypoint. (0, 0) is an unpositioned placeholder."""
    lat: float
    lng: float
    id: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return self.lat == 0 and self.lng == 0

    def to_lnglat(self) -> List[float]:
        """GeoJSON order."""
        return [self.lng, self.lat]

    def copy(self) -> "Coordinates":
        return dataclasses.replace(self)


@dataclass
class ElevationPoint:
    """One sample of an elevation profile."""
    distance: float  # km from start of the stage
    elevation: Optional[float]  # m, None when no elevation source exists
    lat: float
    lng: float


@dataclass
class RouteStage:
    """A named sub-segment of a route."""
    id: str
    name: str
    start_point: Coordinates
    end_point: Coordinates
    distance: float  # km
    ascent: int  # m
    descent: int  # m
    estimated_time: int  # minutes
    elevation_profile: List[ElevationPoint] = field(default_factory=list)
    geometry: Dict[str, Any] = field(default_factory=lambda: empty_feature_collection())

    @property
    def coordinates(self) -> List[List[float]]:
        return line_coordinates(self.geometry)


@dataclass
class HikingRoute:
    """A complete multi-stage route. Owns its stages."""
    id: str
    name: str
    type: RouteType
    stages: List[RouteStage]
    total_distance: float  # km
    total_ascent: int  # m
    total_descent: int  # m
    min_elevation: float  # m
    max_elevation: float  # m
    geometry: Dict[str, Any] = field(default_factory=lambda: empty_feature_collection())

    @property
    def coordinates(self) -> List[List[float]]:
        """Combined polyline of the whole route."""
        return line_coordinates(self.geometry)

    @property
    def estimated_time(self) -> int:
        """Total estimated time in minutes."""
        return sum(stage.estimated_time for stage in self.stages)

    @property
    def is_loop(self) -> bool:
        return self.type == RouteType.LOOP


# =============================================================================
# Helpers
# =============================================================================

def empty_feature_collection() -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": []}


def line_feature_collection(
    coordinates: List[List[float]],
    properties: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Wrap a polyline in a single-feature FeatureCollection."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": coordinates},
                "properties": properties or {},
            }
        ],
    }


def line_coordinates(geometry: Dict[str, Any]) -> List[List[float]]:
    """
    Flatten the LineString features of a FeatureCollection into one polyline.

    Consecutive features share their junction point; the duplicate is
    dropped so each position appears once.
    """
    coordinates: List[List[float]] = []

    for feature in geometry.get("features", []):
        geom = feature.get("geometry") or {}
        if geom.get("type") != "LineString":
            continue
        for coord in geom.get("coordinates", []):
            if coordinates and coordinates[-1][:2] == list(coord[:2]):
                continue
            coordinates.append(list(coord))

    return coordinates


def ensure_waypoint_ids(waypoints: List[Coordinates]) -> List[Coordinates]:
    """
    Return copies of the waypoints, each with an id.

    Existing ids are kept; missing ones are derived from position and
    coordinates, so identical input always gets identical ids.
    """
    result = []
    seen = set()

    for index, waypoint in enumerate(waypoints):
        wp = waypoint.copy()
        if not wp.id or wp.id in seen:
            wp.id = content_id("waypoint", index, wp.lat, wp.lng)
        seen.add(wp.id)
        result.append(wp)

    return result


def positioned(waypoints: List[Coordinates]) -> List[Coordinates]:
    """Copies of the waypoints that are not placeholders."""
    return [wp.copy() for wp in waypoints if not wp.is_placeholder]
