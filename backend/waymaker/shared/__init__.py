"""
Shared utilities (NOT business logic).

Usage:
    from waymaker.shared import haversine, calculate_elevation_changes
    from waymaker.shared.formatters import format_distance
"""
from .geo import (
    haversine,
    distance,
    segment_distance,
    cumulative_distances,
    path_length,
    distance_to_polyline,
    calculate_bounds,
    polyline_bounds,
    Bounds,
    EARTH_RADIUS_KM,
)
from .elevation import (
    downsample,
    calculate_elevation_changes,
    rounded_elevation_changes,
    interpolate_elevations,
    elevation_range,
)
from .formatters import (
    format_distance,
    format_duration,
    format_coordinates,
    format_elevation,
)
from .ids import content_id

__all__ = [
    # geo
    "haversine",
    "distance",
    "segment_distance",
    "cumulative_distances",
    "path_length",
    "distance_to_polyline",
    "calculate_bounds",
    "polyline_bounds",
    "Bounds",
    "EARTH_RADIUS_KM",
    # elevation
    "downsample",
    "calculate_elevation_changes",
    "rounded_elevation_changes",
    "interpolate_elevations",
    "elevation_range",
    # formatters
    "format_distance",
    "format_duration",
    "format_coordinates",
    "format_elevation",
    # ids
    "content_id",
]
