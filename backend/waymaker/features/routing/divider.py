"""
Stage Divider

Re-cuts an already-routed polyline into N stages of equal length,
without calling the routing service again. Used when only the stage
count changes.
"""

import dataclasses
import logging
from typing import List, Optional, Sequence, Tuple

from waymaker.config import settings
from waymaker.shared.elevation import (
    downsample,
    elevation_range,
    rounded_elevation_changes,
)
from waymaker.shared.geo import cumulative_distances

from .elevation import coordinate_elevations
from .models import (
    Coordinates,
    ElevationPoint,
    HikingRoute,
    RouteStage,
    line_feature_collection,
)

logger = logging.getLogger(__name__)


class StageDivider:
    """
    Divides a route into equidistant stages along its geometry.

    Per-coordinate elevation comes from, in order:
    - the geometry's third ordinate
    - the route's existing stage profiles, stretched to the polyline length
    - nothing (ascent/descent 0, profile elevations None)
    """

    # Max samples kept in each new stage profile
    PROFILE_MAX_POINTS = 200

    @classmethod
    def divide(cls, route: HikingRoute, stage_count: int) -> HikingRoute:
        """
        Replace the route's stages with `stage_count` equidistant ones.

        Args:
            route: Routed HikingRoute
            stage_count: Number of stages wanted

        Returns:
            New HikingRoute; the input route itself when it cannot be
            divided (stage_count <= 1, no stages, <2 coordinates)
        """
        if stage_count <= 1 or not route.stages:
            return route

        coordinates = route.coordinates
        if len(coordinates) < 2:
            logger.debug(f"Route {route.id} has fewer than 2 coordinates, not divided")
            return route

        distances = cumulative_distances(coordinates)
        elevations = coordinate_elevations(
            coordinates, [stage.elevation_profile for stage in route.stages]
        )
        pace = cls._pace(route)

        stages: List[RouteStage] = []
        for index, (start, end) in enumerate(cls.stage_boundaries(distances, stage_count)):
            if end - start + 1 < 2:
                continue
            stages.append(
                cls._make_stage(route.id, index, coordinates, distances, elevations, start, end, pace)
            )

        if not stages:
            return route

        extent = elevation_range(
            [p.elevation for stage in stages for p in stage.elevation_profile]
        )
        min_elevation, max_elevation = (
            (round(extent[0]), round(extent[1])) if extent
            else (route.min_elevation, route.max_elevation)
        )

        logger.info(f"Divided route {route.id} into {len(stages)} stages")

        return dataclasses.replace(
            route,
            stages=stages,
            total_distance=round(sum(s.distance for s in stages), 2),
            total_ascent=sum(s.ascent for s in stages),
            total_descent=sum(s.descent for s in stages),
            min_elevation=min_elevation,
            max_elevation=max_elevation,
        )

    @classmethod
    def stage_boundaries(
        cls,
        distances: Sequence[float],
        stage_count: int
    ) -> List[Tuple[int, int]]:
        """
        Inclusive (start, end) coordinate indices of each stage.

        The last stage always ends on the last coordinate.
        """
        last = len(distances) - 1
        stage_length = distances[-1] / stage_count
        boundaries = []

        for k in range(stage_count):
            start = cls.find_distance_index(distances, k * stage_length)
            if k == stage_count - 1:
                end = last
            else:
                end = cls.find_distance_index(distances, (k + 1) * stage_length)
            boundaries.append((start, end))

        return boundaries

    @staticmethod
    def find_distance_index(distances: Sequence[float], target: float) -> int:
        """
        Index of the coordinate nearest to a cumulative distance.

        Scans for the bracketing pair distances[i] <= target <= distances[i+1]
        and keeps the closer end (ties go to i). No bracket → last index.
        """
        for i in range(len(distances) - 1):
            if distances[i] <= target <= distances[i + 1]:
                diff_current = abs(distances[i] - target)
                diff_next = abs(distances[i + 1] - target)
                return i if diff_current <= diff_next else i + 1
        return len(distances) - 1

    @classmethod
    def _make_stage(
        cls,
        route_id: str,
        index: int,
        coordinates: List[List[float]],
        distances: List[float],
        elevations: List[Optional[float]],
        start: int,
        end: int,
        pace: float
    ) -> RouteStage:
        number = index + 1
        slice_coords = coordinates[start:end + 1]
        slice_elevations = elevations[start:end + 1]
        offset = distances[start]
        distance_km = round(distances[end] - offset, 2)

        ascent, descent = rounded_elevation_changes(slice_elevations)

        samples = downsample(list(range(start, end + 1)), cls.PROFILE_MAX_POINTS)
        profile = [
            ElevationPoint(
                distance=distances[i] - offset,
                elevation=elevations[i],
                lat=coordinates[i][1],
                lng=coordinates[i][0],
            )
            for i in samples
        ]

        estimated_time = int(round(distance_km * pace))

        return RouteStage(
            id=f"{route_id}-stage-{number}",
            name=f"Stage {number}",
            start_point=Coordinates(
                lat=slice_coords[0][1],
                lng=slice_coords[0][0],
                id=f"{route_id}-start-{number}",
                name=f"Stage {number} start",
            ),
            end_point=Coordinates(
                lat=slice_coords[-1][1],
                lng=slice_coords[-1][0],
                id=f"{route_id}-end-{number}",
                name=f"Stage {number} end",
            ),
            distance=distance_km,
            ascent=ascent,
            descent=descent,
            estimated_time=estimated_time,
            elevation_profile=profile,
            geometry=line_feature_collection(
                slice_coords,
                {"summary": {"distance": distance_km * 1000, "duration": estimated_time * 60}},
            ),
        )

    @classmethod
    def _pace(cls, route: HikingRoute) -> float:
        """Minutes per km of the route, or the default pace."""
        total_time = route.estimated_time
        if total_time > 0 and route.total_distance > 0:
            return total_time / route.total_distance
        return settings.default_pace_min_per_km
