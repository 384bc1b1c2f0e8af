"""
Route Assembler

Builds a complete multi-stage HikingRoute from ordered waypoints by
cutting them into overlapping windows and routing each window as a stage.

Stages are built one after another: each window starts on the previous
window's last waypoint, so stage k+1 is not started before stage k is done.
"""

import dataclasses
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from waymaker.shared.elevation import elevation_range
from waymaker.shared.exceptions import InsufficientWaypointsError
from waymaker.shared.ids import content_id

from .models import Coordinates, HikingRoute, RouteStage, RouteType
from .profiles import HikingProfile
from .stage_builder import StageBuilder

logger = logging.getLogger(__name__)


WindowKey = Tuple[Tuple[float, float], ...]


def _waypoint_key(waypoints: List[Coordinates]) -> WindowKey:
    return tuple((wp.lat, wp.lng) for wp in waypoints)


@dataclass(frozen=True)
class RouteCache:
    """
    Stages already routed for one (profile, waypoint set, loop flag).

    A value object: the assembler takes one in and hands a new one back.
    Any change of profile or waypoint set invalidates it.
    """
    profile_id: Optional[str] = None
    waypoint_key: WindowKey = ()
    is_loop: bool = False
    stages: Dict[WindowKey, RouteStage] = field(default_factory=dict)

    def is_valid_for(
        self,
        profile_id: Optional[str],
        waypoints: List[Coordinates],
        is_loop: bool
    ) -> bool:
        return (
            self.profile_id == profile_id
            and self.waypoint_key == _waypoint_key(waypoints)
            and self.is_loop == is_loop
        )

    def get(self, window: List[Coordinates]) -> Optional[RouteStage]:
        return self.stages.get(_waypoint_key(window))

    @classmethod
    def for_request(
        cls,
        profile_id: Optional[str],
        waypoints: List[Coordinates],
        is_loop: bool
    ) -> "RouteCache":
        """Empty cache bound to a request."""
        return cls(
            profile_id=profile_id,
            waypoint_key=_waypoint_key(waypoints),
            is_loop=is_loop,
        )


@dataclass
class AssemblyResult:
    """Route plus the cache to pass to the next assembly."""
    route: HikingRoute
    cache: RouteCache


def stage_windows(points: List[Coordinates], stage_count: int) -> List[List[Coordinates]]:
    """
    Split points into overlapping windows, one per stage.

    Window size is max(2, ceil(len / stage_count)); each window starts on
    the last point of the previous one. Windows left with fewer than 2
    points are dropped, so some stage counts leave trailing points out.
    """
    total = len(points)
    stage_count = max(1, stage_count)
    points_per_stage = max(2, math.ceil(total / stage_count))

    windows = []
    for i in range(stage_count):
        start = i * (points_per_stage - 1)
        end = min(start + points_per_stage, total)

        if start >= total - 1:
            break

        windows.append(points[start:end])

    return windows


class RouteAssembler:
    """
    Orchestrates StageBuilder across all waypoint windows.

    Usage:
        assembler = RouteAssembler(stage_builder)
        result = await assembler.build(waypoints, is_loop=True, stage_count=3)
        route, cache = result.route, result.cache
    """

    def __init__(self, stage_builder: StageBuilder):
        self.stage_builder = stage_builder

    async def build(
        self,
        waypoints: List[Coordinates],
        is_loop: bool = False,
        stage_count: int = 1,
        profile: Optional[HikingProfile] = None,
        cache: Optional[RouteCache] = None
    ) -> AssemblyResult:
        """
        Build a complete route.

        Args:
            waypoints: Positioned waypoints (placeholders already removed)
            is_loop: Close the circuit back to the first waypoint
            stage_count: Requested number of stages
            profile: Hiking profile for routing options
            cache: Result cache from a previous build

        Returns:
            AssemblyResult with the route and an updated cache

        Raises:
            InsufficientWaypointsError: fewer than 2 waypoints
            RemoteServiceError: any stage failed (no partial route)
        """
        points = [wp.copy() for wp in waypoints]
        if len(points) < 2:
            raise InsufficientWaypointsError(
                "At least 2 points are required to create a route"
            )

        profile_id = profile.id if profile else None
        if cache is None or not cache.is_valid_for(profile_id, points, is_loop):
            cache = RouteCache.for_request(profile_id, points, is_loop)
        stage_cache = dict(cache.stages)

        if is_loop:
            points.append(points[0].copy())

        windows = stage_windows(points, stage_count)
        self._warn_uncovered(points, windows)

        route_id = content_id(
            "route", [[p.lat, p.lng] for p in points], is_loop, stage_count, profile_id
        )

        stages: List[RouteStage] = []
        for index, window in enumerate(windows):
            name = f"Stage {index + 1}"
            stage_id = f"{route_id}-stage-{index + 1}"
            key = _waypoint_key(window)

            cached = stage_cache.get(key)
            if cached is not None:
                logger.debug(f"{name}: reusing cached stage")
                stage = dataclasses.replace(cached, id=stage_id, name=name)
            else:
                stage = await self.stage_builder.build(name, window, profile, stage_id=stage_id)
                stage_cache[key] = stage

            stages.append(stage)

        route = self._assemble(route_id, stages, is_loop)
        logger.info(
            f"Assembled route {route.id}: {len(stages)} stages, {route.total_distance} km"
        )

        return AssemblyResult(
            route=route,
            cache=dataclasses.replace(cache, stages=stage_cache),
        )

    @staticmethod
    def _assemble(route_id: str, stages: List[RouteStage], is_loop: bool) -> HikingRoute:
        """Aggregate stage statistics and geometry into a route."""
        elevations = [
            point.elevation
            for stage in stages
            for point in stage.elevation_profile
        ]
        extent = elevation_range(elevations)
        if extent is None:
            logger.warning(f"Route {route_id} has no elevation data")
            extent = (0.0, 0.0)

        features = []
        for stage in stages:
            features.extend(stage.geometry.get("features", []))

        return HikingRoute(
            id=route_id,
            name="Loop itinerary" if is_loop else "Linear itinerary",
            type=RouteType.LOOP if is_loop else RouteType.POINT_TO_POINT,
            stages=stages,
            total_distance=round(sum(s.distance for s in stages), 2),
            total_ascent=sum(s.ascent for s in stages),
            total_descent=sum(s.descent for s in stages),
            min_elevation=round(extent[0]),
            max_elevation=round(extent[1]),
            geometry={"type": "FeatureCollection", "features": features},
        )

    @staticmethod
    def _warn_uncovered(points: List[Coordinates], windows: List[List[Coordinates]]) -> None:
        covered = sum(len(w) for w in windows) - max(0, len(windows) - 1)
        if covered < len(points):
            logger.warning(
                f"Stage windows cover {covered} of {len(points)} waypoints; "
                f"trailing waypoints are not routed"
            )
