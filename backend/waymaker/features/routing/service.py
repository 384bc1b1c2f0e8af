"""
Hiking Planner Service

Orchestrates a full planning request:
1. Drop unpositioned waypoints
2. Assemble the route (RouteAssembler)
3. Re-cut it into N equal stages (StageDivider), unless stages follow waypoints
4. Look up refuges and water points, best-effort

Usage:
    planner = HikingPlannerService(assembler, poi_service)
    result = await planner.plan(waypoints, is_loop=False, stage_count=3)
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from waymaker.features.pois.models import Refuge, WaterPoint
from waymaker.features.pois.service import POIService
from waymaker.shared.exceptions import InsufficientWaypointsError

from .assembler import RouteAssembler, RouteCache
from .divider import StageDivider
from .models import Coordinates, HikingRoute, positioned
from .profiles import HikingProfile

logger = logging.getLogger(__name__)


@dataclass
class PlanResult:
    """Planned route with its cache and nearby POIs."""
    route: HikingRoute
    cache: RouteCache
    refuges: List[Refuge] = field(default_factory=list)
    water_points: List[WaterPoint] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class HikingPlannerService:
    """Route planning: assembly, stage division and POI lookup."""

    def __init__(
        self,
        assembler: RouteAssembler,
        poi_service: Optional[POIService] = None
    ):
        self.assembler = assembler
        self.poi_service = poi_service

    async def plan(
        self,
        waypoints: List[Coordinates],
        is_loop: bool = False,
        stage_count: int = 1,
        profile: Optional[HikingProfile] = None,
        cache: Optional[RouteCache] = None,
        include_pois: bool = True,
        split_by_waypoints: bool = False
    ) -> PlanResult:
        """
        Plan a route through the waypoints.

        Args:
            waypoints: Ordered waypoints; (0, 0) placeholders are ignored
            is_loop: Return to the first waypoint
            stage_count: Number of stages wanted
            profile: Hiking profile for routing options
            cache: RouteCache from a previous plan
            include_pois: Look up refuges and water points
            split_by_waypoints: Route each waypoint window as its own stage
                instead of dividing the whole route by distance

        Returns:
            PlanResult

        Raises:
            InsufficientWaypointsError: fewer than 2 positioned waypoints
            RemoteServiceError: routing or elevation failure
        """
        points = positioned(waypoints)
        if len(points) < 2:
            raise InsufficientWaypointsError(
                "At least 2 positioned waypoints are required to plan a route"
            )

        stage_count = max(1, stage_count)

        if split_by_waypoints:
            assembly = await self.assembler.build(
                points, is_loop=is_loop, stage_count=stage_count, profile=profile, cache=cache
            )
            route = assembly.route
        else:
            assembly = await self.assembler.build(
                points, is_loop=is_loop, stage_count=1, profile=profile, cache=cache
            )
            route = self.restage(assembly.route, stage_count)

        result = PlanResult(route=route, cache=assembly.cache)

        if include_pois and self.poi_service is not None:
            pois = await self.poi_service.find_route_pois(route.coordinates)
            result.refuges = pois.refuges
            result.water_points = pois.water_points
            if pois.warning:
                result.warnings.append(pois.warning)

        logger.info(
            f"Planned route {route.id}: {len(route.stages)} stages, "
            f"{len(result.refuges)} refuges, {len(result.water_points)} water points"
        )
        return result

    def restage(self, route: HikingRoute, stage_count: int) -> HikingRoute:
        """Re-cut an existing route into `stage_count` stages."""
        if stage_count <= 1:
            return route
        return StageDivider.divide(route, stage_count)
