"""
Stage Builder

Routes one window of waypoints and packages it as a RouteStage:
routed geometry + distance/duration from the routing summary +
elevation profile along the routed path.
"""

import logging
from typing import List, Optional

from waymaker.shared.exceptions import InsufficientWaypointsError
from waymaker.shared.ids import content_id

from .client import RoutingClient
from .elevation import ElevationAggregator, has_cached_elevation
from .models import Coordinates, RouteStage
from .profiles import HikingProfile, routing_params

logger = logging.getLogger(__name__)


class StageBuilder:
    """
    Builds a single stage from ≥2 waypoints.

    Usage:
        builder = StageBuilder(routing_client, aggregator)
        stage = await builder.build("Stage 1", waypoints, profile)
    """

    def __init__(self, routing_client: RoutingClient, aggregator: ElevationAggregator):
        self.routing_client = routing_client
        self.aggregator = aggregator

    async def build(
        self,
        name: str,
        waypoints: List[Coordinates],
        profile: Optional[HikingProfile] = None,
        stage_id: Optional[str] = None
    ) -> RouteStage:
        """
        Route the waypoints and compute the stage statistics.

        Args:
            name: Stage display name
            waypoints: Points to visit, in order (at least 2)
            profile: Hiking profile for routing options
            stage_id: Explicit id; derived from the waypoints when omitted

        Returns:
            RouteStage with distance (km, 2 decimals), ascent/descent (m)
            and estimated time (min)

        Raises:
            InsufficientWaypointsError: fewer than 2 waypoints
            RemoteServiceError: routing or elevation failure
        """
        if len(waypoints) < 2:
            raise InsufficientWaypointsError()

        routing_profile, options = routing_params(profile)
        coordinates = [wp.to_lnglat() for wp in waypoints]

        collection = await self.routing_client.directions(
            coordinates, profile=routing_profile, options=options
        )

        feature = collection["features"][0]
        geometry = feature["geometry"]["coordinates"]
        properties = feature.get("properties", {})
        summary = properties.get("summary", {})

        if has_cached_elevation(properties):
            # Routing already measured the climb: no elevation lookup
            ascent = int(round(properties["ascent"]))
            descent = int(round(properties["descent"]))
            elevation_profile = self.aggregator.profile_from_coordinates(geometry)
            logger.debug(f"{name}: using ascent/descent from routing response")
        else:
            elevation_profile = await self.aggregator.profile(geometry)
            ascent, descent = self.aggregator.summarize(elevation_profile)

        distance_m = float(summary.get("distance", 0.0))
        duration_s = float(summary.get("duration", 0.0))

        stage = RouteStage(
            id=stage_id or content_id(
                "stage", name, [[wp.lat, wp.lng] for wp in waypoints], routing_profile, options
            ),
            name=name,
            start_point=waypoints[0].copy(),
            end_point=waypoints[-1].copy(),
            distance=round(distance_m / 1000, 2),
            ascent=ascent,
            descent=descent,
            estimated_time=int(round(duration_s / 60)),
            elevation_profile=elevation_profile,
            geometry=collection,
        )

        logger.info(
            f"Built {name}: {stage.distance} km, +{stage.ascent}/-{stage.descent} m"
        )
        return stage
