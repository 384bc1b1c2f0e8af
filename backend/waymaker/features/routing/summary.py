"""
Route summary for a single routed feature.

The quick "distance / duration / climb" card: reuses ascent and descent
from the routing response when present, otherwise asks the elevation
service on at most 100 samples. Also routes a plain A to B trip for a
chosen transport mode and summarizes it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from waymaker.shared.exceptions import RemoteServiceError, UnknownTransportModeError
from waymaker.shared.formatters import format_distance, format_duration

from .client import DEFAULT_PROFILE, RoutingClient
from .elevation import ElevationAggregator, has_cached_elevation
from .models import Coordinates
from .profiles import transport_mode

logger = logging.getLogger(__name__)

# Snap A and B to the nearest road or path, however far
SNAP_RADIUS_M = 500000


@dataclass
class RouteSummary:
    """Display-ready summary of one routed feature."""
    distance: str
    duration: str
    ascent: Optional[int]
    descent: Optional[int]


@dataclass
class QuickRoute:
    """A to B route for one transport mode."""
    mode: str
    geometry: Dict[str, Any]
    summary: RouteSummary


class RouteSummaryService:
    """
    Usage:
        service = RouteSummaryService(aggregator, RoutingClient())
        summary = await service.summarize(collection["features"][0])
        quick = await service.quick_route(start, end, "cycling-mountain")
    """

    def __init__(
        self,
        aggregator: ElevationAggregator,
        routing_client: Optional[RoutingClient] = None
    ):
        self.aggregator = aggregator
        self.routing_client = routing_client

    async def summarize(self, feature: Dict[str, Any]) -> RouteSummary:
        properties = feature.get("properties", {})
        summary = properties.get("summary", {})

        distance_text = format_distance(float(summary.get("distance", 0.0)))
        duration_text = format_duration(float(summary.get("duration", 0.0)))

        if has_cached_elevation(properties):
            return RouteSummary(
                distance=distance_text,
                duration=duration_text,
                ascent=int(round(properties["ascent"])),
                descent=int(round(properties["descent"])),
            )

        coordinates = feature.get("geometry", {}).get("coordinates", [])
        try:
            ascent, descent = await self.aggregator.ascent_descent(coordinates)
        except RemoteServiceError as e:
            # Summary stays usable without the climb figures
            logger.warning(f"Elevation unavailable for route summary: {e}")
            ascent, descent = None, None

        return RouteSummary(
            distance=distance_text,
            duration=duration_text,
            ascent=ascent,
            descent=descent,
        )

    async def quick_route(
        self,
        start: Coordinates,
        end: Coordinates,
        mode: str = DEFAULT_PROFILE
    ) -> QuickRoute:
        """
        Route from start to end with one transport mode and summarize it.

        Raises:
            UnknownTransportModeError: mode is not one of TRANSPORT_MODES
            RemoteServiceError (or a subclass): routing failed
        """
        if transport_mode(mode) is None:
            raise UnknownTransportModeError(mode)
        if self.routing_client is None:
            raise RuntimeError("RouteSummaryService has no routing client")

        collection = await self.routing_client.directions(
            [[start.lng, start.lat], [end.lng, end.lat]],
            profile=mode,
            radiuses=[SNAP_RADIUS_M, SNAP_RADIUS_M],
        )
        feature = collection["features"][0]
        logger.info(f"Quick route with {mode}")

        return QuickRoute(
            mode=mode,
            geometry={"type": "FeatureCollection", "features": [feature]},
            summary=await self.summarize(feature),
        )
