"""
Points of interest near a route.

Usage:
    from waymaker.features.pois import POIService, OverpassClient

    service = POIService(OverpassClient())
    pois = await service.find_route_pois(route.coordinates)
"""

from .client import OverpassClient, build_query
from .models import (
    Difficulty,
    EnrichedPOIs,
    Heritage,
    NotableLake,
    Pass,
    Peak,
    Refuge,
    RefugeService,
    RefugeType,
    RoutePOIs,
    Viewpoint,
    WaterPoint,
    WaterPointType,
    WaterQuality,
    WaterReliability,
)
from .service import PARTIAL_FAILURE_WARNING, POIService

__all__ = [
    "OverpassClient",
    "build_query",
    "POIService",
    "PARTIAL_FAILURE_WARNING",
    "Difficulty",
    "EnrichedPOIs",
    "Heritage",
    "NotableLake",
    "Pass",
    "Peak",
    "Refuge",
    "RefugeService",
    "RefugeType",
    "RoutePOIs",
    "Viewpoint",
    "WaterPoint",
    "WaterPointType",
    "WaterQuality",
    "WaterReliability",
]
