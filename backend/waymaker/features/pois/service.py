"""
POI Service

Finds points of interest near a route polyline:
- refuges and water points (planning essentials)
- peaks, passes, viewpoints, heritage sites and lakes (enriched)

Each finder queries Overpass over the route bbox buffered by the search
radius, then keeps only elements within the radius of the polyline.
The aggregate lookups are best-effort: a failed category comes back empty
and a single warning is reported.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from waymaker.config import settings
from waymaker.shared.geo import distance_to_polyline, polyline_bounds

from . import classifiers
from .client import OverpassClient, build_query
from .models import (
    EnrichedPOIs,
    Heritage,
    NotableLake,
    Pass,
    Peak,
    Refuge,
    RoutePOIs,
    Viewpoint,
    WaterPoint,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Polyline = Sequence[Sequence[float]]

PARTIAL_FAILURE_WARNING = "Some points of interest could not be loaded"

REFUGE_SELECTORS = [
    'node["tourism"="alpine_hut"]',
    'node["tourism"="wilderness_hut"]',
    'node["amenity"="shelter"]["shelter_type"="basic_hut"]',
]
WATER_SELECTORS = [
    'node["natural"="spring"]',
    'node["amenity"="drinking_water"]',
]
PEAK_SELECTORS = [
    'node["natural"="peak"]',
    'node["natural"="volcano"]',
]
PASS_SELECTORS = [
    'node["natural"="saddle"]',
    'node["mountain_pass"="yes"]',
    'node["natural"="pass"]',
]
VIEWPOINT_SELECTORS = [
    'node["tourism"="viewpoint"]',
    'node["natural"="viewpoint"]',
]
HERITAGE_SELECTORS = [
    'node["historic"]',
    'node["tourism"="attraction"]["historic"]',
    'way["historic"]',
]
LAKE_SELECTORS = [
    'way["natural"="water"]["name"]',
    'relation["natural"="water"]["name"]',
]


class POIService:
    """
    Usage:
        service = POIService(OverpassClient())
        pois = await service.find_route_pois(route.coordinates)
        if pois.warning:
            ...
    """

    def __init__(self, client: OverpassClient):
        self.client = client

    # =========================================================================
    # Planning essentials
    # =========================================================================

    async def find_refuges(self, coordinates: Polyline, radius_km: float = 5.0) -> List[Refuge]:
        return await self._find(
            coordinates, radius_km, REFUGE_SELECTORS, classifiers.refuge_from_element, timeout=8
        )

    async def find_water_points(
        self,
        coordinates: Polyline,
        radius_km: float = 2.0
    ) -> List[WaterPoint]:
        return await self._find(
            coordinates, radius_km, WATER_SELECTORS, classifiers.water_point_from_element, timeout=8
        )

    # =========================================================================
    # Enriched POIs
    # =========================================================================

    async def find_peaks(self, coordinates: Polyline, radius_km: float = 10.0) -> List[Peak]:
        """Peaks with a known elevation, highest first."""
        peaks = await self._find(
            coordinates, radius_km, PEAK_SELECTORS, classifiers.peak_from_element
        )
        return sorted(
            (p for p in peaks if p.elevation > 0),
            key=lambda p: p.elevation,
            reverse=True,
        )

    async def find_passes(self, coordinates: Polyline, radius_km: float = 8.0) -> List[Pass]:
        """Passes with a known elevation, highest first."""
        passes = await self._find(
            coordinates, radius_km, PASS_SELECTORS, classifiers.pass_from_element
        )
        return sorted(
            (p for p in passes if p.elevation > 0),
            key=lambda p: p.elevation,
            reverse=True,
        )

    async def find_viewpoints(
        self,
        coordinates: Polyline,
        radius_km: float = 5.0
    ) -> List[Viewpoint]:
        return await self._find(
            coordinates, radius_km, VIEWPOINT_SELECTORS, classifiers.viewpoint_from_element
        )

    async def find_heritage(self, coordinates: Polyline, radius_km: float = 6.0) -> List[Heritage]:
        """Named heritage sites (generic unnamed ones are dropped)."""
        sites = await self._find(
            coordinates, radius_km, HERITAGE_SELECTORS, classifiers.heritage_from_element
        )
        return [s for s in sites if s.name and s.name != classifiers.GENERIC_HERITAGE_NAME]

    async def find_lakes(self, coordinates: Polyline, radius_km: float = 8.0) -> List[NotableLake]:
        return await self._find(
            coordinates, radius_km, LAKE_SELECTORS, classifiers.lake_from_element
        )

    # =========================================================================
    # Aggregates
    # =========================================================================

    async def find_route_pois(
        self,
        coordinates: Polyline,
        refuge_radius_km: Optional[float] = None,
        water_radius_km: Optional[float] = None
    ) -> RoutePOIs:
        """Refuges and water points, looked up concurrently."""
        refuges, water_points, failed = await self._gather_best_effort(
            self.find_refuges(coordinates, refuge_radius_km or settings.refuge_radius_km),
            self.find_water_points(coordinates, water_radius_km or settings.water_radius_km),
        )
        return RoutePOIs(
            refuges=refuges,
            water_points=water_points,
            warning=PARTIAL_FAILURE_WARNING if failed else None,
        )

    async def find_enriched_pois(
        self,
        coordinates: Polyline,
        radius_km: Optional[float] = None
    ) -> EnrichedPOIs:
        """All five enriched categories within one radius."""
        radius = radius_km or settings.enriched_poi_radius_km
        peaks, passes, viewpoints, heritage, lakes, failed = await self._gather_best_effort(
            self.find_peaks(coordinates, radius),
            self.find_passes(coordinates, radius),
            self.find_viewpoints(coordinates, radius),
            self.find_heritage(coordinates, radius),
            self.find_lakes(coordinates, radius),
        )
        return EnrichedPOIs(
            peaks=peaks,
            passes=passes,
            viewpoints=viewpoints,
            heritage=heritage,
            lakes=lakes,
            warning=PARTIAL_FAILURE_WARNING if failed else None,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    async def _find(
        self,
        coordinates: Polyline,
        radius_km: float,
        selectors: List[str],
        build: Callable[[Dict[str, Any], float, float], T],
        timeout: int = 10
    ) -> List[T]:
        bounds = polyline_bounds(coordinates)
        if bounds is None:
            return []

        query = build_query(selectors, bounds.expand_km(radius_km), timeout=timeout)
        elements = await self.client.query(query)

        results = []
        for element in elements:
            position = classifiers.element_position(element)
            if position is None:
                continue
            lat, lng = position
            if distance_to_polyline(lat, lng, coordinates) <= radius_km:
                results.append(build(element, lat, lng))

        return results

    @staticmethod
    async def _gather_best_effort(*lookups) -> list:
        """
        Await lookups concurrently.

        Returns one list per lookup (failed ones empty), followed by
        the number of failures.
        """
        outcomes = await asyncio.gather(*lookups, return_exceptions=True)

        results = []
        failed = 0
        for outcome in outcomes:
            if isinstance(outcome, Exception):
                logger.warning(f"POI lookup failed: {outcome}")
                failed += 1
                results.append([])
            else:
                results.append(outcome)

        return [*results, failed]
