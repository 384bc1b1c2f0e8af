"""
Elevation lookup and aggregation.

ElevationClient talks to the Open-Elevation lookup API.
ElevationAggregator turns a routed geometry into:
- a distance-tagged elevation profile (up to 200 samples)
- ascent/descent only (up to 100 samples, the lighter path)
"""

import logging
from typing import List, Optional, Sequence, Tuple

import httpx

from waymaker.config import settings
from waymaker.shared.elevation import (
    downsample,
    interpolate_elevations,
    rounded_elevation_changes,
)
from waymaker.shared.exceptions import (
    RemoteServiceError,
    error_from_response,
    error_from_transport,
)
from waymaker.shared.geo import cumulative_distances

from .models import ElevationPoint

logger = logging.getLogger(__name__)

SERVICE_NAME = "elevation"


class ElevationClient:
    """
    Async client for a point-elevation lookup service.

    Usage:
        client = ElevationClient()
        elevations = await client.lookup([(45.92, 6.86), (45.93, 6.88)])
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_url = api_url or settings.elevation_api_url
        self.timeout = timeout or settings.elevation_timeout
        self._transport = transport

    async def lookup(self, locations: Sequence[Tuple[float, float]]) -> List[float]:
        """
        Get elevations for (lat, lng) pairs in one batched request.

        Returns:
            Elevations in meters, in the same order as `locations`

        Raises:
            RemoteServiceError (or a subclass) on any failure
        """
        body = {
            "locations": [
                {"latitude": lat, "longitude": lng} for lat, lng in locations
            ]
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport
            ) as client:
                response = await client.post(self.api_url, json=body)
        except httpx.HTTPError as e:
            logger.error(f"Elevation request failed: {e!r}")
            raise error_from_transport(SERVICE_NAME, e) from e

        if response.status_code != 200:
            logger.error(f"Elevation API error {response.status_code}")
            raise error_from_response(SERVICE_NAME, response)

        try:
            results = response.json()["results"]
            elevations = [float(r["elevation"]) for r in results]
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteServiceError(SERVICE_NAME, detail="Malformed elevation response") from e

        if len(elevations) != len(locations):
            raise RemoteServiceError(
                SERVICE_NAME,
                detail=f"Expected {len(locations)} elevations, got {len(elevations)}"
            )

        return elevations


class ElevationAggregator:
    """
    Folds elevation samples into profiles and ascent/descent totals.

    Coordinates are GeoJSON-ordered [lng, lat(, ele)].
    """

    # Sample caps per request
    PROFILE_MAX_POINTS = 200
    SUMMARY_MAX_POINTS = 100

    def __init__(self, client: ElevationClient):
        self.client = client

    async def profile(self, coordinates: Sequence[Sequence[float]]) -> List[ElevationPoint]:
        """
        Elevation profile along a routed geometry.

        Raises:
            RemoteServiceError if the lookup fails (not retried)
        """
        if not coordinates:
            return []

        sampled = downsample(coordinates, self.PROFILE_MAX_POINTS)
        elevations = await self.client.lookup([(c[1], c[0]) for c in sampled])

        return self._build_profile(sampled, elevations)

    async def ascent_descent(self, coordinates: Sequence[Sequence[float]]) -> Tuple[int, int]:
        """
        Ascent and descent only, on at most 100 samples.

        Returns:
            (ascent_m, descent_m) rounded to whole meters
        """
        if len(coordinates) < 2:
            return 0, 0

        sampled = downsample(coordinates, self.SUMMARY_MAX_POINTS)
        elevations = await self.client.lookup([(c[1], c[0]) for c in sampled])

        return rounded_elevation_changes(elevations)

    @classmethod
    def profile_from_coordinates(
        cls,
        coordinates: Sequence[Sequence[float]]
    ) -> List[ElevationPoint]:
        """
        Build a profile locally, without any remote call.

        Uses the third ordinate when the geometry carries one; otherwise
        the profile holds distances only (elevation None).
        """
        if not coordinates:
            return []

        sampled = downsample(coordinates, cls.PROFILE_MAX_POINTS)
        elevations = [c[2] if len(c) > 2 else None for c in sampled]

        return cls._build_profile(sampled, elevations)

    @staticmethod
    def summarize(profile: Sequence[ElevationPoint]) -> Tuple[int, int]:
        """(ascent, descent) of a profile, rounded once on the aggregate."""
        return rounded_elevation_changes([p.elevation for p in profile])

    @staticmethod
    def _build_profile(
        coordinates: Sequence[Sequence[float]],
        elevations: Sequence[Optional[float]]
    ) -> List[ElevationPoint]:
        distances = cumulative_distances(coordinates)
        return [
            ElevationPoint(
                distance=dist,
                elevation=elevation,
                lat=coord[1],
                lng=coord[0],
            )
            for coord, dist, elevation in zip(coordinates, distances, elevations)
        ]


def has_cached_elevation(properties: dict) -> bool:
    """True when a routing response already carries numeric ascent/descent."""
    ascent = properties.get("ascent")
    descent = properties.get("descent")
    return (
        isinstance(ascent, (int, float)) and not isinstance(ascent, bool)
        and isinstance(descent, (int, float)) and not isinstance(descent, bool)
    )


def coordinate_elevations(
    coordinates: Sequence[Sequence[float]],
    profiles: Sequence[Sequence[ElevationPoint]]
) -> List[Optional[float]]:
    """
    One elevation per polyline coordinate (None when unknown).

    Sources, in order:
    - the coordinates' third ordinate
    - the given profiles laid end to end, stretched to the polyline length
    """
    if all(len(c) > 2 and c[2] is not None for c in coordinates):
        return [float(c[2]) for c in coordinates]

    # Concatenate profiles on a shared distance axis
    profile_distances: List[float] = []
    profile_elevations: List[Optional[float]] = []
    offset = 0.0
    for profile in profiles:
        if not profile:
            continue
        for point in profile:
            profile_distances.append(offset + point.distance)
            profile_elevations.append(point.elevation)
        offset += profile[-1].distance

    distances = cumulative_distances(coordinates)
    if not profile_distances or offset <= 0 or not distances:
        return [None] * len(coordinates)

    # Profile distances come from downsampled geometry: stretch them
    scale = distances[-1] / offset
    stretched = [d * scale for d in profile_distances]

    return interpolate_elevations(distances, stretched, profile_elevations)
