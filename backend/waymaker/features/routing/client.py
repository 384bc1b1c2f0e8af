"""
OpenRouteService routing client.

Thin async wrapper around the directions endpoint. Handles:
- Request building (coordinates, profile, options)
- Mapping HTTP failures to the error taxonomy

No retry here: a failed route is reported, the caller decides.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from waymaker.config import settings
from waymaker.shared.exceptions import (
    NoRouteFoundError,
    RemoteServiceError,
    ServiceAuthError,
    error_from_response,
    error_from_transport,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "routing"
DEFAULT_PROFILE = "foot-hiking"


class RoutingClient:
    """
    Async client for the OpenRouteService directions API.

    Usage:
        client = RoutingClient(api_key="...")
        collection = await client.directions([[6.86, 45.92], [6.88, 45.93]])
        feature = collection["features"][0]
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        request_elevation: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key if api_key is not None else settings.ors_api_key
        self.base_url = (base_url or settings.ors_base_url).rstrip("/")
        self.timeout = timeout or settings.ors_timeout
        self.request_elevation = (
            settings.ors_request_elevation if request_elevation is None
            else request_elevation
        )
        self._transport = transport

    async def directions(
        self,
        coordinates: List[List[float]],
        profile: str = DEFAULT_PROFILE,
        options: Optional[Dict[str, Any]] = None,
        radiuses: Optional[List[float]] = None
    ) -> Dict[str, Any]:
        """
        Request a route through all coordinates.

        Args:
            coordinates: [[lng, lat], ...] in visiting order
            profile: ORS travel profile
            options: ORS route options (avoid_features, ...)
            radiuses: Max snapping distance (m) per coordinate

        Returns:
            GeoJSON FeatureCollection with at least one feature

        Raises:
            ServiceAuthError, ServiceQuotaError, ServiceBadRequestError,
            NoRouteFoundError, ServiceNetworkError, RemoteServiceError
        """
        if not self.api_key:
            logger.error("OpenRouteService API key not configured")
            raise ServiceAuthError(SERVICE_NAME, detail="API key not configured")

        body: Dict[str, Any] = {"coordinates": coordinates}
        if self.request_elevation:
            body["elevation"] = True
        if options:
            body["options"] = options
        if radiuses:
            body["radiuses"] = radiuses

        url = f"{self.base_url}/v2/directions/{profile}/geojson"
        logger.debug(f"Routing {len(coordinates)} points with profile {profile}")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport
            ) as client:
                response = await client.post(
                    url,
                    json=body,
                    headers={
                        "Authorization": self.api_key,
                        "Content-Type": "application/json",
                    },
                )
        except httpx.HTTPError as e:
            logger.error(f"Routing request failed: {e!r}")
            raise error_from_transport(SERVICE_NAME, e) from e

        if response.status_code != 200:
            logger.error(
                f"Routing API error {response.status_code}: {response.text[:200]}"
            )
            raise error_from_response(SERVICE_NAME, response)

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteServiceError(SERVICE_NAME, detail="Invalid JSON response") from e

        if not data.get("features"):
            raise NoRouteFoundError(SERVICE_NAME, detail="Empty routing response")

        return data
