"""
Nominatim place search client.

Free-text search used to add waypoints by name. Short queries are
answered locally with no request.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from waymaker.config import settings
from waymaker.shared.exceptions import (
    RemoteServiceError,
    error_from_response,
    error_from_transport,
)

from .models import Place

logger = logging.getLogger(__name__)

SERVICE_NAME = "geocoding"


class GeocodingClient:
    """
    Usage:
        client = GeocodingClient()
        places = await client.search("Refuge du Goûter")
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        min_query_length: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_url = (api_url or settings.geocoding_api_url).rstrip("/")
        self.timeout = timeout or settings.geocoding_timeout
        self.user_agent = user_agent or settings.geocoding_user_agent
        self.min_query_length = (
            settings.geocoding_min_query_length if min_query_length is None
            else min_query_length
        )
        self._transport = transport

    async def search(self, query: str, limit: Optional[int] = None) -> List[Place]:
        """
        Places matching a free-text query, best match first.

        Returns:
            Up to `limit` places; empty for queries shorter than
            min_query_length

        Raises:
            RemoteServiceError (or a subclass)
        """
        query = query.strip()
        if len(query) < self.min_query_length:
            return []

        params = {
            "format": "json",
            "q": query,
            "limit": limit or settings.geocoding_max_results,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport
            ) as client:
                response = await client.get(
                    f"{self.api_url}/search",
                    params=params,
                    headers={"User-Agent": self.user_agent},
                )
        except httpx.HTTPError as e:
            logger.error(f"Place search failed: {e!r}")
            raise error_from_transport(SERVICE_NAME, e) from e

        if response.status_code != 200:
            logger.error(f"Nominatim error {response.status_code}")
            raise error_from_response(SERVICE_NAME, response)

        try:
            results = response.json()
        except ValueError as e:
            raise RemoteServiceError(SERVICE_NAME, detail="Invalid JSON response") from e
        if not isinstance(results, list):
            raise RemoteServiceError(SERVICE_NAME, detail="Malformed search response")

        places = [p for p in (self._to_place(r) for r in results) if p is not None]
        logger.debug(f"Place search '{query}': {len(places)} results")
        return places

    @staticmethod
    def _to_place(result: Dict[str, Any]) -> Optional[Place]:
        # Nominatim sends coordinates as strings
        try:
            lat = float(result["lat"])
            lng = float(result["lon"])
        except (KeyError, TypeError, ValueError):
            return None

        return Place(
            id=str(result.get("place_id", f"{lat},{lng}")),
            name=result.get("display_name") or result.get("name") or f"{lat}, {lng}",
            lat=lat,
            lng=lng,
            category=result.get("class"),
            type=result.get("type"),
        )
