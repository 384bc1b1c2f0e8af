"""
Overpass API client.

Posts Overpass QL queries and returns the raw `elements` list.
Timeouts and gateway timeouts (504) are retried with exponential
backoff; every other failure is raised immediately.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from waymaker.config import settings
from waymaker.shared.exceptions import (
    RemoteServiceError,
    error_from_response,
    error_from_transport,
)
from waymaker.shared.geo import Bounds

logger = logging.getLogger(__name__)

SERVICE_NAME = "overpass"

# Statuses worth a second attempt
RETRYABLE_STATUSES = {504}


def build_query(selectors: Sequence[str], bounds: Bounds, timeout: int = 8) -> str:
    """
    Union query of `selectors` over a bounding box.

    Args:
        selectors: Element filters such as 'node["natural"="spring"]'
        bounds: Search area
        timeout: Server-side timeout in seconds

    Ways and relations are returned with their center point.
    """
    bbox = f"({bounds.min_lat},{bounds.min_lng},{bounds.max_lat},{bounds.max_lng})"
    body = "\n".join(f"  {selector}{bbox};" for selector in selectors)
    return f"[out:json][timeout:{timeout}];\n(\n{body}\n);\nout center;"


class OverpassClient:
    """
    Usage:
        client = OverpassClient()
        elements = await client.query(build_query(['node["natural"="peak"]'], bounds))
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_url = api_url or settings.overpass_api_url
        self.timeout = timeout or settings.overpass_timeout
        self.max_retries = max_retries if max_retries is not None else settings.overpass_max_retries
        self.retry_delay = retry_delay if retry_delay is not None else settings.overpass_retry_delay
        self._transport = transport

    async def query(self, ql: str) -> List[Dict[str, Any]]:
        """
        Run a query, retrying timeouts.

        Returns:
            Overpass elements (may be empty)

        Raises:
            RemoteServiceError (or a subclass) once attempts are exhausted
        """
        attempts = max(1, self.max_retries)

        for attempt in range(attempts):
            try:
                return await self._post(ql)
            except RemoteServiceError as e:
                is_last = attempt == attempts - 1
                if is_last or not self._is_retryable(e):
                    raise
                delay = self.retry_delay * (2 ** attempt)
                logger.warning(
                    f"Overpass attempt {attempt + 1}/{attempts} failed ({e}), "
                    f"retrying in {delay:.1f}s"
                )
                await asyncio.sleep(delay)

        raise RemoteServiceError(SERVICE_NAME, detail="Max retries exceeded")

    async def _post(self, ql: str) -> List[Dict[str, Any]]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport
            ) as client:
                response = await client.post(
                    self.api_url,
                    content=ql,
                    headers={"Content-Type": "text/plain"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Overpass request failed: {e!r}")
            raise error_from_transport(SERVICE_NAME, e) from e

        if response.status_code != 200:
            logger.error(f"Overpass API error {response.status_code}")
            raise error_from_response(SERVICE_NAME, response)

        try:
            return list(response.json().get("elements", []))
        except (ValueError, AttributeError) as e:
            raise RemoteServiceError(SERVICE_NAME, detail="Malformed Overpass response") from e

    @staticmethod
    def _is_retryable(error: RemoteServiceError) -> bool:
        if error.status_code in RETRYABLE_STATUSES:
            return True
        return isinstance(error.__cause__, httpx.TimeoutException)
