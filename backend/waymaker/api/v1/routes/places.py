"""
Place Search Routes

Find places by name to add them as waypoints.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from waymaker.api.deps import get_geocoding_client, to_http_error
from waymaker.features.places import GeocodingClient
from waymaker.features.places.schemas import PlaceSchema
from waymaker.shared.exceptions import WaymakerError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[PlaceSchema])
async def search_places(
    q: str = Query(..., max_length=200, description="Free-text place name"),
    limit: int = Query(default=5, ge=1, le=20),
    client: GeocodingClient = Depends(get_geocoding_client)
):
    """Places matching `q`, best match first. Queries under 3 characters return []."""
    try:
        places = await client.search(q, limit=limit)
    except WaymakerError as e:
        logger.warning(f"Place search failed: {e}")
        raise to_http_error(e)

    return [PlaceSchema.model_validate(p) for p in places]
