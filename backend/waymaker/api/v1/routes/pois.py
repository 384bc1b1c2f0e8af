"""
POI Routes

Endpoints for points of interest near a route. Lookups are best-effort:
failed categories come back empty with a warning, never as an error.
"""

from fastapi import APIRouter, Depends

from waymaker.api.deps import get_poi_service
from waymaker.features.pois import POIService
from waymaker.features.pois.schemas import (
    EnrichedPOIRequest,
    EnrichedPOIsSchema,
    POIRequest,
    RoutePOIsSchema,
)

router = APIRouter()


@router.post("", response_model=RoutePOIsSchema)
async def find_route_pois(
    request: POIRequest,
    service: POIService = Depends(get_poi_service)
):
    """Refuges and water points near the polyline."""
    pois = await service.find_route_pois(
        request.coordinates,
        refuge_radius_km=request.refuge_radius_km,
        water_radius_km=request.water_radius_km,
    )
    return RoutePOIsSchema.model_validate(pois)


@router.post("/enriched", response_model=EnrichedPOIsSchema)
async def find_enriched_pois(
    request: EnrichedPOIRequest,
    service: POIService = Depends(get_poi_service)
):
    """Peaks, passes, viewpoints, heritage sites and lakes near the polyline."""
    pois = await service.find_enriched_pois(request.coordinates, radius_km=request.radius_km)
    return EnrichedPOIsSchema.model_validate(pois)
