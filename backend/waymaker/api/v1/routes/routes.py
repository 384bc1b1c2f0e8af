"""
Route Planning Routes

Endpoints for hiking profiles, route planning, re-staging, summaries
and A to B routes.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from waymaker.api.deps import (
    get_planner,
    get_profile_catalog,
    get_summary_service,
    to_http_error,
)
from waymaker.features.pois.schemas import RefugeSchema, WaterPointSchema
from waymaker.features.routing import (
    HikingPlannerService,
    HikingProfileCatalog,
    RouteSummaryService,
    StageDivider,
    TRANSPORT_MODES,
)
from waymaker.features.routing.schemas import (
    HikingProfileSchema,
    HikingRouteSchema,
    PlanRequest,
    PlanResponse,
    QuickRouteRequest,
    QuickRouteResponse,
    RestageRequest,
    RouteSummarySchema,
    SummaryRequest,
    TransportModeSchema,
)
from waymaker.shared.exceptions import WaymakerError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/profiles", response_model=List[HikingProfileSchema])
async def list_profiles(catalog: HikingProfileCatalog = Depends(get_profile_catalog)):
    """Available hiking profiles (first one is the default)."""
    return [HikingProfileSchema.model_validate(p) for p in catalog.profiles]


@router.post("", response_model=PlanResponse)
async def plan_route(
    request: PlanRequest,
    planner: HikingPlannerService = Depends(get_planner),
    catalog: HikingProfileCatalog = Depends(get_profile_catalog)
):
    """
    Plan a multi-stage route through the waypoints.

    Waypoints at (0, 0) are ignored. POI lookups never fail the request;
    a partial failure is reported in `warnings`.
    """
    profile = None
    if request.profile_id:
        profile = catalog.get(request.profile_id)
        if profile is None:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown hiking profile: {request.profile_id}"
            )

    try:
        result = await planner.plan(
            [wp.to_domain() for wp in request.waypoints],
            is_loop=request.is_loop,
            stage_count=request.stage_count,
            profile=profile,
            include_pois=request.include_pois,
            split_by_waypoints=request.split_by_waypoints,
        )
    except WaymakerError as e:
        logger.warning(f"Route planning failed: {e}")
        raise to_http_error(e)

    return PlanResponse(
        route=HikingRouteSchema.model_validate(result.route),
        refuges=[RefugeSchema.model_validate(r) for r in result.refuges],
        water_points=[WaterPointSchema.model_validate(w) for w in result.water_points],
        warnings=result.warnings,
    )


@router.post("/restage", response_model=HikingRouteSchema)
async def restage_route(request: RestageRequest):
    """Re-cut a planned route into equal-length stages (no routing call)."""
    route = StageDivider.divide(request.route.to_domain(), request.stage_count)
    return HikingRouteSchema.model_validate(route)


@router.post("/summary", response_model=RouteSummarySchema)
async def summarize_route(
    request: SummaryRequest,
    service: RouteSummaryService = Depends(get_summary_service)
):
    """Distance, duration and climb of one routed GeoJSON feature."""
    summary = await service.summarize(request.feature)
    return RouteSummarySchema.model_validate(summary)


@router.get("/modes", response_model=List[TransportModeSchema])
async def list_transport_modes():
    """Travel modes accepted by /routes/quick."""
    return [TransportModeSchema.model_validate(m) for m in TRANSPORT_MODES]


@router.post("/quick", response_model=QuickRouteResponse)
async def quick_route(
    request: QuickRouteRequest,
    service: RouteSummaryService = Depends(get_summary_service)
):
    """Route from start to end with one transport mode, with its summary card."""
    try:
        result = await service.quick_route(
            request.start.to_domain(),
            request.end.to_domain(),
            request.mode,
        )
    except WaymakerError as e:
        logger.warning(f"Quick route failed: {e}")
        raise to_http_error(e)

    return QuickRouteResponse.model_validate(result)
