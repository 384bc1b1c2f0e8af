"""
API dependencies.

Service factories injected with FastAPI Depends; tests replace them
through app.dependency_overrides.
"""

from fastapi import HTTPException

from waymaker.config import CONTENT_DIR
from waymaker.features.places import GeocodingClient
from waymaker.features.pois import OverpassClient, POIService
from waymaker.features.routing import (
    ElevationAggregator,
    ElevationClient,
    HikingPlannerService,
    HikingProfileCatalog,
    RouteAssembler,
    RouteSummaryService,
    RoutingClient,
    StageBuilder,
)
from waymaker.shared.exceptions import (
    GPXParseError,
    InsufficientWaypointsError,
    NoRouteFoundError,
    RemoteServiceError,
    ServiceBadRequestError,
    UnknownTransportModeError,
    WaymakerError,
)

# Read-only catalog (loaded once, cached)
_catalog = HikingProfileCatalog(CONTENT_DIR)


def get_profile_catalog() -> HikingProfileCatalog:
    return _catalog


def get_poi_service() -> POIService:
    return POIService(OverpassClient())


def get_geocoding_client() -> GeocodingClient:
    return GeocodingClient()


def get_summary_service() -> RouteSummaryService:
    return RouteSummaryService(ElevationAggregator(ElevationClient()), RoutingClient())


def get_planner() -> HikingPlannerService:
    builder = StageBuilder(RoutingClient(), ElevationAggregator(ElevationClient()))
    return HikingPlannerService(RouteAssembler(builder), get_poi_service())


def to_http_error(error: WaymakerError) -> HTTPException:
    """
    Map a domain error to an HTTP error.

    400 for bad input, 404 when no route exists, 502 for other
    remote failures.
    """
    if isinstance(error, (
        InsufficientWaypointsError,
        GPXParseError,
        ServiceBadRequestError,
        UnknownTransportModeError,
    )):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, NoRouteFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, RemoteServiceError):
        return HTTPException(status_code=502, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
