"""
Route building and staging module.

Usage:
    from waymaker.features.routing import RouteAssembler, StageBuilder, StageDivider
    from waymaker.features.routing import HikingPlannerService

Components:
- RoutingClient, ElevationClient: remote service wrappers
- ElevationAggregator: elevation profiles and ascent/descent
- StageBuilder: one routed stage from a waypoint window
- RouteAssembler: multi-stage route from waypoints (with RouteCache)
- StageDivider: equal-length re-staging of a routed polyline
- HikingPlannerService: full planning request
- HikingProfileCatalog: path preference profiles
- RouteSummaryService: summary card and A to B quick routes
"""

from .assembler import AssemblyResult, RouteAssembler, RouteCache, stage_windows
from .client import DEFAULT_PROFILE, RoutingClient
from .divider import StageDivider
from .elevation import ElevationAggregator, ElevationClient, coordinate_elevations
from .models import (
    Coordinates,
    ElevationPoint,
    HikingRoute,
    RouteStage,
    RouteType,
    ensure_waypoint_ids,
    positioned,
)
from .profiles import (
    TRANSPORT_MODES,
    HikingProfile,
    HikingProfileCatalog,
    PathPreferences,
    TransportMode,
    routing_params,
    transport_mode,
)
from .service import HikingPlannerService, PlanResult
from .stage_builder import StageBuilder
from .summary import QuickRoute, RouteSummary, RouteSummaryService

__all__ = [
    # Models
    "Coordinates",
    "ElevationPoint",
    "HikingRoute",
    "RouteStage",
    "RouteType",
    "ensure_waypoint_ids",
    "positioned",
    # Clients
    "RoutingClient",
    "ElevationClient",
    "DEFAULT_PROFILE",
    # Services
    "ElevationAggregator",
    "coordinate_elevations",
    "StageBuilder",
    "RouteAssembler",
    "RouteCache",
    "AssemblyResult",
    "stage_windows",
    "StageDivider",
    "HikingPlannerService",
    "PlanResult",
    "RouteSummary",
    "RouteSummaryService",
    "QuickRoute",
    # Profiles
    "HikingProfile",
    "HikingProfileCatalog",
    "PathPreferences",
    "routing_params",
    "TransportMode",
    "TRANSPORT_MODES",
    "transport_mode",
]
