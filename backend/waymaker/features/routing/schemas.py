"""
Routing schemas.

Pydantic models for API request/response. Responses are built from the
domain dataclasses (from_attributes); requests convert back with to_domain().
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional

from waymaker.features.pois.schemas import RefugeSchema, WaterPointSchema

from .client import DEFAULT_PROFILE
from .models import Coordinates, ElevationPoint, HikingRoute, RouteStage, RouteType
from .profiles import TRANSPORT_MODES, transport_mode


class CoordinatesSchema(BaseModel):
    """A waypoint."""
    model_config = ConfigDict(from_attributes=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    id: Optional[str] = None
    name: Optional[str] = None

    def to_domain(self) -> Coordinates:
        return Coordinates(lat=self.lat, lng=self.lng, id=self.id, name=self.name)


class ElevationPointSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    distance: float
    elevation: Optional[float] = None
    lat: float
    lng: float


class RouteStageSchema(BaseModel):
    """One stage of a route."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    start_point: CoordinatesSchema
    end_point: CoordinatesSchema
    distance: float = Field(..., description="km")
    ascent: int = Field(..., description="m")
    descent: int = Field(..., description="m")
    estimated_time: int = Field(..., description="minutes")
    elevation_profile: List[ElevationPointSchema] = []
    geometry: Dict[str, Any] = {}

    def to_domain(self) -> RouteStage:
        return RouteStage(
            id=self.id,
            name=self.name,
            start_point=self.start_point.to_domain(),
            end_point=self.end_point.to_domain(),
            distance=self.distance,
            ascent=self.ascent,
            descent=self.descent,
            estimated_time=self.estimated_time,
            elevation_profile=[ElevationPoint(**p.model_dump()) for p in self.elevation_profile],
            geometry=self.geometry or {"type": "FeatureCollection", "features": []},
        )


class HikingRouteSchema(BaseModel):
    """A complete route."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: RouteType
    stages: List[RouteStageSchema]
    total_distance: float
    total_ascent: int
    total_descent: int
    min_elevation: float
    max_elevation: float
    estimated_time: int = 0
    geometry: Dict[str, Any] = {}

    def to_domain(self) -> HikingRoute:
        return HikingRoute(
            id=self.id,
            name=self.name,
            type=self.type,
            stages=[s.to_domain() for s in self.stages],
            total_distance=self.total_distance,
            total_ascent=self.total_ascent,
            total_descent=self.total_descent,
            min_elevation=self.min_elevation,
            max_elevation=self.max_elevation,
            geometry=self.geometry or {"type": "FeatureCollection", "features": []},
        )


class PathPreferencesSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    prefer_official: bool
    allow_unofficial: bool
    no_preference: bool


class HikingProfileSchema(BaseModel):
    """A path preference profile."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str = ""
    color: Optional[str] = None
    preferences: PathPreferencesSchema


# =============================================================================
# Requests / responses
# =============================================================================

class PlanRequest(BaseModel):
    """Request to plan a route."""
    waypoints: List[CoordinatesSchema]
    is_loop: bool = False
    stage_count: int = Field(default=1, ge=1, le=30)
    profile_id: Optional[str] = None
    include_pois: bool = True
    split_by_waypoints: bool = False


class PlanResponse(BaseModel):
    """Planned route with nearby refuges and water points."""
    route: HikingRouteSchema
    refuges: List[RefugeSchema] = []
    water_points: List[WaterPointSchema] = []
    warnings: List[str] = []


class RestageRequest(BaseModel):
    """Request to re-cut an existing route."""
    route: HikingRouteSchema
    stage_count: int = Field(..., ge=1, le=30)


class SummaryRequest(BaseModel):
    """One routed GeoJSON feature."""
    feature: Dict[str, Any]


class RouteSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    distance: str
    duration: str
    ascent: Optional[int] = None
    descent: Optional[int] = None


# =============================================================================
# A to B routes
# =============================================================================

class TransportModeSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str
    color: str


class QuickRouteRequest(BaseModel):
    """Start, end and travel mode."""
    start: CoordinatesSchema
    end: CoordinatesSchema
    mode: str = DEFAULT_PROFILE

    @field_validator('mode')
    @classmethod
    def check_mode(cls, v: str) -> str:
        if transport_mode(v) is None:
            known = ", ".join(m.id for m in TRANSPORT_MODES)
            raise ValueError(f"unknown transport mode (known: {known})")
        return v


class QuickRouteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    mode: str
    geometry: Dict[str, Any]
    summary: RouteSummarySchema
