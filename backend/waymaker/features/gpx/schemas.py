"""
GPX-related schemas.

Pydantic models for GPX import/export.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import List, Optional

from waymaker.features.pois.schemas import RefugeSchema, WaterPointSchema
from waymaker.features.routing.schemas import CoordinatesSchema, HikingRouteSchema

from .exporter import GPXExportOptions


class BoundsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


class GPXTrackSchema(BaseModel):
    """A track or route found in the file."""
    model_config = ConfigDict(from_attributes=True)

    name: str
    description: Optional[str] = None
    waypoints: List[CoordinatesSchema] = []
    bounds: Optional[BoundsSchema] = None
    total_distance: float = 0.0


class GPXMetadataSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    time: Optional[datetime] = None


class GPXImportResponse(BaseModel):
    """Parsed GPX plus the waypoints selected for planning."""
    filename: str
    tracks: List[GPXTrackSchema] = []
    routes: List[GPXTrackSchema] = []
    waypoints: List[CoordinatesSchema] = []
    metadata: Optional[GPXMetadataSchema] = None
    selected_waypoints: List[CoordinatesSchema] = []


class GPXExportOptionsSchema(BaseModel):
    include_waypoints: bool = True
    include_refuges: bool = True
    include_water_points: bool = True
    split_by_stages: bool = False
    include_elevation: bool = True

    def to_domain(self) -> GPXExportOptions:
        return GPXExportOptions(**self.model_dump())


class GPXExportRequest(BaseModel):
    """Route to export with optional POIs."""
    route: HikingRouteSchema
    options: GPXExportOptionsSchema = GPXExportOptionsSchema()
    refuges: List[RefugeSchema] = []
    water_points: List[WaterPointSchema] = []
