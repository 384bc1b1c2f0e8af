"""
POI schemas.

Pydantic models for API request/response.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from .models import (
    Difficulty,
    Refuge,
    RefugeService,
    RefugeType,
    WaterPoint,
    WaterPointType,
    WaterQuality,
    WaterReliability,
)


class RefugeServiceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: str
    available: bool = True
    description: Optional[str] = None


class RefugeSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: RefugeType
    lat: float
    lng: float
    elevation: int = 0
    capacity: Optional[int] = None
    open_season: Optional[str] = None
    contact: Optional[str] = None
    services: List[RefugeServiceSchema] = []

    def to_domain(self) -> Refuge:
        data = self.model_dump(exclude={"services"})
        return Refuge(
            **data,
            services=[RefugeService(**s.model_dump()) for s in self.services],
        )


class WaterPointSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: WaterPointType
    lat: float
    lng: float
    elevation: int = 0
    reliability: WaterReliability = WaterReliability.UNCERTAIN
    quality: WaterQuality = WaterQuality.TREATABLE
    notes: Optional[str] = None

    def to_domain(self) -> WaterPoint:
        return WaterPoint(**self.model_dump())


class PeakSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    lat: float
    lng: float
    elevation: int = 0
    prominence: Optional[int] = None
    difficulty: Optional[Difficulty] = None
    climbing_grade: Optional[str] = None
    description: Optional[str] = None


class PassSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    lat: float
    lng: float
    elevation: int = 0
    type: str = "col"
    connects: List[str] = []
    difficulty: Optional[Difficulty] = None
    seasonal_access: Optional[str] = None
    description: Optional[str] = None


class ViewpointSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    lat: float
    lng: float
    elevation: int = 0
    direction: Optional[str] = None
    panoramic: bool = False
    visible_peaks: List[str] = []
    best_time: Optional[str] = None
    description: Optional[str] = None


class HeritageSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    lat: float
    lng: float
    type: str = "monument"
    period: Optional[str] = None
    unesco: bool = False
    entry_fee: bool = False
    opening_hours: Optional[str] = None
    description: Optional[str] = None


class NotableLakeSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    lat: float
    lng: float
    elevation: int = 0
    area: Optional[float] = None
    max_depth: Optional[float] = None
    type: str = "glacial"
    activities: List[str] = []
    access_difficulty: Difficulty = Difficulty.EASY
    description: Optional[str] = None


# =============================================================================
# Requests / responses
# =============================================================================

class POIRequest(BaseModel):
    """A route polyline to search around."""
    coordinates: List[List[float]] = Field(..., description="[[lng, lat], ...]")
    refuge_radius_km: Optional[float] = Field(default=None, gt=0, le=50)
    water_radius_km: Optional[float] = Field(default=None, gt=0, le=50)


class EnrichedPOIRequest(BaseModel):
    coordinates: List[List[float]] = Field(..., description="[[lng, lat], ...]")
    radius_km: Optional[float] = Field(default=None, gt=0, le=50)


class RoutePOIsSchema(BaseModel):
    """Refuges and water points along a route."""
    model_config = ConfigDict(from_attributes=True)

    refuges: List[RefugeSchema] = []
    water_points: List[WaterPointSchema] = []
    warning: Optional[str] = None


class EnrichedPOIsSchema(BaseModel):
    """Scenic and cultural POIs along a route."""
    model_config = ConfigDict(from_attributes=True)

    peaks: List[PeakSchema] = []
    passes: List[PassSchema] = []
    viewpoints: List[ViewpointSchema] = []
    heritage: List[HeritageSchema] = []
    lakes: List[NotableLakeSchema] = []
    warning: Optional[str] = None
