"""
Point-of-interest models.

Pure data returned by the POI finders. No service imports.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class RefugeType(str, Enum):
    STAFFED = "staffed"
    UNSTAFFED = "unstaffed"
    BIVOUAC = "bivouac"


class WaterPointType(str, Enum):
    SPRING = "spring"
    FOUNTAIN = "fountain"
    RIVER = "river"
    LAKE = "lake"


class WaterReliability(str, Enum):
    PERMANENT = "permanent"
    SEASONAL = "seasonal"
    UNCERTAIN = "uncertain"


class WaterQuality(str, Enum):
    POTABLE = "potable"
    TREATABLE = "treatable"
    NON_POTABLE = "non-potable"


class Difficulty(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    DIFFICULT = "difficult"
    VERY_DIFFICULT = "very-difficult"


@dataclass
class RefugeService:
    type: str  # meals, shower, wifi, shop, first_aid
    available: bool = True
    description: Optional[str] = None


@dataclass
class Refuge:
    id: str
    name: str
    type: RefugeType
    lat: float
    lng: float
    elevation: int = 0
    capacity: Optional[int] = None
    open_season: Optional[str] = None
    contact: Optional[str] = None
    services: List[RefugeService] = field(default_factory=list)


@dataclass
class WaterPoint:
    id: str
    name: str
    type: WaterPointType
    lat: float
    lng: float
    elevation: int = 0
    reliability: WaterReliability = WaterReliability.UNCERTAIN
    quality: WaterQuality = WaterQuality.TREATABLE
    notes: Optional[str] = None


@dataclass
class Peak:
    id: str
    name: str
    lat: float
    lng: float
    elevation: int = 0
    prominence: Optional[int] = None
    difficulty: Optional[Difficulty] = None
    climbing_grade: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Pass:
    id: str
    name: str
    lat: float
    lng: float
    elevation: int = 0
    type: str = "col"  # col, notch, saddle, step
    connects: List[str] = field(default_factory=list)
    difficulty: Optional[Difficulty] = None
    seasonal_access: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Viewpoint:
    id: str
    name: str
    lat: float
    lng: float
    elevation: int = 0
    direction: Optional[str] = None
    panoramic: bool = False
    visible_peaks: List[str] = field(default_factory=list)
    best_time: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Heritage:
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


@dataclass
class NotableLake:
    id: str
    name: str
    lat: float
    lng: float
    elevation: int = 0
    area: Optional[float] = None
    max_depth: Optional[float] = None
    type: str = "glacial"  # alpine, glacial, reservoir, pond
    activities: List[str] = field(default_factory=list)
    access_difficulty: Difficulty = Difficulty.EASY
    description: Optional[str] = None


@dataclass
class RoutePOIs:
    """Refuges and water points along a route."""
    refuges: List[Refuge] = field(default_factory=list)
    water_points: List[WaterPoint] = field(default_factory=list)
    warning: Optional[str] = None


@dataclass
class EnrichedPOIs:
    """Scenic and cultural POIs along a route."""
    peaks: List[Peak] = field(default_factory=list)
    passes: List[Pass] = field(default_factory=list)
    viewpoints: List[Viewpoint] = field(default_factory=list)
    heritage: List[Heritage] = field(default_factory=list)
    lakes: List[NotableLake] = field(default_factory=list)
    warning: Optional[str] = None
