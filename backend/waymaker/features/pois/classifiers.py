"""
OSM tag → domain mapping for POIs.

Pure functions over Overpass elements. Each `*_from_element` builds one
model; the `classify_*` helpers decide a single attribute from tags.
"""

import re
from typing import Any, Dict, List, Optional

from .models import (
    Difficulty,
    Heritage,
    NotableLake,
    Pass,
    Peak,
    Refuge,
    RefugeService,
    RefugeType,
    Viewpoint,
    WaterPoint,
    WaterPointType,
    WaterQuality,
    WaterReliability,
)

Tags = Dict[str, str]

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def parse_number(value: Optional[str]) -> Optional[float]:
    """Leading number of an OSM tag value ('2450 m' → 2450.0)."""
    if not value:
        return None
    match = _NUMBER.search(value.replace(",", "."))
    return float(match.group()) if match else None


def parse_int(value: Optional[str]) -> Optional[int]:
    number = parse_number(value)
    return int(number) if number is not None else None


def element_position(element: Dict[str, Any]) -> Optional[tuple]:
    """(lat, lng) of a node, or of a way/relation center."""
    if "lat" in element and "lon" in element:
        return element["lat"], element["lon"]
    center = element.get("center")
    if center and "lat" in center and "lon" in center:
        return center["lat"], center["lon"]
    return None


# =============================================================================
# Refuges
# =============================================================================

def classify_refuge(tags: Tags) -> RefugeType:
    if tags.get("tourism") == "alpine_hut" and tags.get("operator"):
        return RefugeType.STAFFED
    if tags.get("amenity") == "shelter":
        return RefugeType.BIVOUAC
    return RefugeType.UNSTAFFED


def refuge_services(tags: Tags) -> List[RefugeService]:
    services = []
    if tags.get("restaurant") == "yes":
        services.append(RefugeService(type="meals"))
    if tags.get("shower") == "yes":
        services.append(RefugeService(type="shower"))
    if tags.get("internet_access") == "yes":
        services.append(RefugeService(type="wifi"))
    return services


def refuge_from_element(element: Dict[str, Any], lat: float, lng: float) -> Refuge:
    tags = element.get("tags", {})
    return Refuge(
        id=str(element["id"]),
        name=tags.get("name") or "Unnamed refuge",
        type=classify_refuge(tags),
        lat=lat,
        lng=lng,
        elevation=parse_int(tags.get("ele")) or 0,
        capacity=parse_int(tags.get("capacity")),
        open_season=tags.get("opening_hours"),
        contact=tags.get("phone") or tags.get("website"),
        services=refuge_services(tags),
    )


# =============================================================================
# Water points
# =============================================================================

def water_point_name(tags: Tags) -> str:
    if tags.get("natural") == "spring":
        return "Spring"
    if tags.get("amenity") == "drinking_water":
        return "Fountain"
    if tags.get("man_made") == "water_well":
        return "Well"
    return "Water point"


def classify_water_point(tags: Tags) -> WaterPointType:
    if tags.get("natural") == "spring":
        return WaterPointType.SPRING
    if tags.get("amenity") == "drinking_water":
        return WaterPointType.FOUNTAIN
    if tags.get("waterway"):
        return WaterPointType.RIVER
    return WaterPointType.LAKE


def classify_reliability(tags: Tags) -> WaterReliability:
    if tags.get("amenity") == "drinking_water" or tags.get("natural") == "spring":
        return WaterReliability.PERMANENT
    if tags.get("seasonal") == "yes" or tags.get("intermittent") == "yes":
        return WaterReliability.SEASONAL
    return WaterReliability.UNCERTAIN


def classify_quality(tags: Tags) -> WaterQuality:
    if tags.get("drinking_water") == "no":
        return WaterQuality.NON_POTABLE
    if tags.get("amenity") == "drinking_water" or tags.get("drinking_water") == "yes":
        return WaterQuality.POTABLE
    return WaterQuality.TREATABLE


def water_point_from_element(element: Dict[str, Any], lat: float, lng: float) -> WaterPoint:
    tags = element.get("tags", {})
    return WaterPoint(
        id=str(element["id"]),
        name=tags.get("name") or water_point_name(tags),
        type=classify_water_point(tags),
        lat=lat,
        lng=lng,
        elevation=parse_int(tags.get("ele")) or 0,
        reliability=classify_reliability(tags),
        quality=classify_quality(tags),
        notes=tags.get("description"),
    )


# =============================================================================
# Enriched POIs
# =============================================================================

def classify_difficulty(tags: Tags) -> Optional[Difficulty]:
    return {
        "difficult": Difficulty.DIFFICULT,
        "moderate": Difficulty.MODERATE,
        "easy": Difficulty.EASY,
    }.get(tags.get("difficulty", ""))


def peak_from_element(element: Dict[str, Any], lat: float, lng: float) -> Peak:
    tags = element.get("tags", {})
    difficulty = Difficulty.VERY_DIFFICULT if tags.get("climbing") else classify_difficulty(tags)
    return Peak(
        id=str(element["id"]),
        name=tags.get("name") or "Unnamed summit",
        lat=lat,
        lng=lng,
        elevation=parse_int(tags.get("ele")) or 0,
        prominence=parse_int(tags.get("prominence")),
        difficulty=difficulty,
        climbing_grade=tags.get("climbing") or tags.get("climbing:grade:french"),
        description=tags.get("description"),
    )


def classify_pass(tags: Tags) -> str:
    name = (tags.get("name") or "").lower()
    if "brèche" in name or "notch" in name:
        return "notch"
    if "seuil" in name or "saddle" in name:
        return "saddle"
    if re.search(r"\bpas\b", name):
        return "step"
    return "col"


def pass_connections(tags: Tags) -> List[str]:
    connections = []
    if tags.get("connects"):
        connections.append(tags["connects"])
    if tags.get("from") and tags.get("to"):
        connections.append(f"{tags['from']} - {tags['to']}")
    return connections


def pass_from_element(element: Dict[str, Any], lat: float, lng: float) -> Pass:
    tags = element.get("tags", {})
    return Pass(
        id=str(element["id"]),
        name=tags.get("name") or "Unnamed pass",
        lat=lat,
        lng=lng,
        elevation=parse_int(tags.get("ele")) or 0,
        type=classify_pass(tags),
        connects=pass_connections(tags),
        difficulty=classify_difficulty(tags),
        seasonal_access=tags.get("seasonal") or tags.get("opening_hours"),
        description=tags.get("description"),
    )


def best_view_time(tags: Tags) -> str:
    direction = (tags.get("direction") or "").lower()
    if direction in ("e", "east", "est") or "east" in direction:
        return "morning"
    if direction in ("w", "west", "ouest") or "west" in direction:
        return "evening"
    return "all day"


def viewpoint_from_element(element: Dict[str, Any], lat: float, lng: float) -> Viewpoint:
    tags = element.get("tags", {})
    name = tags.get("name") or "Viewpoint"
    return Viewpoint(
        id=str(element["id"]),
        name=name,
        lat=lat,
        lng=lng,
        elevation=parse_int(tags.get("ele")) or 0,
        direction=tags.get("direction"),
        panoramic=tags.get("panoramic") == "yes" or "panoram" in name.lower(),
        visible_peaks=tags["visible_peaks"].split(";") if tags.get("visible_peaks") else [],
        best_time=tags.get("best_time") or best_view_time(tags),
        description=tags.get("description"),
    )


HERITAGE_TYPES = {
    "castle": ("castle", "Castle"),
    "ruins": ("ruins", "Ruins"),
    "chapel": ("chapel", "Chapel"),
    "monument": ("monument", "Monument"),
    "archaeological_site": ("archaeological_site", "Archaeological site"),
}

GENERIC_HERITAGE_NAME = "Historic site"


def classify_heritage(tags: Tags) -> str:
    historic = tags.get("historic", "")
    if historic in HERITAGE_TYPES:
        return HERITAGE_TYPES[historic][0]
    if tags.get("place") == "village":
        return "village"
    return "monument"


def heritage_name(tags: Tags) -> str:
    historic = tags.get("historic", "")
    if historic in HERITAGE_TYPES and historic != "archaeological_site":
        return HERITAGE_TYPES[historic][1]
    return GENERIC_HERITAGE_NAME


def heritage_from_element(element: Dict[str, Any], lat: float, lng: float) -> Heritage:
    tags = element.get("tags", {})
    return Heritage(
        id=str(element["id"]),
        name=tags.get("name") or heritage_name(tags),
        lat=lat,
        lng=lng,
        type=classify_heritage(tags),
        period=tags.get("start_date") or tags.get("historic:period"),
        unesco=tags.get("unesco") == "yes" or tags.get("heritage") == "world_heritage",
        entry_fee=tags.get("fee") == "yes",
        opening_hours=tags.get("opening_hours"),
        description=tags.get("description") or tags.get("wikipedia"),
    )


def classify_lake(tags: Tags) -> str:
    name = (tags.get("name") or "").lower()
    if tags.get("water") == "reservoir":
        return "reservoir"
    if "étang" in name or "pond" in name:
        return "pond"
    elevation = parse_number(tags.get("ele"))
    if elevation is not None and elevation > 1500:
        return "alpine"
    return "glacial"


def lake_activities(tags: Tags) -> List[str]:
    activities = []
    if tags.get("swimming") == "yes":
        activities.append("swimming")
    if tags.get("fishing") == "yes":
        activities.append("fishing")
    if tags.get("boat") == "yes":
        activities.append("boating")
    return activities


def lake_access(tags: Tags) -> Difficulty:
    access = tags.get("access") or ""
    if "difficult" in access:
        return Difficulty.DIFFICULT
    if "moderate" in access:
        return Difficulty.MODERATE
    return Difficulty.EASY


def lake_from_element(element: Dict[str, Any], lat: float, lng: float) -> NotableLake:
    tags = element.get("tags", {})
    return NotableLake(
        id=str(element["id"]),
        name=tags.get("name") or "Lake",
        lat=lat,
        lng=lng,
        elevation=parse_int(tags.get("ele")) or 0,
        area=parse_number(tags.get("area")),
        max_depth=parse_number(tags.get("maxdepth")),
        type=classify_lake(tags),
        activities=lake_activities(tags),
        access_difficulty=lake_access(tags),
        description=tags.get("description"),
    )
