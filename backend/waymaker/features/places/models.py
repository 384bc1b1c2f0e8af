"""Place search results."""

from dataclasses import dataclass
from typing import Optional

from waymaker.features.routing.models import Coordinates


@dataclass
class Place:
    """A named location, ready to become a waypoint."""
    id: str
    name: str
    lat: float
    lng: float
    category: Optional[str] = None  # OSM class: natural, tourism, place, ...
    type: Optional[str] = None  # OSM value: peak, alpine_hut, village, ...

    def to_waypoint(self) -> Coordinates:
        return Coordinates(lat=self.lat, lng=self.lng, id=f"place-{self.id}", name=self.name)
