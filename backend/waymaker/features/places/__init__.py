"""
Place search by name.

Usage:
    from waymaker.features.places import GeocodingClient

    places = await GeocodingClient().search("Lac Blanc")
    waypoint = places[0].to_waypoint()
"""

from .client import GeocodingClient
from .models import Place

__all__ = [
    "GeocodingClient",
    "Place",
]
