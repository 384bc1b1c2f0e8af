"""
Shared test fixtures.

Remote services are replaced by AsyncMock-backed fakes; nothing here
touches the network.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from waymaker.features.routing import (
    Coordinates,
    ElevationAggregator,
    RouteAssembler,
    StageBuilder,
)
from waymaker.shared.geo import path_length


def _densify(coordinates, steps=10):
    """Straight-line interpolation between consecutive [lng, lat] points."""
    line = [list(coordinates[0])]
    for (lng1, lat1), (lng2, lat2) in zip(coordinates, coordinates[1:]):
        for k in range(1, steps + 1):
            t = k / steps
            line.append([lng1 + (lng2 - lng1) * t, lat1 + (lat2 - lat1) * t])
    return line


def _routed_collection(
    line,
    distance_m=None,
    duration_s=None,
    ascent=None,
    descent=None
):
    """Routing service style FeatureCollection for a polyline."""
    if distance_m is None:
        distance_m = path_length(line) * 1000
    if duration_s is None:
        duration_s = distance_m / 1000 * 15 * 60

    properties = {"summary": {"distance": distance_m, "duration": duration_s}}
    if ascent is not None:
        properties["ascent"] = ascent
        properties["descent"] = descent

    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": line},
                "properties": properties,
            }
        ],
    }


def _lat_elevation(locations):
    """Elevation rising with latitude: 1000 m at 45°N, +10 m per 0.001°."""
    return [1000.0 + (lat - 45.0) * 10000 for lat, _ in locations]


@pytest.fixture
def routed_collection():
    return _routed_collection


@pytest.fixture
def densify():
    return _densify


@pytest.fixture
def routing_client():
    """Fake routing client: straight densified lines between waypoints."""
    client = MagicMock()

    async def directions(coordinates, profile="foot-hiking", options=None, radiuses=None):
        return _routed_collection(_densify(coordinates))

    client.directions = AsyncMock(side_effect=directions)
    return client


@pytest.fixture
def elevation_client():
    """Fake elevation lookup, elevation a function of latitude."""
    client = MagicMock()
    client.lookup = AsyncMock(side_effect=_lat_elevation)
    return client


@pytest.fixture
def aggregator(elevation_client):
    return ElevationAggregator(elevation_client)


@pytest.fixture
def stage_builder(routing_client, aggregator):
    return StageBuilder(routing_client, aggregator)


@pytest.fixture
def assembler(stage_builder):
    return RouteAssembler(stage_builder)


@pytest.fixture
def alpine_waypoints():
    """Four waypoints heading north-east near Chamonix."""
    return [
        Coordinates(lat=45.90, lng=6.85, id="wp-a", name="A"),
        Coordinates(lat=45.92, lng=6.87, id="wp-b", name="B"),
        Coordinates(lat=45.94, lng=6.89, id="wp-c", name="C"),
        Coordinates(lat=45.96, lng=6.91, id="wp-d", name="D"),
    ]
