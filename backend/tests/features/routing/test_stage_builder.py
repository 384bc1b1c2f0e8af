"""
Tests for StageBuilder.

Routing and elevation services are fakes (see conftest.py).
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

from waymaker.features.routing import (
    Coordinates,
    ElevationAggregator,
    HikingProfile,
    PathPreferences,
    StageBuilder,
)
from waymaker.shared.exceptions import InsufficientWaypointsError, ServiceNetworkError
from waymaker.shared.geo import path_length


START = Coordinates(lat=45.92, lng=6.86, id="start")
END = Coordinates(lat=45.93, lng=6.88, id="end")


# =============================================================================
# Statistics
# =============================================================================

class TestStageStatistics:
    """Distance, time and elevation of a built stage."""

    def test_distance_from_routing_summary(self, routing_client, aggregator, routed_collection, densify):
        """Stage distance is the routing distance in km, 2 decimals."""
        line = densify([START.to_lnglat(), END.to_lnglat()])
        routing_client.directions = AsyncMock(
            return_value=routed_collection(line, distance_m=12340.0, duration_s=5400.0)
        )
        builder = StageBuilder(routing_client, aggregator)

        stage = asyncio.run(builder.build("Stage 1", [START, END]))

        assert stage.distance == 12.34
        assert stage.estimated_time == 90
        assert stage.name == "Stage 1"

    def test_profile_starts_at_zero_and_spans_geometry(self, stage_builder):
        stage = asyncio.run(stage_builder.build("Stage 1", [START, END]))

        profile = stage.elevation_profile
        assert profile[0].distance == 0.0
        assert profile[-1].distance == pytest.approx(path_length(stage.coordinates))
        assert profile[-1].distance == pytest.approx(stage.distance, abs=0.01)

    def test_elevation_from_routed_geometry(self, stage_builder, elevation_client):
        """Ascent from the elevation service on the routed line."""
        stage = asyncio.run(stage_builder.build("Stage 1", [START, END]))

        # 45.92 → 45.93 at +10 m per 0.001°
        assert stage.ascent == 100
        assert stage.descent == 0
        elevation_client.lookup.assert_awaited_once()
        sampled = elevation_client.lookup.await_args.args[0]
        assert len(sampled) == 11

    def test_identical_elevation_gives_zero(self, routing_client, elevation_client):
        elevation_client.lookup = AsyncMock(side_effect=lambda locs: [1500.0] * len(locs))
        builder = StageBuilder(routing_client, ElevationAggregator(elevation_client))

        stage = asyncio.run(builder.build("Flat", [START, END]))

        assert stage.ascent == 0
        assert stage.descent == 0

    def test_start_and_end_points_are_copies(self, stage_builder):
        stage = asyncio.run(stage_builder.build("Stage 1", [START, END]))

        assert stage.start_point == START
        assert stage.end_point == END
        assert stage.start_point is not START


# =============================================================================
# Cached elevation
# =============================================================================

class TestCachedElevation:
    """Routing responses that already carry ascent/descent."""

    def test_skips_elevation_service(self, routing_client, elevation_client, aggregator, routed_collection):
        line = [[6.86, 45.92, 1200.0], [6.87, 45.925, 1350.0], [6.88, 45.93, 1300.0]]
        routing_client.directions = AsyncMock(
            return_value=routed_collection(line, ascent=420.4, descent=380.6)
        )
        builder = StageBuilder(routing_client, aggregator)

        stage = asyncio.run(builder.build("Stage 1", [START, END]))

        assert stage.ascent == 420
        assert stage.descent == 381
        elevation_client.lookup.assert_not_awaited()

    def test_profile_from_third_ordinate(self, routing_client, aggregator, routed_collection):
        line = [[6.86, 45.92, 1200.0], [6.87, 45.925, 1350.0], [6.88, 45.93, 1300.0]]
        routing_client.directions = AsyncMock(
            return_value=routed_collection(line, ascent=150, descent=50)
        )
        builder = StageBuilder(routing_client, aggregator)

        stage = asyncio.run(builder.build("Stage 1", [START, END]))

        assert [p.elevation for p in stage.elevation_profile] == [1200.0, 1350.0, 1300.0]

    def test_profile_without_elevation_in_2d_geometry(self, routing_client, aggregator, routed_collection):
        line = [[6.86, 45.92], [6.88, 45.93]]
        routing_client.directions = AsyncMock(
            return_value=routed_collection(line, ascent=10, descent=5)
        )
        builder = StageBuilder(routing_client, aggregator)

        stage = asyncio.run(builder.build("Stage 1", [START, END]))

        assert [p.elevation for p in stage.elevation_profile] == [None, None]
        assert stage.elevation_profile[-1].distance > 0


# =============================================================================
# Requests and failures
# =============================================================================

class TestStageBuilderRequests:

    def test_fewer_than_two_waypoints(self, stage_builder, routing_client):
        with pytest.raises(InsufficientWaypointsError):
            asyncio.run(stage_builder.build("Stage 1", [START]))

        routing_client.directions.assert_not_awaited()

    def test_sends_lnglat_and_profile_options(self, stage_builder, routing_client):
        profile = HikingProfile(
            id="gr-official",
            name="Official trails",
            preferences=PathPreferences(
                prefer_official=True, allow_unofficial=False, no_preference=False
            ),
        )

        asyncio.run(stage_builder.build("Stage 1", [START, END], profile))

        routing_client.directions.assert_awaited_once_with(
            [[6.86, 45.92], [6.88, 45.93]],
            profile="foot-hiking",
            options={"avoid_features": ["steps", "ferries"]},
        )

    def test_explicit_stage_id(self, stage_builder):
        stage = asyncio.run(stage_builder.build("Stage 1", [START, END], stage_id="r-stage-1"))
        assert stage.id == "r-stage-1"

    def test_derived_stage_id_is_deterministic(self, stage_builder):
        first = asyncio.run(stage_builder.build("Stage 1", [START, END]))
        second = asyncio.run(stage_builder.build("Stage 1", [START, END]))
        assert first.id == second.id
        assert first.id.startswith("stage-")

    def test_elevation_failure_propagates(self, routing_client, elevation_client):
        elevation_client.lookup = AsyncMock(side_effect=ServiceNetworkError("elevation"))
        builder = StageBuilder(routing_client, ElevationAggregator(elevation_client))

        with pytest.raises(ServiceNetworkError):
            asyncio.run(builder.build("Stage 1", [START, END]))
