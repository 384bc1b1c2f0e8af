"""
GPX Exporter Service

Serializes a HikingRoute (plus optional refuges and water points) to
GPX 1.1 with gpxpy.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import gpxpy.gpx

from waymaker.config import settings
from waymaker.features.pois.models import Refuge, WaterPoint
from waymaker.features.routing.elevation import coordinate_elevations
from waymaker.features.routing.models import HikingRoute, RouteStage

logger = logging.getLogger(__name__)


@dataclass
class GPXExportOptions:
    """What goes into the exported file."""
    include_waypoints: bool = True
    include_refuges: bool = True
    include_water_points: bool = True
    split_by_stages: bool = False
    include_elevation: bool = True


class GPXExporterService:
    """Service for writing GPX files."""

    # Garmin-style symbols understood by most GPS apps
    SYMBOL_START = "Flag, Green"
    SYMBOL_STAGE_END = "Waypoint"
    SYMBOL_FINISH = "Flag, Red"
    SYMBOL_REFUGE = "Lodge"
    SYMBOL_WATER = "Water Source"

    @classmethod
    def export(
        cls,
        route: HikingRoute,
        options: Optional[GPXExportOptions] = None,
        refuges: Sequence[Refuge] = (),
        water_points: Sequence[WaterPoint] = (),
        now: Optional[datetime] = None
    ) -> str:
        """
        Build a GPX 1.1 document for a route.

        Args:
            route: Route to export
            options: Export options (defaults: one track, markers, POIs, elevation)
            refuges: Refuges to add as waypoints when enabled
            water_points: Water points to add as waypoints when enabled
            now: Metadata timestamp (current UTC time by default)

        Returns:
            GPX XML text
        """
        options = options or GPXExportOptions()

        gpx = gpxpy.gpx.GPX()
        gpx.creator = settings.gpx_creator
        gpx.name = route.name
        gpx.description = f"Itinerary generated by {settings.gpx_creator}"
        gpx.time = now or datetime.now(timezone.utc)

        if options.split_by_stages:
            for stage in route.stages:
                gpx.tracks.append(cls._stage_track(stage, options.include_elevation))
        else:
            gpx.tracks.append(cls._route_track(route, options.include_elevation))

        if options.include_waypoints and route.stages:
            gpx.waypoints.extend(cls._stage_markers(route))
        if options.include_refuges:
            gpx.waypoints.extend(cls._refuge_waypoint(r) for r in refuges)
        if options.include_water_points:
            gpx.waypoints.extend(cls._water_waypoint(w) for w in water_points)

        logger.info(
            f"Exported route {route.id}: {len(gpx.tracks)} tracks, "
            f"{len(gpx.waypoints)} waypoints"
        )
        return gpx.to_xml(version="1.1")

    # =========================================================================
    # Tracks
    # =========================================================================

    @classmethod
    def _stage_track(cls, stage: RouteStage, include_elevation: bool) -> gpxpy.gpx.GPXTrack:
        track = gpxpy.gpx.GPXTrack(
            name=stage.name,
            description=(
                f"Distance: {stage.distance:.2f} km, "
                f"Elevation: +{stage.ascent} m/-{stage.descent} m"
            ),
        )
        coordinates = stage.coordinates
        elevations = (
            coordinate_elevations(coordinates, [stage.elevation_profile])
            if include_elevation else None
        )
        track.segments.append(cls._segment(coordinates, elevations))
        return track

    @classmethod
    def _route_track(cls, route: HikingRoute, include_elevation: bool) -> gpxpy.gpx.GPXTrack:
        track = gpxpy.gpx.GPXTrack(
            name=route.name,
            description=(
                f"Total distance: {route.total_distance:.2f} km, "
                f"Elevation: +{route.total_ascent} m/-{route.total_descent} m"
            ),
        )
        coordinates = route.coordinates
        elevations = (
            coordinate_elevations(coordinates, [s.elevation_profile for s in route.stages])
            if include_elevation else None
        )
        track.segments.append(cls._segment(coordinates, elevations))
        return track

    @staticmethod
    def _segment(
        coordinates: List[List[float]],
        elevations: Optional[List[Optional[float]]]
    ) -> gpxpy.gpx.GPXTrackSegment:
        segment = gpxpy.gpx.GPXTrackSegment()
        for i, coord in enumerate(coordinates):
            elevation = elevations[i] if elevations else None
            segment.points.append(
                gpxpy.gpx.GPXTrackPoint(
                    latitude=coord[1],
                    longitude=coord[0],
                    elevation=round(elevation, 1) if elevation is not None else None,
                )
            )
        return segment

    # =========================================================================
    # Waypoints
    # =========================================================================

    @classmethod
    def _stage_markers(cls, route: HikingRoute) -> List[gpxpy.gpx.GPXWaypoint]:
        """Start, end of every stage but the last, finish."""
        start = route.stages[0].start_point
        finish = route.stages[-1].end_point

        markers = [
            gpxpy.gpx.GPXWaypoint(
                latitude=start.lat, longitude=start.lng,
                name="Start", symbol=cls.SYMBOL_START,
            )
        ]
        for number, stage in enumerate(route.stages[:-1], start=1):
            markers.append(
                gpxpy.gpx.GPXWaypoint(
                    latitude=stage.end_point.lat, longitude=stage.end_point.lng,
                    name=f"End of stage {number}", symbol=cls.SYMBOL_STAGE_END,
                )
            )
        markers.append(
            gpxpy.gpx.GPXWaypoint(
                latitude=finish.lat, longitude=finish.lng,
                name="Finish", symbol=cls.SYMBOL_FINISH,
            )
        )
        return markers

    @classmethod
    def _refuge_waypoint(cls, refuge: Refuge) -> gpxpy.gpx.GPXWaypoint:
        description = f"Type: {refuge.type.value}"
        if refuge.elevation:
            description += f", Altitude: {refuge.elevation} m"
        return gpxpy.gpx.GPXWaypoint(
            latitude=refuge.lat,
            longitude=refuge.lng,
            elevation=refuge.elevation or None,
            name=refuge.name,
            description=description,
            symbol=cls.SYMBOL_REFUGE,
        )

    @classmethod
    def _water_waypoint(cls, point: WaterPoint) -> gpxpy.gpx.GPXWaypoint:
        return gpxpy.gpx.GPXWaypoint(
            latitude=point.lat,
            longitude=point.lng,
            elevation=point.elevation or None,
            name=point.name,
            description=f"Type: {point.type.value}, Quality: {point.quality.value}",
            symbol=cls.SYMBOL_WATER,
        )
