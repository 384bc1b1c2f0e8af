"""
GPX Parser Service

Parses GPX 1.0/1.1 documents into waypoints, tracks and routes, and
turns them into the waypoint list fed to the planner.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union

import gpxpy
import gpxpy.gpx

from waymaker.config import settings
from waymaker.features.routing.models import Coordinates
from waymaker.shared.exceptions import GPXParseError
from waymaker.shared.geo import Bounds, calculate_bounds, haversine

logger = logging.getLogger(__name__)


@dataclass
class GPXTrack:
    """A track or a route: ordered points with a name."""
    name: str
    description: Optional[str] = None
    waypoints: List[Coordinates] = field(default_factory=list)
    bounds: Optional[Bounds] = None

    @property
    def total_distance(self) -> float:
        """Length along the points in km."""
        return sum(
            haversine(a.lat, a.lng, b.lat, b.lng)
            for a, b in zip(self.waypoints, self.waypoints[1:])
        )


@dataclass
class GPXMetadata:
    name: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    time: Optional[datetime] = None


@dataclass
class GPXParseResult:
    """Everything extracted from one GPX document."""
    tracks: List[GPXTrack] = field(default_factory=list)
    waypoints: List[Coordinates] = field(default_factory=list)
    routes: List[GPXTrack] = field(default_factory=list)
    metadata: Optional[GPXMetadata] = None

    @property
    def is_empty(self) -> bool:
        return not (self.tracks or self.waypoints or self.routes)


class GPXParserService:
    """Service for parsing GPX files."""

    @staticmethod
    def parse(content: Union[str, bytes]) -> GPXParseResult:
        """
        Parse GPX content.

        Args:
            content: GPX document as text or raw bytes

        Returns:
            GPXParseResult (empty for a well-formed document without points)

        Raises:
            GPXParseError: not well-formed XML, or root element is not <gpx>
        """
        if isinstance(content, bytes):
            try:
                content = content.decode('utf-8-sig')
            except UnicodeDecodeError as e:
                raise GPXParseError(f"Invalid GPX file: not UTF-8 ({e})") from e

        GPXParserService._check_document(content)

        try:
            gpx = gpxpy.parse(content)
        except gpxpy.gpx.GPXException as e:
            logger.error(f"Failed to parse GPX: {e}")
            raise GPXParseError(f"Invalid GPX file: {e}") from e

        result = GPXParseResult(
            waypoints=[
                GPXParserService._to_coordinates(wpt, f"waypoint-{i}")
                for i, wpt in enumerate(gpx.waypoints)
            ],
            tracks=[
                GPXParserService._parse_track(trk, f"track-{i}")
                for i, trk in enumerate(gpx.tracks)
            ],
            routes=[
                GPXParserService._parse_route(rte, f"route-{i}")
                for i, rte in enumerate(gpx.routes)
            ],
            metadata=GPXParserService._extract_metadata(gpx),
        )

        logger.info(
            f"Parsed GPX: {len(result.waypoints)} waypoints, "
            f"{len(result.tracks)} tracks, {len(result.routes)} routes"
        )
        return result

    @staticmethod
    def to_waypoints(
        result: GPXParseResult,
        max_points: Optional[int] = None
    ) -> List[Coordinates]:
        """
        Pick the planner waypoints from a parse result.

        Priority: first route > first track (simplified) > loose waypoints.
        """
        if result.routes:
            return [wp.copy() for wp in result.routes[0].waypoints]
        if result.tracks:
            return GPXParserService.simplify_track_points(
                result.tracks[0].waypoints,
                max_points or settings.gpx_max_points,
            )
        return [wp.copy() for wp in result.waypoints]

    @staticmethod
    def simplify_track_points(
        points: List[Coordinates],
        max_points: int = 20
    ) -> List[Coordinates]:
        """
        Reduce a dense track to at most `max_points` points.

        Keeps the first and last points and samples the interior at a
        fixed stride, starting from floor(len / max_points) and widened
        until the result fits.
        """
        if max_points < 2:
            raise ValueError("max_points must be at least 2")

        total = len(points)
        if total <= max_points:
            return [p.copy() for p in points]

        step = max(1, total // max_points)
        while len(range(step, total - step, step)) > max_points - 2:
            step += 1

        simplified = [points[0].copy()]
        simplified.extend(points[i].copy() for i in range(step, total - step, step))
        simplified.append(points[-1].copy())

        return simplified

    # =========================================================================
    # Internals
    # =========================================================================

    @staticmethod
    def _check_document(content: str) -> None:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise GPXParseError(f"Invalid GPX format: {e}") from e

        # Strip the namespace: {http://www.topografix.com/GPX/1/1}gpx
        tag = root.tag.rsplit('}', 1)[-1]
        if tag != 'gpx':
            raise GPXParseError(f"Not a GPX file (root element <{tag}>)")

    @staticmethod
    def _to_coordinates(point, local_id: str) -> Coordinates:
        return Coordinates(
            id=f"gpx-{local_id}",
            lat=point.latitude,
            lng=point.longitude,
            name=point.name or f"Point {local_id}",
        )

    @staticmethod
    def _parse_track(track: gpxpy.gpx.GPXTrack, local_id: str) -> GPXTrack:
        waypoints = [
            GPXParserService._to_coordinates(pt, f"{local_id}-seg{s}-pt{p}")
            for s, segment in enumerate(track.segments)
            for p, pt in enumerate(segment.points)
        ]
        return GPXTrack(
            name=track.name or f"Track {local_id}",
            description=track.description,
            waypoints=waypoints,
            bounds=calculate_bounds(waypoints),
        )

    @staticmethod
    def _parse_route(route: gpxpy.gpx.GPXRoute, local_id: str) -> GPXTrack:
        waypoints = [
            GPXParserService._to_coordinates(pt, f"{local_id}-pt{p}")
            for p, pt in enumerate(route.points)
        ]
        return GPXTrack(
            name=route.name or f"Route {local_id}",
            description=route.description,
            waypoints=waypoints,
            bounds=calculate_bounds(waypoints),
        )

    @staticmethod
    def _extract_metadata(gpx: gpxpy.gpx.GPX) -> Optional[GPXMetadata]:
        metadata = GPXMetadata(
            name=gpx.name,
            description=gpx.description,
            author=gpx.author_name,
            time=gpx.time,
        )
        if not any((metadata.name, metadata.description, metadata.author, metadata.time)):
            return None
        return metadata
