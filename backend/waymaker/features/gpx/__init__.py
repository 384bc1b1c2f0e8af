"""
GPX file handling module.

Usage:
    from waymaker.features.gpx import GPXParserService, GPXExporterService

Components:
- GPXParserService: Parse GPX files, pick planner waypoints, simplify tracks
- GPXExporterService: Write a HikingRoute as GPX 1.1
- GPXParseResult, GPXTrack, GPXMetadata: parse results
- GPXExportOptions: what goes into an export
"""

from .exporter import GPXExporterService, GPXExportOptions
from .parser import GPXMetadata, GPXParseResult, GPXParserService, GPXTrack

__all__ = [
    # Services
    "GPXParserService",
    "GPXExporterService",
    # Results / options
    "GPXParseResult",
    "GPXTrack",
    "GPXMetadata",
    "GPXExportOptions",
]
