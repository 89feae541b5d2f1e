"""
GPX file handling module.

Usage:
    from gpxexplore.features.gpx import GPXParser, GPXFile
    from gpxexplore.features.gpx.statistics import compute_track_statistics
    from gpxexplore.features.gpx.summary import build_file_summary

Components:
- GPXFile, Track, TrackSegment, Point, Waypoint: parsed file model
- GPXParser: Streaming GPX parser, tolerant of malformed input
- GPXSummary: Pydantic schema for file counts and totals

statistics and summary depend on the elevation feature and are
imported from their modules directly.
"""

from .models import GPXFile, Point, Track, TrackSegment, Waypoint
from .parser import GPXParser, ParserState
from .schemas import GPXSummary

__all__ = [
    # Model
    "GPXFile",
    "Point",
    "Track",
    "TrackSegment",
    "Waypoint",
    # Services
    "GPXParser",
    "ParserState",
    # Schemas
    "GPXSummary",
]
