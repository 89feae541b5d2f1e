"""
gpx-explore: GPX parsing and elevation analysis.

Usage:
    from gpxexplore import GPXParser, process_segment, map_visualization

    gpx_file = GPXParser.parse_file("ride.gpx")
    analysis = process_segment(gpx_file.all_segments[0])
"""

# gpx models must load before the elevation feature that uses them
from gpxexplore.features.gpx import GPXFile, GPXParser, Point, Track, TrackSegment, Waypoint
from gpxexplore.features.elevation import (
    ElevationProcessor,
    build_elevation_profile,
    detect_extrema,
    map_visualization,
    process_segment,
)
from gpxexplore.features.gpx.statistics import (
    TrackStatistics,
    compute_file_statistics,
    compute_track_statistics,
)
from gpxexplore.features.gpx.summary import build_file_summary, format_summary_text

__version__ = "0.1.0"

__all__ = [
    "GPXFile",
    "GPXParser",
    "Point",
    "Track",
    "TrackSegment",
    "Waypoint",
    "ElevationProcessor",
    "build_elevation_profile",
    "detect_extrema",
    "map_visualization",
    "process_segment",
    "TrackStatistics",
    "compute_file_statistics",
    "compute_track_statistics",
    "build_file_summary",
    "format_summary_text",
]
