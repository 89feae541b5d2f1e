"""
File summary for previews.

Builds the counts/totals block shown next to a file's map.
"""

import logging
from typing import Optional

from gpxexplore.config import settings
from gpxexplore.features.gpx.models import GPXFile
from gpxexplore.features.gpx.schemas import GPXSummary
from gpxexplore.features.gpx.statistics import compute_file_statistics
from gpxexplore.shared.formatters import format_distance, format_duration, format_elevation

logger = logging.getLogger(__name__)

NO_TRACKS_MESSAGE = "No tracks found in GPX file"


def build_file_summary(gpx_file: GPXFile) -> GPXSummary:
    """
    Summarize a parsed file.

    Args:
        gpx_file: Parsed GPX file

    Returns:
        GPXSummary with counts and file-wide statistics
    """
    stats = compute_file_statistics(gpx_file)

    summary = GPXSummary(
        filename=gpx_file.filename,
        track_count=len(gpx_file.tracks),
        segment_count=len(gpx_file.all_segments),
        waypoint_count=len(gpx_file.waypoints),
        distance_m=stats.distance_m,
        duration_s=stats.duration_s,
        elevation_gain_m=stats.total_ascent_m,
        elevation_loss_m=stats.total_descent_m,
        points_count=stats.point_count,
        start_time=stats.start_time,
        end_time=stats.end_time,
    )
    logger.debug(
        f"Summary for {summary.filename}: {summary.track_count} tracks, "
        f"{summary.points_count} points"
    )
    return summary


def format_summary_text(summary: GPXSummary, metric: Optional[bool] = None) -> str:
    """
    Render a summary as the preview statistics text.

    Args:
        summary: Output of build_file_summary
        metric: km/m if True, mi/ft otherwise; default from settings

    Returns:
        Multi-line text, or NO_TRACKS_MESSAGE if the file has no tracks
    """
    if not summary.has_tracks:
        return NO_TRACKS_MESSAGE
    if metric is None:
        metric = settings.use_metric_system

    lines = [
        f"GPX File: {summary.filename}",
        "",
        "Contents:",
        f"• {summary.track_count} track(s)",
        f"• {summary.segment_count} segment(s)",
        f"• {summary.waypoint_count} waypoint(s)",
        "",
        "Stats:",
        f"• Distance: {format_distance(summary.distance_m, metric)}",
        f"• Duration: {format_duration(summary.duration_s)}",
        f"• Elevation Gain: {format_elevation(summary.elevation_gain_m, metric)}",
        f"• Elevation Loss: {format_elevation(summary.elevation_loss_m, metric)}",
        f"• Total Points: {summary.points_count}",
    ]
    return "\n".join(lines)
