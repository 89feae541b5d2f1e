"""
Track statistics.

Aggregates computed in one pass over a track's segments. Results are
never cached; each call recomputes from the points.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from gpxexplore.features.elevation.processor import ElevationProcessor
from gpxexplore.features.gpx.models import GPXFile, Track, TrackSegment


@dataclass(frozen=True)
class TrackStatistics:
    """Distance, duration and climbing totals of a track or file."""
    distance_m: float = 0.0
    duration_s: float = 0.0
    total_ascent_m: float = 0.0
    total_descent_m: float = 0.0
    point_count: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


def _segments_statistics(
    segments: Iterable[TrackSegment],
    processor: ElevationProcessor
) -> TrackStatistics:
    distance = 0.0
    ascent = 0.0
    descent = 0.0
    count = 0
    start_time = None
    end_time = None

    for segment in segments:
        analysis = processor.process(segment.points)
        # Gaps between segments were not travelled
        distance += analysis.distance_m
        ascent += analysis.total_ascent_m
        descent += analysis.total_descent_m
        count += len(segment.points)

        for point in segment.points:
            if point.timestamp is None:
                continue
            if start_time is None:
                start_time = point.timestamp
            end_time = point.timestamp

    duration = 0.0
    if start_time is not None and end_time is not None:
        duration = max(0.0, (end_time - start_time).total_seconds())

    return TrackStatistics(
        distance_m=distance,
        duration_s=duration,
        total_ascent_m=ascent,
        total_descent_m=descent,
        point_count=count,
        start_time=start_time,
        end_time=end_time,
    )


def compute_track_statistics(
    track: Track,
    processor: Optional[ElevationProcessor] = None
) -> TrackStatistics:
    """
    Compute statistics for one track.

    Args:
        track: Parsed track
        processor: Elevation processor (default settings if omitted)

    Returns:
        TrackStatistics; duration is last minus first timestamped
        point in recorded order, never negative
    """
    return _segments_statistics(track.segments, processor or ElevationProcessor())


def compute_file_statistics(
    gpx_file: GPXFile,
    processor: Optional[ElevationProcessor] = None
) -> TrackStatistics:
    """
    Compute statistics across every track of a file.

    Durations are summed per track so idle time between tracks
    is not counted.
    """
    processor = processor or ElevationProcessor()
    per_track = [compute_track_statistics(t, processor) for t in gpx_file.tracks]

    starts = [s.start_time for s in per_track if s.start_time is not None]
    ends = [s.end_time for s in per_track if s.end_time is not None]

    return TrackStatistics(
        distance_m=sum(s.distance_m for s in per_track),
        duration_s=sum(s.duration_s for s in per_track),
        total_ascent_m=sum(s.total_ascent_m for s in per_track),
        total_descent_m=sum(s.total_descent_m for s in per_track),
        point_count=sum(s.point_count for s in per_track),
        start_time=min(starts) if starts else None,
        end_time=max(ends) if ends else None,
    )
