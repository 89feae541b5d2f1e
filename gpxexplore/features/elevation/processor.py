"""
Grade/Elevation Processor

Smooths a segment's elevations and derives per-point grade and
ascent/descent totals. Used by the map overlay, the statistics and
the elevation markers.
"""

import logging
from itertools import accumulate
from typing import List, Optional, Sequence, Union

from gpxexplore.config import settings
from gpxexplore.features.elevation.models import ProcessedPoint, SegmentAnalysis
from gpxexplore.features.gpx.models import Point, TrackSegment
from gpxexplore.shared.elevation import calculate_elevation_changes, smooth_elevations
from gpxexplore.shared.geo import calculate_gradient, step_distances_m

logger = logging.getLogger(__name__)


class ElevationProcessor:
    """
    Computes smoothed elevation, grade and ascent/descent for a segment.

    Grade at point i is the rise over run between the smoothed elevation
    at i and at a look-back point. The look-back starts `grade_lookback`
    samples back and is extended until the run is at least
    `min_grade_distance_m`, so near-duplicate GPS fixes never end up in
    the denominator.
    """

    def __init__(
        self,
        smoothing_window: Optional[int] = None,
        grade_lookback: Optional[int] = None,
        min_grade_distance_m: Optional[float] = None,
        max_grade: Optional[float] = None,
        ascent_threshold_m: Optional[float] = None,
    ):
        window = smoothing_window or settings.smoothing_window
        # A centred moving average needs an odd window
        self.smoothing_window = window + 1 if window % 2 == 0 else window
        self.grade_lookback = grade_lookback or settings.grade_lookback
        self.min_grade_distance_m = (
            min_grade_distance_m if min_grade_distance_m is not None
            else settings.min_grade_distance_m
        )
        self.max_grade = max_grade if max_grade is not None else settings.max_grade
        self.ascent_threshold_m = (
            ascent_threshold_m if ascent_threshold_m is not None
            else settings.ascent_threshold_m
        )

    def process(self, points: Sequence[Point]) -> SegmentAnalysis:
        """
        Process one segment.

        Args:
            points: Segment points in recorded order

        Returns:
            SegmentAnalysis; grades and ascent/descent are zero for
            segments with fewer than two points
        """
        if not points:
            return SegmentAnalysis(points=[])

        elevations = [p.elevation for p in points]
        smoothed = smooth_elevations(elevations, self.smoothing_window)
        steps = step_distances_m((p.latitude, p.longitude) for p in points)
        cumulative = list(accumulate(steps))

        grades = self._calculate_grades(smoothed, cumulative)
        ascent, descent = calculate_elevation_changes(smoothed, self.ascent_threshold_m)

        processed = [
            ProcessedPoint(
                index=i,
                latitude=p.latitude,
                longitude=p.longitude,
                elevation=p.elevation,
                smoothed_elevation=smoothed[i],
                grade=grades[i],
                distance_from_previous_m=steps[i],
                cumulative_distance_m=cumulative[i],
            )
            for i, p in enumerate(points)
        ]

        logger.debug(
            f"Processed segment: {len(points)} points, "
            f"ascent {ascent:.1f} m, descent {descent:.1f} m"
        )

        return SegmentAnalysis(
            points=processed,
            total_ascent_m=ascent,
            total_descent_m=descent,
            min_elevation_m=min(smoothed),
            max_elevation_m=max(smoothed),
            min_grade=min(grades),
            max_grade=max(grades),
            distance_m=cumulative[-1],
        )

    def _calculate_grades(
        self,
        smoothed: List[float],
        cumulative: List[float]
    ) -> List[float]:
        """Grade per point as a signed ratio, clamped to +/- max_grade."""
        n = len(smoothed)
        grades = [0.0] * n
        if n < 2:
            return grades

        for i in range(1, n):
            j = max(0, i - self.grade_lookback)
            while j > 0 and cumulative[i] - cumulative[j] < self.min_grade_distance_m:
                j -= 1

            run_m = cumulative[i] - cumulative[j]
            if run_m < self.min_grade_distance_m:
                continue

            grade = calculate_gradient(run_m / 1000, smoothed[i] - smoothed[j])
            grades[i] = min(max(grade, -self.max_grade), self.max_grade)

        # First point has nothing to look back to
        grades[0] = grades[1]
        return grades


def process_segment(
    segment: Union[TrackSegment, Sequence[Point]],
    processor: Optional[ElevationProcessor] = None
) -> SegmentAnalysis:
    """
    Process a segment with the configured defaults.

    Args:
        segment: TrackSegment or a plain sequence of points
        processor: Processor to use instead of a default one

    Returns:
        SegmentAnalysis
    """
    points = segment.points if isinstance(segment, TrackSegment) else segment
    return (processor or ElevationProcessor()).process(points)
