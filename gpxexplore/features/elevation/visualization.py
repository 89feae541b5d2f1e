"""
Visualization Value Mapper

Maps a processed segment to one value in [0, 1] per point for the
color ramp that draws the track line. The same mapping is used by
every renderer so a track looks identical wherever it is drawn.
"""

from dataclasses import replace
from typing import Optional, Union

from gpxexplore.config import settings
from gpxexplore.features.elevation.models import SegmentAnalysis, VisualizationResult
from gpxexplore.shared.constants import VisualizationMode

# Value used when a segment has no range to scale over
FLAT_VALUE = 0.5


def effort_score(grade: float, distance_m: float, grade_weight: float) -> float:
    """
    Raw effort of one step.

    |grade|^w * distance^(1-w). With w = 0.5 this is the square root of
    the rise covered by the step, so a steep short step and a gradual
    long step of the same rise score the same. Uses the grade magnitude
    only; climbs and descents of equal steepness score alike.

    Args:
        grade: Grade as a ratio
        distance_m: Distance covered by the step in meters
        grade_weight: w in (0, 1]

    Returns:
        Non-negative effort score
    """
    if distance_m <= 0:
        return 0.0
    return abs(grade) ** grade_weight * distance_m ** (1 - grade_weight)


def _gradient_values(analysis: SegmentAnalysis) -> tuple:
    low = analysis.min_elevation_m
    high = analysis.max_elevation_m
    if high <= low:
        return [FLAT_VALUE] * len(analysis.points), low, high

    span = high - low
    values = [(p.smoothed_elevation - low) / span for p in analysis.points]
    return values, low, high


def _effort_values(analysis: SegmentAnalysis, grade_weight: float) -> tuple:
    points = analysis.points
    steps = [p.distance_from_previous_m for p in points]
    if len(steps) > 1:
        # The first point has no step of its own; borrow the next one
        steps[0] = steps[1]

    raw = [effort_score(p.grade, d, grade_weight) for p, d in zip(points, steps)]
    high = max(raw, default=0.0)
    if high <= 0:
        return [0.0] * len(points), 0.0, 0.0

    values = [min(r / high, 1.0) for r in raw]
    return values, 0.0, high


def map_visualization(
    analysis: SegmentAnalysis,
    mode: Union[VisualizationMode, str, None] = None,
    grade_weight: Optional[float] = None
) -> VisualizationResult:
    """
    Compute the color value of every point of a processed segment.

    GRADIENT rescales smoothed elevation between the segment's own
    min and max; a flat segment maps every point to 0.5. EFFORT scales
    the per-step effort score between 0 and the segment's maximum.

    Args:
        analysis: Output of ElevationProcessor.process
        mode: Visualization mode (enum or its value); default from settings
        grade_weight: Effort weight of |grade|; default from settings

    Returns:
        VisualizationResult with the points' visualization_value filled in

    Raises:
        ValueError: If the mode is unknown
    """
    mode = VisualizationMode(mode or settings.visualization_mode)

    if mode == VisualizationMode.GRADIENT:
        values, low, high = _gradient_values(analysis)
    else:
        weight = grade_weight if grade_weight is not None else settings.effort_grade_weight
        values, low, high = _effort_values(analysis, weight)

    points = [
        replace(p, visualization_value=v) for p, v in zip(analysis.points, values)
    ]
    return VisualizationResult(mode=mode, points=points, min_value=low, max_value=high)
