"""
Derived elevation types.

These are views computed from a segment's points on request. They
hold no reference back to the GPX model.
"""

from dataclasses import dataclass
from typing import List, Optional

from gpxexplore.shared.constants import MarkerKind, VisualizationMode
from gpxexplore.shared.gradients import classify_grade


@dataclass(frozen=True)
class ProcessedPoint:
    """A track point with its smoothed elevation and grade."""
    index: int
    latitude: float
    longitude: float
    elevation: float
    smoothed_elevation: float
    grade: float
    distance_from_previous_m: float = 0.0
    cumulative_distance_m: float = 0.0
    visualization_value: Optional[float] = None

    @property
    def grade_category(self) -> str:
        """Effort band of the grade (e.g. 'up_3_8')."""
        return classify_grade(self.grade)


@dataclass
class SegmentAnalysis:
    """
    Grade and elevation statistics of one segment.

    Elevation extrema are taken over the smoothed elevations.
    """
    points: List[ProcessedPoint]
    total_ascent_m: float = 0.0
    total_descent_m: float = 0.0
    min_elevation_m: float = 0.0
    max_elevation_m: float = 0.0
    min_grade: float = 0.0
    max_grade: float = 0.0
    distance_m: float = 0.0

    @property
    def net_elevation_change_m(self) -> float:
        """Smoothed elevation change from first to last point."""
        if not self.points:
            return 0.0
        return self.points[-1].smoothed_elevation - self.points[0].smoothed_elevation


@dataclass
class VisualizationResult:
    """Per-point color values in [0, 1] and the range they were scaled from."""
    mode: VisualizationMode
    points: List[ProcessedPoint]
    min_value: float
    max_value: float

    @property
    def values(self) -> List[float]:
        return [p.visualization_value for p in self.points]


@dataclass(frozen=True)
class ElevationMarker:
    """A significant local extremum of a segment."""
    index: int
    elevation: float
    kind: MarkerKind
    prominence: float

    @property
    def title(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class ProfileSample:
    """One sample of the elevation chart, in display units."""
    distance: float
    elevation: float
    index: int
    original_index: int
