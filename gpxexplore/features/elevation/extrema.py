"""
Elevation Extrema Detector

Finds the Peaks and Valleys worth a map marker. Minor bumps are
filtered by prominence so a noisy profile doesn't flood the map.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from gpxexplore.config import settings
from gpxexplore.features.elevation.models import (
    ElevationMarker,
    ProcessedPoint,
    SegmentAnalysis,
)
from gpxexplore.shared.constants import MarkerKind

logger = logging.getLogger(__name__)

# Marker limit placeholder meaning "use settings.max_elevation_markers"
FROM_SETTINGS = -1


def _turning_points(
    elevations: Sequence[float],
    threshold: float
) -> List[Tuple[int, bool]]:
    """
    Threshold zig-zag over an elevation profile.

    A running extreme is confirmed as a turning point once the profile
    moves away from it by more than `threshold`. Equal elevations never
    replace the running extreme, so plateaus resolve to their first index.

    Returns:
        (index, is_peak) for the start anchor, every confirmed turning
        point and the end anchor, in order
    """
    n = len(elevations)
    low = high = 0
    trend = 0  # +1 climbing, -1 descending, 0 undecided
    extreme = 0
    pivots: List[Tuple[int, bool]] = []

    for i in range(1, n):
        e = elevations[i]

        if trend == 0:
            if e > elevations[high]:
                high = i
            if e < elevations[low]:
                low = i
            if elevations[high] - elevations[low] > threshold:
                if high > low:
                    pivots.append((low, False))
                    trend, extreme = 1, high
                else:
                    pivots.append((high, True))
                    trend, extreme = -1, low
        elif trend > 0:
            if e > elevations[extreme]:
                extreme = i
            elif elevations[extreme] - e > threshold:
                pivots.append((extreme, True))
                trend, extreme = -1, i
        else:
            if e < elevations[extreme]:
                extreme = i
            elif e - elevations[extreme] > threshold:
                pivots.append((extreme, False))
                trend, extreme = 1, i

    if trend != 0:
        pivots.append((extreme, trend > 0))
    return pivots


def detect_extrema(
    analysis: Union[SegmentAnalysis, Sequence[ProcessedPoint]],
    min_prominence_m: Optional[float] = None,
    max_markers: Optional[int] = FROM_SETTINGS
) -> List[ElevationMarker]:
    """
    Find significant local maxima (Peak) and minima (Valley).

    Works on the recorded elevations. A candidate is kept when it rises
    above (or drops below) both neighbouring candidates by more than
    `min_prominence_m`. The first and last points anchor the scan but
    are never reported.

    Args:
        analysis: Processed segment (or its points)
        min_prominence_m: Prominence threshold; default from settings
        max_markers: Keep at most this many markers, most prominent
            first (earlier index wins ties). None means unlimited;
            the default comes from settings.

    Returns:
        Markers sorted by point index
    """
    points = analysis.points if isinstance(analysis, SegmentAnalysis) else analysis
    if min_prominence_m is None:
        min_prominence_m = settings.min_prominence_m
    if max_markers == FROM_SETTINGS:
        max_markers = settings.max_elevation_markers

    elevations = [p.elevation for p in points]
    pivots = _turning_points(elevations, min_prominence_m)

    markers: List[ElevationMarker] = []
    # Anchors at both ends are only neighbours, not markers
    for k in range(1, len(pivots) - 1):
        index, is_peak = pivots[k]
        e = elevations[index]
        prominence = min(
            abs(e - elevations[pivots[k - 1][0]]),
            abs(e - elevations[pivots[k + 1][0]]),
        )
        markers.append(ElevationMarker(
            index=index,
            elevation=e,
            kind=MarkerKind.PEAK if is_peak else MarkerKind.VALLEY,
            prominence=prominence,
        ))

    if max_markers is not None and len(markers) > max_markers:
        logger.debug(f"Limiting {len(markers)} elevation markers to {max_markers}")
        strongest = sorted(markers, key=lambda m: (-m.prominence, m.index))[:max_markers]
        markers = sorted(strongest, key=lambda m: m.index)

    return markers
