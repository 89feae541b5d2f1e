"""
Elevation chart profile.

Cumulative distance vs elevation, down-sampled for charting.
"""

from itertools import accumulate
from typing import List, Optional, Sequence

from gpxexplore.config import settings
from gpxexplore.features.elevation.models import ProfileSample
from gpxexplore.features.gpx.models import Point
from gpxexplore.shared.formatters import FEET_PER_METER, METERS_PER_MILE
from gpxexplore.shared.geo import step_distances_m

# Up to this many points are charted at full resolution
FULL_RESOLUTION_POINTS = 500
# Above this many points the stride grows with the point count
DYNAMIC_STRIDE_POINTS = 2000
MAX_STRIDE = 10


def chart_data_stride(density: float) -> int:
    """
    Stride factor for a chart density.

    Args:
        density: 1.0 = full resolution, 0.0 = lowest resolution

    Returns:
        1 at full density, up to MAX_STRIDE at zero density
    """
    if density >= 1.0:
        return 1
    return max(1, int((1.0 - density) * (MAX_STRIDE - 1) + 1))


def calculate_stride(point_count: int, density: float) -> int:
    """Sampling stride for a chart of `point_count` points."""
    if point_count <= FULL_RESOLUTION_POINTS:
        return 1

    stride = chart_data_stride(density)
    if point_count <= DYNAMIC_STRIDE_POINTS:
        return 1 if density >= 1.0 else stride

    return max(1, point_count // DYNAMIC_STRIDE_POINTS) * stride


def build_elevation_profile(
    points: Sequence[Point],
    density: Optional[float] = None,
    metric: Optional[bool] = None
) -> List[ProfileSample]:
    """
    Build the elevation chart series for a run of points.

    Args:
        points: Points in path order (typically all points of a track)
        density: Chart density in [0, 1]; default from settings
        metric: km/m if True, mi/ft otherwise; default from settings

    Returns:
        Samples in display units; the last point is always included
    """
    if not points:
        return []
    if density is None:
        density = settings.chart_data_density
    if metric is None:
        metric = settings.use_metric_system

    cumulative = list(accumulate(
        step_distances_m((p.latitude, p.longitude) for p in points)
    ))
    stride = calculate_stride(len(points), density)

    indices = list(range(0, len(points), stride))
    if indices[-1] != len(points) - 1:
        indices.append(len(points) - 1)

    distance_unit = 1000 if metric else METERS_PER_MILE
    elevation_factor = 1.0 if metric else FEET_PER_METER

    return [
        ProfileSample(
            distance=cumulative[original] / distance_unit,
            elevation=points[original].elevation * elevation_factor,
            index=i,
            original_index=original,
        )
        for i, original in enumerate(indices)
    ]
