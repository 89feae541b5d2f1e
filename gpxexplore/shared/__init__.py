"""
Shared utilities (NOT feature logic).

Usage:
    from gpxexplore.shared import haversine, smooth_elevations
    from gpxexplore.shared.formatters import format_distance
"""
from .geo import (
    haversine,
    distance_m,
    calculate_gradient,
    gradient_to_percent,
    step_distances_m,
    calculate_total_distance,
    EARTH_RADIUS_KM,
)
from .elevation import (
    smooth_elevations,
    calculate_elevation_changes,
    DEFAULT_SMOOTHING_WINDOW,
    DEFAULT_NOISE_THRESHOLD_M,
)
from .formatters import (
    format_distance,
    format_elevation,
    format_duration,
    format_grade,
)
from .gradients import (
    GRADE_THRESHOLDS,
    classify_grade,
)
from .constants import (
    ActivityType,
    WaypointCategory,
    VisualizationMode,
    MarkerKind,
)

__all__ = [
    # geo
    "haversine",
    "distance_m",
    "calculate_gradient",
    "gradient_to_percent",
    "step_distances_m",
    "calculate_total_distance",
    "EARTH_RADIUS_KM",
    # elevation
    "smooth_elevations",
    "calculate_elevation_changes",
    "DEFAULT_SMOOTHING_WINDOW",
    "DEFAULT_NOISE_THRESHOLD_M",
    # formatters
    "format_distance",
    "format_elevation",
    "format_duration",
    "format_grade",
    # gradients
    "GRADE_THRESHOLDS",
    "classify_grade",
    # constants
    "ActivityType",
    "WaypointCategory",
    "VisualizationMode",
    "MarkerKind",
]
