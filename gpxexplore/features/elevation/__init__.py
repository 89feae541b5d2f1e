"""
Elevation analysis module.

Usage:
    from gpxexplore.features.elevation import process_segment, map_visualization
    from gpxexplore.features.elevation import detect_extrema

Components:
- ElevationProcessor: smoothed elevation, grade, ascent/descent per segment
- map_visualization: per-point color values for the effort/gradient modes
- detect_extrema: Peak/Valley markers filtered by prominence
- build_elevation_profile: down-sampled distance/elevation chart series
"""

from .models import (
    ElevationMarker,
    ProcessedPoint,
    ProfileSample,
    SegmentAnalysis,
    VisualizationResult,
)
from .processor import ElevationProcessor, process_segment
from .visualization import effort_score, map_visualization
from .extrema import detect_extrema
from .profile import build_elevation_profile, calculate_stride, chart_data_stride

__all__ = [
    # Models
    "ElevationMarker",
    "ProcessedPoint",
    "ProfileSample",
    "SegmentAnalysis",
    "VisualizationResult",
    # Processing
    "ElevationProcessor",
    "process_segment",
    "effort_score",
    "map_visualization",
    "detect_extrema",
    "build_elevation_profile",
    "calculate_stride",
    "chart_data_stride",
]
