"""
Formatting utilities for display.

Used by the file summary and the elevation chart labels.
"""

from gpxexplore.shared.geo import gradient_to_percent

METERS_PER_MILE = 1609.34
FEET_PER_METER = 3.28084


def format_distance(meters: float, metric: bool = True) -> str:
    """
    Format distance.

    Args:
        meters: Distance in meters
        metric: Kilometers if True, miles otherwise

    Returns:
        Formatted string (e.g., '12.35 km' or '7.67 mi')
    """
    if metric:
        return f"{meters / 1000:.2f} km"
    return f"{meters / METERS_PER_MILE:.2f} mi"


def format_elevation(meters: float, metric: bool = True) -> str:
    """
    Format elevation.

    Args:
        meters: Elevation in meters
        metric: Meters if True, feet otherwise

    Returns:
        Formatted string (e.g., '850 m' or '2789 ft')
    """
    if metric:
        return f"{meters:.0f} m"
    return f"{meters * FEET_PER_METER:.0f} ft"


def format_duration(seconds: float) -> str:
    """
    Format a duration in abbreviated units.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string (e.g., '1h 2m 3s', '45m', '0s')
    """
    if seconds < 0:
        return "—"

    total = int(seconds)
    h = total // 3600
    m = (total % 3600) // 60
    s = total % 60

    parts = []
    if h:
        parts.append(f"{h}h")
    if m:
        parts.append(f"{m}m")
    if s or not parts:
        parts.append(f"{s}s")
    return " ".join(parts)


def format_grade(grade: float) -> str:
    """Format a grade ratio as a percentage (e.g., '12.5%')."""
    return f"{gradient_to_percent(grade):.1f}%"
