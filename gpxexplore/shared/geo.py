"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.
"""
import math
from typing import Iterable, List, Tuple

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0


def haversine(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_m(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """Great-circle distance between two points in meters."""
    return haversine(lat1, lon1, lat2, lon2) * 1000


def calculate_gradient(
    distance_km: float,
    elevation_diff_m: float
) -> float:
    """
    Calculate gradient as decimal.

    Args:
        distance_km: Horizontal distance in km
        elevation_diff_m: Elevation difference in meters

    Returns:
        Gradient as decimal (0.10 = 10%)
    """
    if distance_km <= 0:
        return 0.0
    return elevation_diff_m / (distance_km * 1000)


def gradient_to_percent(gradient: float) -> float:
    """Convert gradient decimal to percent."""
    return gradient * 100


def step_distances_m(coordinates: Iterable[Tuple[float, float]]) -> List[float]:
    """
    Distance from each coordinate to the one before it.

    Args:
        coordinates: (lat, lon) pairs in path order

    Returns:
        List of meters, same length as the input; the first entry is 0.0
    """
    steps: List[float] = []
    prev = None

    for lat, lon in coordinates:
        if prev is None:
            steps.append(0.0)
        else:
            steps.append(distance_m(prev[0], prev[1], lat, lon))
        prev = (lat, lon)

    return steps


def calculate_total_distance(coordinates: Iterable[Tuple[float, float]]) -> float:
    """
    Calculate total distance for a path.

    Args:
        coordinates: (lat, lon) pairs in path order

    Returns:
        Total distance in meters
    """
    return sum(step_distances_m(coordinates))
