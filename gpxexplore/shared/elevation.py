"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
"""
from typing import List, Sequence, Tuple

# Default smoothing window size (should be odd)
DEFAULT_SMOOTHING_WINDOW = 5

# Elevation deltas at or below this many meters are GPS noise
DEFAULT_NOISE_THRESHOLD_M = 1.0


def smooth_elevations(
    elevations: Sequence[float],
    window_size: int = DEFAULT_SMOOTHING_WINDOW
) -> List[float]:
    """
    Smooth elevation data using a centred moving average.

    The window shrinks at both ends of the sequence, so the first and
    last samples are averaged over fewer neighbours.

    Args:
        elevations: Raw elevation values
        window_size: Size of smoothing window (odd number recommended)

    Returns:
        Smoothed elevation values (a new list; sequences no longer
        than the window are returned unsmoothed)
    """
    if len(elevations) <= window_size:
        return list(elevations)

    smoothed = []
    half_window = window_size // 2

    for i in range(len(elevations)):
        start = max(0, i - half_window)
        end = min(len(elevations), i + half_window + 1)
        window = elevations[start:end]
        smoothed.append(sum(window) / len(window))

    return smoothed


def calculate_elevation_changes(
    elevations: Sequence[float],
    threshold_m: float = DEFAULT_NOISE_THRESHOLD_M
) -> Tuple[float, float]:
    """
    Calculate total elevation gain and loss.

    Only consecutive deltas larger than the threshold count; smaller
    deltas are dropped entirely, neither gain nor loss.

    Args:
        elevations: List of elevation values
        threshold_m: Noise threshold in meters

    Returns:
        Tuple of (gain_m, loss_m)
    """
    gain = 0.0
    loss = 0.0

    for i in range(1, len(elevations)):
        diff = elevations[i] - elevations[i - 1]
        if diff > threshold_m:
            gain += diff
        elif diff < -threshold_m:
            loss += abs(diff)

    return gain, loss
