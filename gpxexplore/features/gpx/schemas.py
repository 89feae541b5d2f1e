"""
GPX-related schemas.

Pydantic models for file summaries.
"""

from datetime import datetime
from pydantic import BaseModel
from typing import Optional


class GPXSummary(BaseModel):
    """Counts and totals of a parsed GPX file."""

    filename: str

    # Contents
    track_count: int = 0
    segment_count: int = 0
    waypoint_count: int = 0

    # Metrics
    distance_m: float = 0.0
    duration_s: float = 0.0
    elevation_gain_m: float = 0.0
    elevation_loss_m: float = 0.0

    # Points count
    points_count: int = 0

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def has_tracks(self) -> bool:
        return self.track_count > 0
