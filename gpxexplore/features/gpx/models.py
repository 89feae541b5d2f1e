"""
GPX domain model.

Immutable values produced by the parser: a file owns its tracks and
waypoints, a track owns its segments, a segment owns its points.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from gpxexplore.shared.constants import (
    ActivityType,
    ACTIVITY_NAME_KEYWORDS,
    GPX_TYPE_TO_ACTIVITY_TYPE,
    WaypointCategory,
    SYMBOL_TO_WAYPOINT_CATEGORY,
    WAYPOINT_NAME_KEYWORDS,
)
from gpxexplore.shared.geo import calculate_total_distance

# GPX rarely encodes accuracy, so every point carries the same nominal value
NOMINAL_ACCURACY_M = 10.0

# Placeholder index carried by segments until their track is finalized
UNASSIGNED_TRACK_INDEX = -1


@dataclass(frozen=True)
class Point:
    """A recorded location sample."""
    latitude: float
    longitude: float
    elevation: float = 0.0
    timestamp: Optional[datetime] = None
    horizontal_accuracy: float = NOMINAL_ACCURACY_M
    vertical_accuracy: float = NOMINAL_ACCURACY_M


@dataclass(frozen=True)
class TrackSegment:
    """
    One contiguous recording session of a track.

    Points keep the recorded GPS order; they are never reordered
    or deduplicated.
    """
    points: Tuple[Point, ...]
    track_index: int = UNASSIGNED_TRACK_INDEX

    @property
    def distance_m(self) -> float:
        """Length of the segment in meters."""
        return calculate_total_distance(
            (p.latitude, p.longitude) for p in self.points
        )


@dataclass(frozen=True)
class Track:
    """A recorded route made of one or more segments."""
    name: str
    type: str
    date: Optional[datetime]
    segments: Tuple[TrackSegment, ...] = ()

    @property
    def all_points(self) -> Tuple[Point, ...]:
        """Points of all segments, in segment order."""
        return tuple(p for segment in self.segments for p in segment.points)

    @property
    def point_count(self) -> int:
        return sum(len(segment.points) for segment in self.segments)

    @property
    def activity_type(self) -> ActivityType:
        """Guess the activity from the track name, then its type."""
        name = self.name.lower()
        for keyword, activity in ACTIVITY_NAME_KEYWORDS:
            if keyword in name:
                return activity
        return GPX_TYPE_TO_ACTIVITY_TYPE.get(
            self.type.strip().lower(), ActivityType.OTHER
        )


@dataclass(frozen=True)
class Waypoint:
    """A standalone point of interest, independent of any track."""
    latitude: float
    longitude: float
    name: str = "POI"
    description: Optional[str] = None
    elevation: Optional[float] = None
    timestamp: Optional[datetime] = None
    symbol: Optional[str] = None

    @property
    def category(self) -> WaypointCategory:
        """Marker category from the GPX symbol, falling back to the name."""
        if self.symbol:
            category = SYMBOL_TO_WAYPOINT_CATEGORY.get(self.symbol.lower())
            if category is not None:
                return category

        name = self.name.lower()
        for keyword, category in WAYPOINT_NAME_KEYWORDS:
            if keyword in name:
                return category
        return WaypointCategory.PIN


@dataclass(frozen=True)
class GPXFile:
    """
    Everything parsed from one GPX document.

    A file with no tracks and no waypoints is valid; it is the uniform
    "nothing to show" result for unreadable or malformed input.
    """
    filename: str
    tracks: Tuple[Track, ...] = ()
    waypoints: Tuple[Waypoint, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.tracks and not self.waypoints

    @property
    def primary_track(self) -> Optional[Track]:
        return self.tracks[0] if self.tracks else None

    @property
    def all_segments(self) -> Tuple[TrackSegment, ...]:
        return tuple(segment for track in self.tracks for segment in track.segments)

    def __repr__(self):
        return (
            f"<GPXFile {self.filename!r} "
            f"({len(self.tracks)} tracks, {len(self.waypoints)} waypoints)>"
        )
