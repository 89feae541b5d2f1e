"""
Unified constants for activity types, waypoint categories and
visualization modes.

This module provides a single source of truth for enum naming
across the library.
"""

from enum import Enum


class ActivityType(str, Enum):
    """
    Activity recorded by a track.

    Derived from the track name first, then from its <type> element.
    """
    RUNNING = "running"
    CYCLING = "cycling"
    HIKING = "hiking"
    OTHER = "other"


# Keywords looked up in the lower-cased track name, in priority order
ACTIVITY_NAME_KEYWORDS: list[tuple[str, ActivityType]] = [
    ("run", ActivityType.RUNNING),
    ("bike", ActivityType.CYCLING),
    ("cycling", ActivityType.CYCLING),
    ("hike", ActivityType.HIKING),
    ("hiking", ActivityType.HIKING),
]

# Mapping: GPX <type> value -> our ActivityType
GPX_TYPE_TO_ACTIVITY_TYPE: dict[str, ActivityType] = {
    "running": ActivityType.RUNNING,
    "cycling": ActivityType.CYCLING,
    "hiking": ActivityType.HIKING,
}


class WaypointCategory(str, Enum):
    """Display category for a waypoint marker."""
    FLAG = "flag"
    CAMP = "camp"
    WATER = "water"
    PARKING = "parking"
    INFO = "info"
    DANGER = "danger"
    FOOD = "food"
    SUMMIT = "summit"
    PIN = "pin"


# Mapping: GPX <sym> value (lower-cased) -> WaypointCategory
SYMBOL_TO_WAYPOINT_CATEGORY: dict[str, WaypointCategory] = {
    "flag": WaypointCategory.FLAG,
    "summit": WaypointCategory.FLAG,
    "campground": WaypointCategory.CAMP,
    "camp": WaypointCategory.CAMP,
    "water": WaypointCategory.WATER,
    "drinking-water": WaypointCategory.WATER,
    "parking": WaypointCategory.PARKING,
    "info": WaypointCategory.INFO,
    "information": WaypointCategory.INFO,
    "danger": WaypointCategory.DANGER,
    "caution": WaypointCategory.DANGER,
    "restaurant": WaypointCategory.FOOD,
    "food": WaypointCategory.FOOD,
}

# Keywords looked up in the lower-cased waypoint name, in priority order
WAYPOINT_NAME_KEYWORDS: list[tuple[str, WaypointCategory]] = [
    ("parking", WaypointCategory.PARKING),
    ("car", WaypointCategory.PARKING),
    ("water", WaypointCategory.WATER),
    ("camp", WaypointCategory.CAMP),
    ("summit", WaypointCategory.SUMMIT),
    ("peak", WaypointCategory.SUMMIT),
    ("food", WaypointCategory.FOOD),
    ("restaurant", WaypointCategory.FOOD),
    ("info", WaypointCategory.INFO),
    ("danger", WaypointCategory.DANGER),
    ("caution", WaypointCategory.DANGER),
]


class VisualizationMode(str, Enum):
    """
    How a track line is colored.

    EFFORT combines grade and distance covered; GRADIENT is a pure
    elevation ramp.
    """
    EFFORT = "effort"
    GRADIENT = "gradient"


class MarkerKind(str, Enum):
    """Kind of elevation marker placed on the map."""
    PEAK = "Peak"
    VALLEY = "Valley"
