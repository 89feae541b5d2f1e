"""
Library Configuration

Uses Pydantic Settings for type-safe configuration.
Every tunable can be overridden with a GPXEXPLORE_* environment variable.
"""

import logging
import sys
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Settings(BaseSettings):
    """Library settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Parsing ===
    read_chunk_size: int = Field(
        default=64 * 1024,
        gt=0,
        description="Bytes fed to the XML parser per step"
    )

    # === Elevation / grade ===
    smoothing_window: int = Field(
        default=5,
        ge=1,
        description="Moving-average window for elevation smoothing (odd)"
    )
    grade_lookback: int = Field(
        default=3,
        ge=1,
        description="Samples to look back when computing grade"
    )
    min_grade_distance_m: float = Field(
        default=5.0,
        gt=0,
        description="Minimum horizontal run for a grade to be computed"
    )
    max_grade: float = Field(
        default=0.45,
        gt=0,
        description="Grades are clamped to +/- this ratio"
    )
    ascent_threshold_m: float = Field(
        default=1.0,
        ge=0,
        description="Elevation deltas at or below this are treated as noise"
    )

    # === Visualization ===
    visualization_mode: str = Field(
        default="effort",
        description="Default visualization mode: effort or gradient"
    )
    effort_grade_weight: float = Field(
        default=0.5,
        gt=0,
        le=1,
        description="Weight of |grade| against step distance in effort mode"
    )

    # === Elevation markers ===
    min_prominence_m: float = Field(
        default=10.0,
        ge=0,
        description="Minimum prominence for a Peak/Valley marker"
    )
    max_elevation_markers: Optional[int] = Field(
        default=5,
        description="Upper bound on markers per segment (None = unlimited)"
    )

    # === Display ===
    use_metric_system: bool = Field(default=True)
    chart_data_density: float = Field(
        default=0.5,
        description="Elevation chart density, 0.0 (sparse) to 1.0 (full)"
    )

    @field_validator('smoothing_window')
    @classmethod
    def make_window_odd(cls, v: int) -> int:
        """A centred moving average needs an odd window."""
        if v % 2 == 0:
            return v + 1
        return v

    @field_validator('visualization_mode')
    @classmethod
    def check_visualization_mode(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("effort", "gradient"):
            raise ValueError(f"Unknown visualization mode: {v}")
        return v

    @field_validator('chart_data_density')
    @classmethod
    def clamp_density(cls, v: float) -> float:
        """Out-of-range densities fall back to medium resolution."""
        if v < 0 or v > 1:
            return 0.5
        return v

    @field_validator('max_elevation_markers', mode='before')
    @classmethod
    def parse_marker_limit(cls, v):
        """Accept 'none'/'0'/empty from the environment as unlimited."""
        if isinstance(v, str) and v.strip().lower() in ("", "none", "0"):
            return None
        if v == 0:
            return None
        return v

    model_config = SettingsConfigDict(
        env_prefix="GPXEXPLORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for applications embedding the library.

    Args:
        level: Logging level name; defaults to settings.log_level
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )
