"""
Tests for environment-driven settings.
"""

import logging

import pytest
from pydantic import ValidationError

from gpxexplore.config import LOG_FORMAT, Settings, configure_logging, settings


class TestDefaults:

    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.smoothing_window == 5
        assert s.grade_lookback == 3
        assert s.max_grade == pytest.approx(0.45)
        assert s.ascent_threshold_m == pytest.approx(1.0)
        assert s.visualization_mode == "effort"
        assert s.min_prominence_m == pytest.approx(10.0)
        assert s.max_elevation_markers == 5
        assert s.use_metric_system is True
        assert s.chart_data_density == pytest.approx(0.5)

    def test_global_instance(self):
        assert isinstance(settings, Settings)


class TestEnvironmentOverrides:

    def test_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("GPXEXPLORE_SMOOTHING_WINDOW", "7")
        monkeypatch.setenv("GPXEXPLORE_VISUALIZATION_MODE", "Gradient")
        monkeypatch.setenv("GPXEXPLORE_USE_METRIC_SYSTEM", "false")
        s = Settings(_env_file=None)
        assert s.smoothing_window == 7
        assert s.visualization_mode == "gradient"
        assert s.use_metric_system is False

    def test_even_window_made_odd(self, monkeypatch):
        monkeypatch.setenv("GPXEXPLORE_SMOOTHING_WINDOW", "4")
        assert Settings(_env_file=None).smoothing_window == 5

    def test_unknown_mode_rejected(self, monkeypatch):
        monkeypatch.setenv("GPXEXPLORE_VISUALIZATION_MODE", "rainbow")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_density_out_of_range(self, monkeypatch):
        monkeypatch.setenv("GPXEXPLORE_CHART_DATA_DENSITY", "3.0")
        assert Settings(_env_file=None).chart_data_density == pytest.approx(0.5)

    @pytest.mark.parametrize("value", ["none", "0", ""])
    def test_unlimited_markers(self, monkeypatch, value):
        monkeypatch.setenv("GPXEXPLORE_MAX_ELEVATION_MARKERS", value)
        assert Settings(_env_file=None).max_elevation_markers is None

    def test_invalid_lookback(self, monkeypatch):
        monkeypatch.setenv("GPXEXPLORE_GRADE_LOOKBACK", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestConfigureLogging:

    def test_level_and_format(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging("debug")

        assert calls["level"] == logging.DEBUG
        assert calls["format"] == LOG_FORMAT

    def test_level_from_settings(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
        monkeypatch.setattr(settings, "log_level", "WARNING")

        configure_logging()

        assert calls["level"] == logging.WARNING
