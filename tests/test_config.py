from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from geospatial_placement_service.core import ConfigurationError, PlacementTarget
from geospatial_placement_service.utils.config import Settings
from geospatial_placement_service.utils.logging_config import build_logging_config, setup_logging


def test_defaults_match_field_tuned_thresholds():
    thresholds = Settings().to_thresholds()

    assert thresholds.max_horizontal == pytest.approx(5.0)
    assert thresholds.max_vertical == pytest.approx(1.5)
    assert thresholds.max_yaw == pytest.approx(3.0)
    assert thresholds.required_stable_duration == pytest.approx(2.0)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PLACEMENT_STABILIZATION_DURATION", "3.5")
    monkeypatch.setenv("PLACEMENT_TICK_RATE_HZ", "30")

    settings = Settings()

    assert settings.to_thresholds().required_stable_duration == pytest.approx(3.5)
    assert settings.tick_interval == pytest.approx(1.0 / 30.0)


def test_thresholds_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(YAW_ACCURACY_THRESHOLD=0)


def test_target_from_settings():
    settings = Settings(TARGET_LATITUDE=10.0, TARGET_LONGITUDE=20.0, TARGET_ALTITUDE=30.0)

    assert settings.to_target() == PlacementTarget(10.0, 20.0, 30.0)
    assert Settings().to_target() is None


def test_partial_target_is_configuration_error():
    with pytest.raises(ConfigurationError):
        Settings(TARGET_LATITUDE=10.0).to_target()


def test_logging_config_adds_file_handlers_with_log_dir(tmp_path):
    config = build_logging_config(Settings(LOG_DIR=str(tmp_path / "logs")))

    assert set(config['handlers']) == {'console', 'file', 'error_file'}
    assert set(config['formatters']) == {'detailed'}
    assert (tmp_path / "logs").is_dir()
    assert set(build_logging_config(Settings())['handlers']) == {'console'}


def test_setup_logging_applies_level():
    package_logger = logging.getLogger("geospatial_placement_service")
    saved = (package_logger.level, package_logger.propagate, list(package_logger.handlers))
    try:
        setup_logging(Settings(LOG_LEVEL="DEBUG"))
        assert package_logger.level == logging.DEBUG
        assert package_logger.handlers
    finally:
        package_logger.setLevel(saved[0])
        package_logger.propagate = saved[1]
        package_logger.handlers[:] = saved[2]
