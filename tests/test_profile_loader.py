from __future__ import annotations

import textwrap

import pytest

from geospatial_placement_service import create_placement_session
from geospatial_placement_service.core import ConfigurationError, PlacementTarget
from geospatial_placement_service.utils.config import Settings
from geospatial_placement_service.utils.profile_loader import load_placement_profile, parse_placement_profile

from conftest import FakeAnchorService, FakePositioningSource


def _write(tmp_path, text):
    p = tmp_path / "profile.yaml"
    p.write_text(textwrap.dedent(text).strip() + "\n", encoding="utf-8")
    return p


def test_load_profile_partial_threshold_override(tmp_path):
    p = _write(
        tmp_path,
        """
        name: plaza
        target:
          latitude: 10.0
          longitude: 20.0
          altitude: 30.0
        thresholds:
          horizontal_accuracy: 3.0
          stabilization_duration: 4.0
        """,
    )

    profile = load_placement_profile(p, Settings())

    assert profile.name == "plaza"
    assert profile.target == PlacementTarget(10.0, 20.0, 30.0)
    assert profile.thresholds.max_horizontal == pytest.approx(3.0)
    assert profile.thresholds.required_stable_duration == pytest.approx(4.0)
    # Not overridden: settings defaults
    assert profile.thresholds.max_vertical == pytest.approx(1.5)
    assert profile.thresholds.max_yaw == pytest.approx(3.0)


def test_unknown_key_raises(tmp_path):
    p = _write(tmp_path, "target: {latitude: 1, longitude: 2, altitude: 3}\nunknown_top_level: 1\n")

    with pytest.raises(KeyError):
        load_placement_profile(p, Settings())


def test_unknown_threshold_key_raises():
    data = {'target': {'latitude': 1, 'longitude': 2, 'altitude': 3}, 'thresholds': {'roll_accuracy': 1}}

    with pytest.raises(KeyError):
        parse_placement_profile(data, Settings())


def test_missing_target_is_configuration_error():
    with pytest.raises(ConfigurationError):
        parse_placement_profile({'thresholds': {}}, Settings())
    with pytest.raises(ConfigurationError):
        parse_placement_profile({'target': {'latitude': 1, 'longitude': 2}}, Settings())


def test_factory_uses_profile_from_settings(tmp_path, metrics):
    p = _write(
        tmp_path,
        """
        target: {latitude: 1.5, longitude: 2.5, altitude: 3.5}
        thresholds: {stabilization_duration: 1.0}
        """,
    )
    settings = Settings(PROFILE_PATH=str(p), TICK_RATE_HZ=30, DIAGNOSTICS_ENABLED=True)

    session = create_placement_session(FakePositioningSource(), FakeAnchorService(), settings=settings, metrics=metrics)

    assert session.coordinator.target == PlacementTarget(1.5, 2.5, 3.5)
    assert session.coordinator.thresholds.required_stable_duration == pytest.approx(1.0)
    assert session.tick_interval == pytest.approx(1.0 / 30.0)
    assert session.diagnostics is not None


def test_factory_explicit_target_wins(metrics):
    settings = Settings(TARGET_LATITUDE=1.0, TARGET_LONGITUDE=2.0, TARGET_ALTITUDE=3.0)
    target = PlacementTarget(10.0, 20.0, 30.0)

    session = create_placement_session(FakePositioningSource(), FakeAnchorService(), target=target,
                                       settings=settings, metrics=metrics)

    assert session.coordinator.target is target
    assert session.diagnostics is None


def test_factory_explicit_target_with_thresholds_only_profile(tmp_path, metrics):
    p = _write(tmp_path, "thresholds: {horizontal_accuracy: 4.0}")
    settings = Settings(PROFILE_PATH=str(p))
    target = PlacementTarget(1.0, 2.0, 3.0)

    session = create_placement_session(FakePositioningSource(), FakeAnchorService(), target=target,
                                       settings=settings, metrics=metrics)

    assert session.coordinator.target is target
    assert session.coordinator.thresholds.max_horizontal == pytest.approx(4.0)


def test_explicit_target_replaces_profile_target():
    data = {'target': {'latitude': 1, 'longitude': 2, 'altitude': 3}}
    target = PlacementTarget(10.0, 20.0, 30.0)

    profile = parse_placement_profile(data, Settings(), target)

    assert profile.target is target
