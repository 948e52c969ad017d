"""
Placement profile loading
YAML file describing the target location and accuracy thresholds
"""

import yaml
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..core.exceptions import ConfigurationError
from ..core.placement_models import AccuracyThresholds, PlacementTarget
from .config import Settings, get_settings

logger = logging.getLogger(__name__)

_TARGET_KEYS = {'latitude', 'longitude', 'altitude'}
_THRESHOLD_KEYS = {
    'horizontal_accuracy': 'max_horizontal',
    'vertical_accuracy': 'max_vertical',
    'yaw_accuracy': 'max_yaw',
    'stabilization_duration': 'required_stable_duration',
}
_TOP_LEVEL_KEYS = {'name', 'target', 'thresholds'}


@dataclass(frozen=True)
class PlacementProfile:
    name: str
    target: PlacementTarget
    thresholds: AccuracyThresholds


def _check_keys(section: str, data: Dict[str, Any], allowed) -> None:
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise KeyError(f"Unknown {section} keys: {', '.join(unknown)}")


def parse_placement_profile(data: Optional[Dict[str, Any]],
                            settings: Optional[Settings] = None,
                            target: Optional[PlacementTarget] = None) -> PlacementProfile:
    """
    Build a profile from parsed YAML, falling back to settings for thresholds.

    An explicit target replaces the profile's target section, which then
    becomes optional.
    """
    settings = settings or get_settings()
    data = data or {}
    if not isinstance(data, dict):
        raise ValueError("Placement profile must be a mapping")
    _check_keys("profile", data, _TOP_LEVEL_KEYS)

    target_data = data.get('target') or {}
    _check_keys("target", target_data, _TARGET_KEYS)

    if target is None:
        if not target_data:
            raise ConfigurationError("Placement profile has no target")
        missing = sorted(_TARGET_KEYS - set(target_data))
        if missing:
            raise ConfigurationError(f"Placement target missing: {', '.join(missing)}")

        target = PlacementTarget(
            latitude=float(target_data['latitude']),
            longitude=float(target_data['longitude']),
            altitude=float(target_data['altitude'])
        )

    threshold_data = data.get('thresholds') or {}
    _check_keys("thresholds", threshold_data, _THRESHOLD_KEYS)

    defaults = settings.to_thresholds()
    overrides = {_THRESHOLD_KEYS[key]: float(value) for key, value in threshold_data.items()}
    thresholds = AccuracyThresholds(
        max_horizontal=overrides.get('max_horizontal', defaults.max_horizontal),
        max_vertical=overrides.get('max_vertical', defaults.max_vertical),
        max_yaw=overrides.get('max_yaw', defaults.max_yaw),
        required_stable_duration=overrides.get('required_stable_duration', defaults.required_stable_duration)
    )

    return PlacementProfile(name=str(data.get('name', 'default')), target=target, thresholds=thresholds)


def load_placement_profile(path: Union[str, Path],
                           settings: Optional[Settings] = None,
                           target: Optional[PlacementTarget] = None) -> PlacementProfile:
    """Load a placement profile from a YAML file"""
    path = Path(path)
    with path.open('r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    profile = parse_placement_profile(data, settings, target)
    logger.info(f"Loaded placement profile '{profile.name}' from {path}")
    return profile
