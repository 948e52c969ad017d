"""
Geospatial Placement Service
Accuracy-gated, single-commit placement of geospatial anchors
"""

from typing import Optional

from .core import (
    ConfigurationError, CommitRejected, TrackingState, PoseSample,
    AccuracyThresholds, PlacementTarget, PlacementOutcome, PlacementState,
    PoseAccuracyGate, PlacementCoordinator, PlacementSession, ManualPlacer,
    PlacementDiagnostics
)
from .utils.config import Settings, get_settings
from .utils.metrics import SimpleMetrics
from .utils.profile_loader import load_placement_profile


def create_placement_session(positioning_source, anchor_service,
                             target: Optional[PlacementTarget] = None,
                             thresholds: Optional[AccuracyThresholds] = None,
                             attach=None,
                             settings: Optional[Settings] = None,
                             metrics: Optional[SimpleMetrics] = None) -> PlacementSession:
    """
    Factory function wiring a placement session from settings.

    Explicit target and thresholds win; otherwise the YAML profile named by
    PROFILE_PATH is used, then the TARGET_* and threshold settings.
    """
    settings = settings or get_settings()

    if settings.PROFILE_PATH and (target is None or thresholds is None):
        profile = load_placement_profile(settings.PROFILE_PATH, settings, target)
        target = profile.target
        thresholds = thresholds or profile.thresholds

    coordinator = PlacementCoordinator(
        positioning_source=positioning_source,
        anchor_service=anchor_service,
        target=target or settings.to_target(),
        thresholds=thresholds or settings.to_thresholds(),
        attach=attach,
        metrics=metrics
    )

    diagnostics = None
    if settings.DIAGNOSTICS_ENABLED:
        diagnostics = PlacementDiagnostics(interval=settings.DIAGNOSTICS_INTERVAL)

    return PlacementSession(coordinator, tick_interval=settings.tick_interval, diagnostics=diagnostics)


__all__ = [
    'ConfigurationError',
    'CommitRejected',
    'TrackingState',
    'PoseSample',
    'AccuracyThresholds',
    'PlacementTarget',
    'PlacementOutcome',
    'PlacementState',
    'PoseAccuracyGate',
    'PlacementCoordinator',
    'PlacementSession',
    'ManualPlacer',
    'PlacementDiagnostics',
    'Settings',
    'get_settings',
    'SimpleMetrics',
    'load_placement_profile',
    'create_placement_session'
]
