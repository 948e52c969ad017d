"""
Core placement components: accuracy gate, coordinator and tick loop
"""

from .exceptions import PlacementError, ConfigurationError, CommitRejected, CoordinateInputError
from .placement_models import (
    TrackingState, Verdict, PlacementState, OutcomeStatus, PoseSample,
    AccuracyThresholds, GateState, PlacementTarget, PlacementOutcome,
    IDENTITY_ORIENTATION
)
from .accuracy_gate import PoseAccuracyGate
from .placement_coordinator import PlacementCoordinator
from .placement_session import PlacementSession
from .manual_placer import ManualPlacer, parse_coordinate
from .diagnostics import PlacementDiagnostics

__all__ = [
    'PlacementError',
    'ConfigurationError',
    'CommitRejected',
    'CoordinateInputError',
    'TrackingState',
    'Verdict',
    'PlacementState',
    'OutcomeStatus',
    'PoseSample',
    'AccuracyThresholds',
    'GateState',
    'PlacementTarget',
    'PlacementOutcome',
    'IDENTITY_ORIENTATION',
    'PoseAccuracyGate',
    'PlacementCoordinator',
    'PlacementSession',
    'ManualPlacer',
    'parse_coordinate',
    'PlacementDiagnostics'
]
