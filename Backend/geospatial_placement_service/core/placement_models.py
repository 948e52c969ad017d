"""
Geospatial Placement - Data Models
Pose samples, accuracy thresholds, placement target and outcome
"""

import math
import numpy as np
from enum import Enum
from typing import Any, Optional, Tuple
from dataclasses import dataclass, field

from .exceptions import PlacementError

# Tolerance applied when comparing accumulated time with the required duration
STABILITY_EPSILON = 1e-9

# Quaternion layout is [x, y, z, w]
IDENTITY_ORIENTATION = np.array([0.0, 0.0, 0.0, 1.0])


class TrackingState(Enum):
    TRACKING = "tracking"
    NOT_TRACKING = "not_tracking"


class Verdict(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


class PlacementState(Enum):
    IDLE = "idle"
    WAITING = "waiting"
    COMMITTING = "committing"
    PLACED = "placed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PlacementState.PLACED, PlacementState.FAILED)


class OutcomeStatus(Enum):
    UNATTEMPTED = "unattempted"
    PLACED = "placed"
    FAILED = "failed"


def _require_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite")
    return value


@dataclass
class PoseSample:
    """Geospatial camera pose with per-axis accuracy"""
    horizontal_accuracy: float  # meters
    vertical_accuracy: float    # meters
    yaw_accuracy: float         # degrees
    orientation: np.ndarray     # [x, y, z, w] quaternion, East-Up-North frame
    latitude: float
    longitude: float
    altitude: float

    def __post_init__(self):
        """Validate sample on initialization"""
        for name in ("horizontal_accuracy", "vertical_accuracy", "yaw_accuracy"):
            value = _require_finite(name, getattr(self, name))
            if value < 0:
                raise ValueError(f"{name} must be non-negative")
            setattr(self, name, value)

        self.orientation = np.asarray(self.orientation, dtype=float)
        if self.orientation.shape != (4,):
            raise ValueError("Orientation must be quaternion (4D vector)")
        if not np.all(np.isfinite(self.orientation)) or np.linalg.norm(self.orientation) == 0:
            raise ValueError("Orientation must be a finite, non-zero quaternion")

    @property
    def accuracies(self) -> Tuple[float, float, float]:
        return (self.horizontal_accuracy, self.vertical_accuracy, self.yaw_accuracy)

    @property
    def heading_degrees(self) -> float:
        """Rotation about the up (y) axis of the East-Up-North orientation, for diagnostics only"""
        from scipy.spatial.transform import Rotation

        yaw = Rotation.from_quat(self.orientation).as_euler("yxz", degrees=True)[0]
        return float(yaw)


@dataclass(frozen=True)
class AccuracyThresholds:
    """Accuracy limits and the time they must hold before committing"""
    max_horizontal: float
    max_vertical: float
    max_yaw: float
    required_stable_duration: float  # seconds

    def __post_init__(self):
        for name in ("max_horizontal", "max_vertical", "max_yaw", "required_stable_duration"):
            value = _require_finite(name, getattr(self, name))
            if value <= 0:
                raise ValueError(f"{name} must be positive")
            object.__setattr__(self, name, value)

    def is_satisfied_by(self, accuracies: Tuple[float, float, float]) -> bool:
        horizontal, vertical, yaw = accuracies
        return (horizontal <= self.max_horizontal and
                vertical <= self.max_vertical and
                yaw <= self.max_yaw)


@dataclass
class GateState:
    accumulated: float = 0.0
    is_currently_qualifying: bool = False


@dataclass(frozen=True)
class PlacementTarget:
    """Predefined location the anchor must be created at"""
    latitude: float
    longitude: float
    altitude: float

    def __post_init__(self):
        for name in ("latitude", "longitude", "altitude"):
            object.__setattr__(self, name, _require_finite(name, getattr(self, name)))
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError("Latitude must be within [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError("Longitude must be within [-180, 180]")


@dataclass
class PlacementOutcome:
    """Result of a placement attempt, recorded at most once"""
    status: OutcomeStatus = OutcomeStatus.UNATTEMPTED
    anchor: Any = None
    committed_latitude: Optional[float] = None
    committed_longitude: Optional[float] = None
    committed_altitude: Optional[float] = None
    error: Optional[PlacementError] = field(default=None, repr=False)

    @property
    def is_recorded(self) -> bool:
        return self.status is not OutcomeStatus.UNATTEMPTED

    def record_placed(self, anchor: Any, target: PlacementTarget):
        self._ensure_unrecorded()
        self.status = OutcomeStatus.PLACED
        self.anchor = anchor
        self.committed_latitude = target.latitude
        self.committed_longitude = target.longitude
        self.committed_altitude = target.altitude

    def record_failed(self, error: PlacementError):
        self._ensure_unrecorded()
        self.status = OutcomeStatus.FAILED
        self.error = error

    def require_anchor(self) -> Any:
        """Return the placed anchor or raise the recorded failure"""
        if self.status is OutcomeStatus.PLACED:
            return self.anchor
        if self.error is not None:
            raise self.error
        raise LookupError("No placement has been attempted yet")

    def to_dict(self):
        return {
            'status': self.status.value,
            'committed_latitude': self.committed_latitude,
            'committed_longitude': self.committed_longitude,
            'committed_altitude': self.committed_altitude,
            'error': str(self.error) if self.error else None,
        }

    def _ensure_unrecorded(self):
        if self.is_recorded:
            raise RuntimeError(f"Placement outcome already recorded as {self.status.value}")
