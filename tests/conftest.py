from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

import numpy as np
import pytest

from geospatial_placement_service.core import (
    AccuracyThresholds,
    PlacementTarget,
    PoseSample,
    TrackingState,
)
from geospatial_placement_service.utils.metrics import SimpleMetrics


def make_sample(h=4.0, v=1.0, yaw=2.0, lat=10.0001, lon=20.0001, alt=31.0, orientation=None):
    if orientation is None:
        orientation = [0.0, 0.0, 0.0, 1.0]
    return PoseSample(
        horizontal_accuracy=h,
        vertical_accuracy=v,
        yaw_accuracy=yaw,
        orientation=np.array(orientation, dtype=float),
        latitude=lat,
        longitude=lon,
        altitude=alt,
    )


class FakePositioningSource:
    """Scripted per-tick source; the last frame repeats once the script runs out."""

    def __init__(self, frames=None):
        # Each frame is (TrackingState, PoseSample | None)
        self.frames = list(frames or [(TrackingState.TRACKING, make_sample())])
        self.index = -1
        self.tracking_calls = 0
        self.sample_calls = 0

    def _frame(self):
        return self.frames[min(self.index, len(self.frames) - 1)]

    def get_tracking_state(self):
        self.index += 1
        self.tracking_calls += 1
        return self._frame()[0]

    def get_current_pose_sample(self):
        self.sample_calls += 1
        return self._frame()[1]

    @property
    def calls(self) -> int:
        return self.tracking_calls + self.sample_calls


@dataclass
class FakeAnchor:
    latitude: float
    longitude: float
    altitude: float
    orientation: Any
    tracking_state: str = "tracking"


class FakeAnchorService:
    def __init__(self, fail: bool = False, error: Optional[Exception] = None):
        self.fail = fail
        self.error = error
        self.calls: List[tuple] = []
        self.removed: List[FakeAnchor] = []

    def create_anchor(self, latitude, longitude, altitude, orientation):
        self.calls.append((latitude, longitude, altitude, np.array(orientation)))
        if self.error is not None:
            raise self.error
        if self.fail:
            return None
        return FakeAnchor(latitude, longitude, altitude, orientation)

    def remove_anchor(self, anchor):
        self.removed.append(anchor)


@dataclass
class FakeAttach:
    attached: List[Any] = field(default_factory=list)

    def attach(self, anchor):
        self.attached.append(anchor)


class StepClock:
    """Monotonic clock advancing a fixed step on every read."""

    def __init__(self, step: float = 1.0 / 60.0):
        self.step = step
        self.now = 0.0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def thresholds():
    return AccuracyThresholds(max_horizontal=5.0, max_vertical=1.5, max_yaw=3.0, required_stable_duration=2.0)


@pytest.fixture
def target():
    return PlacementTarget(latitude=10.0, longitude=20.0, altitude=30.0)


@pytest.fixture
def metrics():
    return SimpleMetrics()
