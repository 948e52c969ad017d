"""
Placement diagnostics
Advisory per-tick logging of device pose, accuracy and anchor state
"""

import logging
from typing import Optional

from .placement_models import PlacementState

logger = logging.getLogger(__name__)


class PlacementDiagnostics:
    """Logs what the coordinator already sampled; never queries collaborators"""

    def __init__(self, interval: float = 0.0, log: Optional[logging.Logger] = None):
        if interval < 0:
            raise ValueError("interval must be non-negative")

        self.interval = interval
        self.log = log or logger
        self._since_last = 0.0
        self._last_state: Optional[PlacementState] = None
        self.lines_emitted = 0

    def log_tick(self, coordinator, delta_time: float) -> bool:
        """Emit a diagnostic snapshot if the interval elapsed; returns whether it did"""
        self._since_last += delta_time
        state = coordinator.state
        state_changed = state is not self._last_state
        self._last_state = state

        if not state_changed and self._since_last < self.interval:
            return False
        self._since_last = 0.0

        sample = coordinator.last_sample
        if sample is not None:
            self._emit(
                f"Device Geospatial Pose => Lat: {sample.latitude}, Lon: {sample.longitude}, "
                f"Alt: {sample.altitude}, Heading: {sample.heading_degrees:.1f}°"
            )
            self._emit(
                f"Accuracy => Horizontal: {sample.horizontal_accuracy}m, "
                f"Vertical: {sample.vertical_accuracy}m, Yaw: {sample.yaw_accuracy}°"
            )

        gate_state = coordinator.gate_state
        self._emit(
            f"Placement {state.value}: stable for {gate_state.accumulated:.2f}s "
            f"of {coordinator.thresholds.required_stable_duration:.2f}s"
        )

        if state is PlacementState.PLACED:
            outcome = coordinator.outcome
            tracking_state = getattr(outcome.anchor, 'tracking_state', 'unknown')
            self._emit(
                f"Anchor Placed at Lat={outcome.committed_latitude}, Lon={outcome.committed_longitude}, "
                f"Alt={outcome.committed_altitude}. Tracking State: {tracking_state}"
            )

        return True

    def _emit(self, message: str):
        self.log.info(message)
        self.lines_emitted += 1
