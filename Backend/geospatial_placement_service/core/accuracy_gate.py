"""
Geospatial Placement - Pose Accuracy Gate
Debounces positioning accuracy until it has held long enough
"""

import math
import logging
from typing import Tuple

from .placement_models import AccuracyThresholds, GateState, Verdict, STABILITY_EPSILON

logger = logging.getLogger(__name__)


class PoseAccuracyGate:
    """
    Tick-by-tick check that accuracy stayed within thresholds for the
    required stable duration.

    The gate knows nothing about anchors or tracking; the coordinator calls
    reset() when tracking is lost. It has no terminal state: once confirmed
    it keeps confirming until reset or until a sample fails a threshold.
    """

    def __init__(self):
        self._state = GateState()

    @property
    def state(self) -> GateState:
        return GateState(self._state.accumulated, self._state.is_currently_qualifying)

    @property
    def accumulated(self) -> float:
        return self._state.accumulated

    def evaluate(self, accuracies: Tuple[float, float, float], delta_time: float,
                 thresholds: AccuracyThresholds) -> Verdict:
        """
        Advance the debounce timer with one accuracy sample.

        Args:
            accuracies: (horizontal m, vertical m, yaw deg)
            delta_time: Seconds since the previous tick
            thresholds: Limits and required stable duration

        Returns:
            CONFIRMED once accuracy has qualified continuously for the
            required duration, PENDING otherwise
        """
        if not math.isfinite(delta_time) or delta_time < 0:
            raise ValueError(f"delta_time must be finite and non-negative, got {delta_time}")

        horizontal, vertical, yaw = accuracies

        if thresholds.is_satisfied_by(accuracies):
            if not self._state.is_currently_qualifying:
                self._state.is_currently_qualifying = True
                logger.debug("Accuracy entered thresholds, stabilization started")

            self._state.accumulated = min(
                self._state.accumulated + delta_time,
                thresholds.required_stable_duration
            )
            logger.debug(f"Accuracy OK for {self._state.accumulated:.2f}s")
        else:
            if self._state.is_currently_qualifying:
                logger.info(
                    f"Accuracy not stable. H:{horizontal:.2f} V:{vertical:.2f} Y:{yaw:.2f}"
                )
            self._clear()

        if self._state.accumulated + STABILITY_EPSILON >= thresholds.required_stable_duration:
            return Verdict.CONFIRMED
        return Verdict.PENDING

    def reset(self):
        """Restart the debounce window unconditionally"""
        if self._state.accumulated > 0 or self._state.is_currently_qualifying:
            logger.debug(f"Accuracy gate reset after {self._state.accumulated:.2f}s")
        self._clear()

    def progress(self, thresholds: AccuracyThresholds) -> float:
        """Fraction of the stable duration accumulated so far"""
        return min(1.0, self._state.accumulated / thresholds.required_stable_duration)

    def _clear(self):
        self._state.accumulated = 0.0
        self._state.is_currently_qualifying = False
