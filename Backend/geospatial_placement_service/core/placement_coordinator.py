"""
Geospatial Placement - Placement Coordinator
Accuracy-gated, single-commit anchor placement driven one tick at a time
"""

import math
import logging
from typing import Any, Optional

from .accuracy_gate import PoseAccuracyGate
from .exceptions import CommitRejected, ConfigurationError
from .interfaces import AnchorService, PositioningSource, VisualAttachCollaborator
from .placement_models import (
    AccuracyThresholds, GateState, PlacementOutcome, PlacementState,
    PlacementTarget, PoseSample, TrackingState, Verdict
)
from ..utils import metrics as placement_metrics
from ..utils.metrics import SimpleMetrics

logger = logging.getLogger(__name__)


class PlacementCoordinator:
    """
    Decides, exactly once, when to create the anchor at the placement target.

    States: IDLE -> WAITING -> COMMITTING -> PLACED | FAILED. Terminal
    states make no further calls to the positioning source or the anchor
    service. Re-arming for a new target requires a new coordinator.
    """

    def __init__(self,
                 positioning_source: Optional[PositioningSource],
                 anchor_service: Optional[AnchorService],
                 target: Optional[PlacementTarget],
                 thresholds: AccuracyThresholds,
                 attach: Optional[VisualAttachCollaborator] = None,
                 gate: Optional[PoseAccuracyGate] = None,
                 metrics: Optional[SimpleMetrics] = None):
        self.positioning_source = positioning_source
        self.anchor_service = anchor_service
        self.target = target
        self.thresholds = thresholds
        self.attach = attach

        self.gate = gate or PoseAccuracyGate()
        self.metrics = metrics or placement_metrics.metrics

        self._state = PlacementState.IDLE
        self._outcome = PlacementOutcome()
        self._last_sample: Optional[PoseSample] = None

    @property
    def state(self) -> PlacementState:
        return self._state

    @property
    def outcome(self) -> PlacementOutcome:
        return self._outcome

    @property
    def is_terminal(self) -> bool:
        return self._state.is_terminal

    @property
    def placed_anchor(self) -> Any:
        """Anchor handle for attaching content, None until placed"""
        return self._outcome.anchor

    @property
    def last_sample(self) -> Optional[PoseSample]:
        return self._last_sample

    @property
    def gate_state(self) -> GateState:
        return self.gate.state

    def tick(self, delta_time: float) -> PlacementState:
        """
        Run one step of the placement protocol.

        Args:
            delta_time: Seconds elapsed since the previous tick

        Returns:
            Coordinator state after this tick

        Raises:
            ConfigurationError: a collaborator or the target is missing
        """
        if self._state.is_terminal:
            return self._state

        if not math.isfinite(delta_time) or delta_time < 0:
            raise ValueError(f"delta_time must be finite and non-negative, got {delta_time}")

        self.check_configuration()

        if self._state is PlacementState.IDLE:
            self._state = PlacementState.WAITING
            logger.info("Waiting for stable geospatial accuracy")

        self.metrics.increment_counter(placement_metrics.TICKS)

        if self.positioning_source.get_tracking_state() is not TrackingState.TRACKING:
            self._handle_tracking_lost("Earth tracking not active, waiting...")
            return self._state

        sample = self.positioning_source.get_current_pose_sample()
        if sample is None:
            self._handle_tracking_lost("Tracking reported without a pose sample, waiting...")
            return self._state

        self._last_sample = sample
        was_qualifying = self.gate.state.is_currently_qualifying
        verdict = self.gate.evaluate(sample.accuracies, delta_time, self.thresholds)
        self.metrics.set_gauge(placement_metrics.STABLE_SECONDS, self.gate.accumulated)

        if was_qualifying and not self.gate.state.is_currently_qualifying:
            self.metrics.increment_counter(placement_metrics.ACCURACY_RESETS)

        if verdict is Verdict.CONFIRMED:
            self.metrics.increment_counter(placement_metrics.CONFIRMATIONS)
            self._state = PlacementState.COMMITTING
            self._commit(sample)

        return self._state

    def check_configuration(self):
        """Raise ConfigurationError, and fail the attempt, if a collaborator or the target is missing"""
        missing = [name for name, value in (
            ('positioning source', self.positioning_source),
            ('anchor service', self.anchor_service),
            ('placement target', self.target),
        ) if value is None]

        if not missing:
            return

        error = ConfigurationError(f"Missing {', '.join(missing)}")
        logger.error(f"❌ Placement misconfigured: {error}")
        self.metrics.increment_counter(placement_metrics.CONFIGURATION_ERRORS)
        self._state = PlacementState.FAILED
        self._outcome.record_failed(error)
        raise error

    def _handle_tracking_lost(self, message: str):
        logger.debug(message)
        self.metrics.increment_counter(placement_metrics.TRACKING_LOST)
        self.gate.reset()
        self.metrics.set_gauge(placement_metrics.STABLE_SECONDS, 0.0)

    def _commit(self, sample: PoseSample):
        """Create the anchor at the target, facing the current device orientation"""
        target = self.target

        try:
            anchor = self._create_anchor(target, sample)
        except CommitRejected as error:
            logger.warning(f"⚠️ Failed to place anchor: {error}")
            self._fail_commit(error)
            return

        self._state = PlacementState.PLACED
        self._outcome.record_placed(anchor, target)
        self.metrics.increment_counter(placement_metrics.COMMITS)
        logger.info(
            f"📍 Anchor placed at Lat:{target.latitude}, Lon:{target.longitude}, Alt:{target.altitude}"
        )

        if self.attach is not None:
            try:
                self.attach.attach(anchor)
            except Exception as e:
                logger.error(f"Failed to attach content to placed anchor: {e}")

    def _create_anchor(self, target: PlacementTarget, sample: PoseSample) -> Any:
        try:
            anchor = self.anchor_service.create_anchor(
                target.latitude,
                target.longitude,
                target.altitude,
                sample.orientation
            )
        except Exception as e:
            raise CommitRejected(f"Anchor service raised: {e}") from e

        if anchor is None:
            raise CommitRejected("Anchor service returned no handle")
        return anchor

    def _fail_commit(self, error: CommitRejected):
        self._state = PlacementState.FAILED
        self._outcome.record_failed(error)
        self.metrics.increment_counter(placement_metrics.COMMIT_FAILURES)

    def get_status_summary(self):
        """Get current placement status"""
        gate_state = self.gate.state
        return {
            'state': self._state.value,
            'stable_seconds': gate_state.accumulated,
            'is_qualifying': gate_state.is_currently_qualifying,
            'progress': self.gate.progress(self.thresholds),
            'outcome': self._outcome.to_dict(),
            'metrics': self.metrics.get_metrics()
        }
