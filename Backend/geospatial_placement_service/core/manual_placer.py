"""
Manual placement at typed coordinates
Immediate placement with identity orientation, replacing the previous anchor
"""

import math
import logging
from typing import Any, Optional

from .exceptions import CommitRejected, CoordinateInputError
from .interfaces import AnchorService, PositioningSource, VisualAttachCollaborator
from .placement_models import IDENTITY_ORIENTATION, PlacementTarget, TrackingState
from ..utils import metrics as placement_metrics
from ..utils.metrics import SimpleMetrics

logger = logging.getLogger(__name__)


def parse_coordinate(text: Optional[str], name: str) -> float:
    """Parse one typed coordinate"""
    raw = (text or "").strip()
    try:
        value = float(raw)
    except ValueError:
        raise CoordinateInputError(name, raw) from None

    if not math.isfinite(value):
        raise CoordinateInputError(name, raw)
    return value


class ManualPlacer:
    """Places a single anchor on demand, without accuracy gating"""

    def __init__(self, positioning_source: PositioningSource,
                 anchor_service: AnchorService,
                 attach: Optional[VisualAttachCollaborator] = None,
                 metrics: Optional[SimpleMetrics] = None):
        self.positioning_source = positioning_source
        self.anchor_service = anchor_service
        self.attach = attach
        self.metrics = metrics or placement_metrics.metrics
        self.current_anchor: Any = None

    def place_at_text(self, latitude: str, longitude: str, altitude: str) -> Any:
        """Parse typed coordinates and place the anchor there"""
        target = PlacementTarget(
            latitude=parse_coordinate(latitude, "latitude"),
            longitude=parse_coordinate(longitude, "longitude"),
            altitude=parse_coordinate(altitude, "altitude"),
        )
        return self.place_at(target)

    def place_at(self, target: PlacementTarget) -> Any:
        """
        Place an anchor at target, replacing the previous manual anchor.

        Returns:
            The new anchor handle, or None when Earth tracking is not active

        Raises:
            CommitRejected: the anchor service returned no handle
        """
        if self.positioning_source.get_tracking_state() is not TrackingState.TRACKING:
            logger.info("Earth is not tracking yet.")
            return None

        self._remove_current_anchor()

        anchor = self.anchor_service.create_anchor(
            target.latitude,
            target.longitude,
            target.altitude,
            IDENTITY_ORIENTATION.copy()
        )

        if anchor is None:
            logger.error("Failed to place AR object.")
            self.metrics.increment_counter(placement_metrics.COMMIT_FAILURES)
            raise CommitRejected(
                f"Anchor service returned no handle for ({target.latitude}, {target.longitude}, {target.altitude})"
            )

        self.current_anchor = anchor
        self.metrics.increment_counter(placement_metrics.MANUAL_PLACEMENTS)

        if self.attach is not None:
            self.attach.attach(anchor)
        logger.info("AR object placed successfully.")
        return anchor

    def _remove_current_anchor(self):
        if self.current_anchor is None:
            return

        remove_anchor = getattr(self.anchor_service, 'remove_anchor', None)
        if remove_anchor is not None:
            remove_anchor(self.current_anchor)
            logger.debug("Removed previous manual anchor")
        else:
            logger.warning("Anchor service cannot remove anchors; previous anchor released only")
        self.current_anchor = None
