"""
Collaborator protocols consumed by the placement core
Positioning, anchor creation and visual attachment live outside this package
"""

import numpy as np
from typing import Any, Optional, Protocol

from .placement_models import PoseSample, TrackingState


class PositioningSource(Protocol):
    """Yields tracking state and geospatial pose samples each tick"""

    def get_tracking_state(self) -> TrackingState:
        ...

    def get_current_pose_sample(self) -> Optional[PoseSample]:
        ...


class AnchorService(Protocol):
    """
    Turns coordinates and orientation into a persisted anchor handle.

    Services may also offer remove_anchor(anchor); the manual placer uses it
    to drop the anchor it is replacing.
    """

    def create_anchor(self, latitude: float, longitude: float, altitude: float,
                      orientation: np.ndarray) -> Any:
        ...


class VisualAttachCollaborator(Protocol):
    """Parents visual content to a freshly created anchor"""

    def attach(self, anchor: Any) -> None:
        ...
