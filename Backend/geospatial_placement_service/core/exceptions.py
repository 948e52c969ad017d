"""
Placement error taxonomy
Only configuration and commit failures are ever surfaced to callers
"""


class PlacementError(Exception):
    """Base class for placement failures"""


class ConfigurationError(PlacementError):
    """A required collaborator or the placement target is missing"""


class CommitRejected(PlacementError):
    """The anchor service did not return an anchor handle"""


class CoordinateInputError(ValueError):
    """Typed coordinate could not be parsed"""

    def __init__(self, name: str, raw: str):
        self.name = name
        self.raw = raw
        super().__init__(f"Invalid {name}: {raw!r}")
