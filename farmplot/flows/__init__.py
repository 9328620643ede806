"""State machines orchestrating the boundary selection screen."""

from .centering import CenteringFlow, CenteringPhase, MapSurface
from .selection import (
    BoundarySelectionController,
    SessionSnapshot,
    SessionState,
    SessionStatus,
)

__all__ = [
    "BoundarySelectionController",
    "CenteringFlow",
    "CenteringPhase",
    "MapSurface",
    "SessionSnapshot",
    "SessionState",
    "SessionStatus",
]
