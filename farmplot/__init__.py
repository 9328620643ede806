"""Farm boundary selection: area calculation and timed analysis flow."""

from .area import compute_area_acres, signed_planar_area
from .constants import EARTH_RADIUS_M, FALLBACK_CENTER, SQUARE_METERS_PER_ACRE
from .errors import FarmplotError, InvalidInputError
from .flows import (
    BoundarySelectionController,
    CenteringFlow,
    SessionSnapshot,
    SessionStatus,
)
from .models import AnalysisStep, GeoPoint, SelectionResult
from .steps import ANALYSIS_STEPS

__version__ = "0.1.0"

__all__ = [
    "ANALYSIS_STEPS",
    "EARTH_RADIUS_M",
    "FALLBACK_CENTER",
    "SQUARE_METERS_PER_ACRE",
    "AnalysisStep",
    "BoundarySelectionController",
    "CenteringFlow",
    "FarmplotError",
    "GeoPoint",
    "InvalidInputError",
    "SelectionResult",
    "SessionSnapshot",
    "SessionStatus",
    "compute_area_acres",
    "signed_planar_area",
]
