from __future__ import annotations

from farmplot.models import GeoPoint

EARTH_RADIUS_M = 6_371_000.0
SQUARE_METERS_PER_ACRE = 4046.86
AREA_DECIMALS = 3
BOUNDARY_POINT_COUNT = 4

# Mumbai, used when the device location is unavailable.
FALLBACK_CENTER = GeoPoint(latitude=19.0760, longitude=72.8777)
# Initial camera region before the device location resolves.
INDIA_CENTER = GeoPoint(latitude=20.5937, longitude=78.9629)

DEFAULT_ANALYSIS_DELAY_MS = 2500
DEFAULT_STEP_INTERVAL_MS = 1800
DEFAULT_SETTLE_DELAY_MS = 1500
DEFAULT_MAP_ZOOM_MS = 1800
DEFAULT_MESSAGE_DELAY_MS = 400
DEFAULT_CENTER_DELAY_MS = 300

NEXT_SCREEN = "ChoiceScreen"
