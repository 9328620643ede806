"""Planar approximation of the area enclosed by a four-point farm boundary."""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from farmplot.constants import (
    AREA_DECIMALS,
    BOUNDARY_POINT_COUNT,
    EARTH_RADIUS_M,
    SQUARE_METERS_PER_ACRE,
)
from farmplot.errors import InvalidInputError
from farmplot.models import GeoPoint

_logger = logging.getLogger("farmplot.area")


def _require_boundary(points: Sequence[GeoPoint]) -> None:
    if len(points) != BOUNDARY_POINT_COUNT:
        raise InvalidInputError(
            f"boundary needs exactly {BOUNDARY_POINT_COUNT} points, got {len(points)}"
        )


def signed_planar_area(points: Sequence[GeoPoint]) -> float:
    """Return the signed shoelace half-sum over radian lon/lat, in radian^2.

    Positive for counter-clockwise boundaries (longitude as x, latitude as y).
    """

    _require_boundary(points)
    total = 0.0
    count = len(points)
    for i in range(count):
        current = points[i]
        following = points[(i + 1) % count]
        total += math.radians(current.longitude) * math.radians(following.latitude)
        total -= math.radians(following.longitude) * math.radians(current.latitude)
    return total / 2


def round_half_up(value: float, decimals: int = AREA_DECIMALS) -> float:
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def compute_area_acres(points: Sequence[GeoPoint]) -> float:
    """Compute the enclosed area of a four-point boundary in acres.

    The shoelace sum is taken directly over radian longitude/latitude and then
    scaled by ``R^2 * cos(mean latitude)``. This is a small-area approximation,
    not a true geodesic polygon area; it is adequate for plots of a few
    hectares. Degenerate or collinear boundaries yield ``0.0``.
    """

    planar = abs(signed_planar_area(points))
    mean_lat = sum(p.latitude for p in points) / len(points)
    area_m2 = planar * EARTH_RADIUS_M * EARTH_RADIUS_M * math.cos(math.radians(mean_lat))
    acres = round_half_up(area_m2 / SQUARE_METERS_PER_ACRE)
    _logger.debug("boundary area %.3f acres (mean lat %.5f)", acres, mean_lat)
    return acres
