"""Initial map center resolution with a fixed fallback."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from farmplot.constants import FALLBACK_CENTER
from farmplot.models import GeoPoint

_logger = logging.getLogger("farmplot.location")


class LocationSource(Protocol):
    """Device positioning backend (GPS, browser geolocation, fixture)."""

    def request_permission(self) -> bool: ...

    def current_position(self) -> GeoPoint: ...


class StaticLocationSource:
    """Location source that always reports the same position."""

    def __init__(self, point: Optional[GeoPoint], *, granted: bool = True) -> None:
        self._point = point
        self._granted = granted

    def request_permission(self) -> bool:
        return self._granted

    def current_position(self) -> GeoPoint:
        if self._point is None:
            raise LookupError("no position available")
        return self._point


class LocationProvider:
    def __init__(
        self,
        source: Optional[LocationSource] = None,
        *,
        fallback: GeoPoint = FALLBACK_CENTER,
    ) -> None:
        self._source = source
        self.fallback = fallback

    def get_initial_center(self) -> GeoPoint:
        """Return the user's position, or the fallback when it is unavailable."""

        if self._source is None:
            return self.fallback
        try:
            if not self._source.request_permission():
                _logger.warning("location permission denied; using fallback center")
                return self.fallback
            position = self._source.current_position()
        except Exception:
            _logger.warning("location lookup failed; using fallback center", exc_info=True)
            return self.fallback
        return GeoPoint(latitude=position.latitude, longitude=position.longitude)
