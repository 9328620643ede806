"""Center-on-load sequence run before a selection session can start."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Protocol

from farmplot.config import FlowTimings, get_settings
from farmplot.location import LocationProvider
from farmplot.models import GeoPoint
from farmplot.timing import Scheduler, TimerHandle

_logger = logging.getLogger("farmplot.flows.centering")


class MapSurface(Protocol):
    def animate_to(self, point: GeoPoint, duration_ms: int) -> None: ...


class CenteringPhase(str, Enum):
    IDLE = "idle"
    LOCATING = "locating"
    ANIMATING = "animating"
    CENTERED = "centered"


class CenteringFlow:
    """Resolve the start location, move the camera, then report readiness.

    ``on_centered`` fires once the camera animation and the prompt delay have
    elapsed; the host wires it to ``BoundarySelectionController.mark_centered``.
    """

    def __init__(
        self,
        *,
        scheduler: Scheduler,
        location: LocationProvider,
        map_surface: MapSurface,
        on_centered: Callable[[GeoPoint], None],
        timings: Optional[FlowTimings] = None,
    ) -> None:
        self.timings = timings or get_settings().timings
        self._scheduler = scheduler
        self._location = location
        self._map = map_surface
        self._on_centered = on_centered
        self._phase = CenteringPhase.IDLE
        self._center: Optional[GeoPoint] = None
        self._pending: Optional[TimerHandle] = None
        self._token = 0

    @property
    def phase(self) -> CenteringPhase:
        return self._phase

    @property
    def center(self) -> Optional[GeoPoint]:
        return self._center

    def start(self) -> GeoPoint:
        self.cancel()
        self._phase = CenteringPhase.LOCATING
        center = self._location.get_initial_center()
        self._center = center
        self._schedule(self.timings.center_delay, lambda: self._animate(center))
        return center

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._token += 1
        if self._phase != CenteringPhase.CENTERED:
            self._phase = CenteringPhase.IDLE

    def _animate(self, center: GeoPoint) -> None:
        self._phase = CenteringPhase.ANIMATING
        self._map.animate_to(center, self.timings.map_zoom_ms)
        self._schedule(
            self.timings.map_zoom + self.timings.message_delay,
            lambda: self._finish(center),
        )

    def _finish(self, center: GeoPoint) -> None:
        self._phase = CenteringPhase.CENTERED
        _logger.debug("map centered on %.5f, %.5f", center.latitude, center.longitude)
        self._on_centered(center)

    def _schedule(self, delay: float, action: Callable[[], None]) -> None:
        self._token += 1
        token = self._token

        def _fire() -> None:
            if token != self._token:
                _logger.debug("ignoring stale centering timer")
                return
            self._pending = None
            action()

        self._pending = self._scheduler.call_later(delay, _fire)
