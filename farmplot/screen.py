"""Host wiring for the farm boundary screen.

The screen owns the collaborators the flows talk to (location, map surface,
navigator) and guarantees that unmounting cancels every outstanding timer.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from farmplot.config import Settings, get_settings
from farmplot.constants import INDIA_CENTER
from farmplot.flows.centering import CenteringFlow, MapSurface
from farmplot.flows.selection import BoundarySelectionController, SessionSnapshot
from farmplot.location import LocationProvider
from farmplot.models import GeoPoint, SelectionResult
from farmplot.timing import Scheduler

_logger = logging.getLogger("farmplot.screen")


class Navigator(Protocol):
    def replace(self, screen: str) -> None: ...


class FarmBoundaryScreen:
    def __init__(
        self,
        *,
        scheduler: Scheduler,
        map_surface: MapSurface,
        navigator: Navigator,
        location: Optional[LocationProvider] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.navigator = navigator
        self.controller = BoundarySelectionController(
            scheduler=scheduler,
            on_complete=self._handle_complete,
            timings=self.settings.timings,
        )
        self.centering = CenteringFlow(
            scheduler=scheduler,
            location=location or LocationProvider(),
            map_surface=map_surface,
            on_centered=self._handle_centered,
            timings=self.settings.timings,
        )
        self._mounted = False
        self.result: Optional[SelectionResult] = None

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def camera_center(self) -> GeoPoint:
        return self.centering.center or INDIA_CENTER

    def mount(self) -> GeoPoint:
        self._mounted = True
        self.result = None
        return self.centering.start()

    def start_selection(self) -> SessionSnapshot:
        return self.controller.begin_selection()

    def handle_map_press(self, latitude: float, longitude: float) -> SessionSnapshot:
        return self.controller.add_point(GeoPoint(latitude=latitude, longitude=longitude))

    def unmount(self) -> None:
        self._mounted = False
        self.centering.cancel()
        self.controller.teardown()

    def _handle_centered(self, center: GeoPoint) -> None:
        self.controller.mark_centered()

    def _handle_complete(self) -> None:
        self.result = self.controller.get_result()
        _logger.info("analysis complete; navigating to %s", self.settings.next_screen)
        self.navigator.replace(self.settings.next_screen)
