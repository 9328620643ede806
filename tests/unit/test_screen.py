from __future__ import annotations

from typing import List, Tuple

import pytest

from farmplot.config import FlowTimings, Settings
from farmplot.constants import INDIA_CENTER
from farmplot.flows import SessionStatus
from farmplot.location import LocationProvider, StaticLocationSource
from farmplot.models import GeoPoint
from farmplot.screen import FarmBoundaryScreen
from farmplot.timing import ManualScheduler

TIMINGS = FlowTimings(
    analysis_delay_ms=2000,
    step_interval_ms=1000,
    settle_delay_ms=500,
    map_zoom_ms=1000,
    message_delay_ms=500,
    center_delay_ms=250,
)

CORNERS = [(19.0, 73.0), (19.0, 73.001), (19.001, 73.001), (19.001, 73.0)]


class RecordingMap:
    def __init__(self) -> None:
        self.calls: List[Tuple[GeoPoint, int]] = []

    def animate_to(self, point: GeoPoint, duration_ms: int) -> None:
        self.calls.append((point, duration_ms))


class RecordingNavigator:
    def __init__(self) -> None:
        self.screens: List[str] = []

    def replace(self, screen: str) -> None:
        self.screens.append(screen)


@pytest.fixture
def screen_parts():
    scheduler = ManualScheduler()
    navigator = RecordingNavigator()
    surface = RecordingMap()
    screen = FarmBoundaryScreen(
        scheduler=scheduler,
        map_surface=surface,
        navigator=navigator,
        location=LocationProvider(StaticLocationSource(GeoPoint(19.0, 73.0))),
        settings=Settings(timings=TIMINGS),
    )
    return screen, scheduler, navigator, surface


def test_full_walkthrough_navigates_once(screen_parts):
    screen, scheduler, navigator, surface = screen_parts
    assert screen.camera_center == INDIA_CENTER
    screen.mount()
    assert screen.controller.status == SessionStatus.IDLE
    assert screen.camera_center == GeoPoint(19.0, 73.0)

    scheduler.advance(1.75)
    assert surface.calls == [(GeoPoint(19.0, 73.0), 1000)]
    assert screen.controller.status == SessionStatus.AWAITING_START

    screen.start_selection()
    for lat, lon in CORNERS:
        screen.handle_map_press(lat, lon)
    assert screen.controller.status == SessionStatus.BOUNDARY_READY

    scheduler.run_all()
    assert navigator.screens == ["ChoiceScreen"]
    assert screen.result is not None
    assert screen.result.area_acres == pytest.approx(2.889)
    assert [p.sequence_index for p in screen.result.boundary] == [1, 2, 3, 4]


def test_taps_before_start_are_dropped(screen_parts):
    screen, scheduler, navigator, _ = screen_parts
    screen.mount()
    scheduler.advance(1.75)
    snapshot = screen.handle_map_press(19.0, 73.0)
    assert snapshot.points == ()


def test_unmount_during_analysis_never_navigates(screen_parts):
    screen, scheduler, navigator, _ = screen_parts
    screen.mount()
    scheduler.advance(1.75)
    screen.start_selection()
    for lat, lon in CORNERS:
        screen.handle_map_press(lat, lon)
    scheduler.advance(3.0)
    assert screen.controller.status == SessionStatus.ANALYZING

    screen.unmount()
    scheduler.advance(60.0)
    assert navigator.screens == []
    assert screen.result is None
    assert screen.mounted is False
    assert scheduler.pending == 0


def test_unmount_while_centering_cancels_prompt(screen_parts):
    screen, scheduler, navigator, surface = screen_parts
    screen.mount()
    scheduler.advance(0.5)
    screen.unmount()
    scheduler.advance(10.0)
    assert screen.controller.status == SessionStatus.IDLE
    assert len(surface.calls) == 1


def test_next_screen_comes_from_settings():
    scheduler = ManualScheduler()
    navigator = RecordingNavigator()
    screen = FarmBoundaryScreen(
        scheduler=scheduler,
        map_surface=RecordingMap(),
        navigator=navigator,
        settings=Settings(timings=TIMINGS, next_screen="InsightsScreen"),
    )
    screen.mount()
    scheduler.run_all()
    screen.start_selection()
    for lat, lon in CORNERS:
        screen.handle_map_press(lat, lon)
    scheduler.run_all()
    assert navigator.screens == ["InsightsScreen"]
