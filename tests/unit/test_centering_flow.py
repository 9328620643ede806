from __future__ import annotations

from typing import List, Tuple

from farmplot.config import FlowTimings
from farmplot.constants import FALLBACK_CENTER
from farmplot.flows import CenteringFlow, CenteringPhase
from farmplot.location import LocationProvider, StaticLocationSource
from farmplot.models import GeoPoint
from farmplot.timing import ManualScheduler

TIMINGS = FlowTimings(center_delay_ms=250, map_zoom_ms=2000, message_delay_ms=500)


class RecordingMap:
    def __init__(self) -> None:
        self.calls: List[Tuple[GeoPoint, int]] = []

    def animate_to(self, point: GeoPoint, duration_ms: int) -> None:
        self.calls.append((point, duration_ms))


def _flow(source=None):
    scheduler = ManualScheduler()
    surface = RecordingMap()
    centered: List[GeoPoint] = []
    flow = CenteringFlow(
        scheduler=scheduler,
        location=LocationProvider(source),
        map_surface=surface,
        on_centered=centered.append,
        timings=TIMINGS,
    )
    return flow, scheduler, surface, centered


def test_animates_then_reports_centered():
    user = GeoPoint(18.5204, 73.8567)
    flow, scheduler, surface, centered = _flow(StaticLocationSource(user))

    assert flow.start() == user
    assert flow.phase == CenteringPhase.LOCATING
    assert surface.calls == []

    scheduler.advance(0.25)
    assert flow.phase == CenteringPhase.ANIMATING
    assert surface.calls == [(user, 2000)]

    scheduler.advance(2.0)
    assert centered == []
    scheduler.advance(0.5)
    assert flow.phase == CenteringPhase.CENTERED
    assert centered == [user]


def test_denied_permission_centers_on_fallback():
    flow, scheduler, surface, centered = _flow(
        StaticLocationSource(GeoPoint(1.0, 2.0), granted=False)
    )
    assert flow.start() == FALLBACK_CENTER
    scheduler.run_all()
    assert surface.calls[0][0] == FALLBACK_CENTER
    assert centered == [FALLBACK_CENTER]


def test_cancel_before_animation_suppresses_callbacks():
    flow, scheduler, surface, centered = _flow()
    flow.start()
    flow.cancel()
    scheduler.advance(10.0)
    assert surface.calls == []
    assert centered == []
    assert flow.phase == CenteringPhase.IDLE


def test_cancel_during_animation_suppresses_ready_signal():
    flow, scheduler, surface, centered = _flow()
    flow.start()
    scheduler.advance(0.25)
    flow.cancel()
    scheduler.advance(10.0)
    assert len(surface.calls) == 1
    assert centered == []


def test_restart_supersedes_previous_run():
    flow, scheduler, surface, centered = _flow()
    flow.start()
    scheduler.advance(0.1)
    flow.start()
    scheduler.run_all()
    assert len(surface.calls) == 1
    assert len(centered) == 1


class SequenceSource:
    def __init__(self, *points: GeoPoint) -> None:
        self._points = list(points)

    def request_permission(self) -> bool:
        return True

    def current_position(self) -> GeoPoint:
        return self._points.pop(0)


def test_each_run_animates_to_the_center_it_resolved():
    first = GeoPoint(18.5204, 73.8567)
    second = GeoPoint(12.9716, 77.5946)
    flow, scheduler, surface, centered = _flow(SequenceSource(first, second))

    assert flow.start() == first
    scheduler.advance(0.25)
    assert flow.start() == second
    scheduler.run_all()

    assert surface.calls == [(first, 2000), (second, 2000)]
    assert centered == [second]
    assert flow.center == second
