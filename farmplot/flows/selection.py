"""Boundary selection and timed analysis state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from farmplot import telemetry
from farmplot.area import compute_area_acres
from farmplot.config import FlowTimings, get_settings
from farmplot.constants import BOUNDARY_POINT_COUNT
from farmplot.models import AnalysisStep, GeoPoint, SelectionResult
from farmplot.steps import ANALYSIS_STEPS
from farmplot.timing import Scheduler, TimerHandle

_logger = logging.getLogger("farmplot.flows.selection")


class SessionStatus(str, Enum):
    IDLE = "idle"
    AWAITING_START = "awaiting_start"
    SELECTING = "selecting"
    BOUNDARY_READY = "boundary_ready"
    ANALYZING = "analyzing"
    COMPLETE = "complete"


@dataclass
class SessionState:
    status: SessionStatus = SessionStatus.IDLE
    selection: List[GeoPoint] = field(default_factory=list)
    boundary: Optional[Tuple[GeoPoint, ...]] = None
    area_acres: Optional[float] = None
    current_step_index: Optional[int] = None


@dataclass(frozen=True)
class SessionSnapshot:
    status: SessionStatus
    points: Tuple[GeoPoint, ...]
    boundary: Optional[Tuple[GeoPoint, ...]]
    area_acres: Optional[float]
    current_step_index: Optional[int]
    current_step: Optional[AnalysisStep]
    points_remaining: int
    generation: int


class BoundarySelectionController:
    """Owns one selection session at a time and its pending transition timer.

    Every scheduled callback carries the token of the timer that created it.
    Once the timer is cancelled or superseded the token no longer matches and
    the callback returns without touching the session.
    """

    def __init__(
        self,
        *,
        scheduler: Scheduler,
        on_complete: Optional[Callable[[], None]] = None,
        on_step: Optional[Callable[[int, AnalysisStep], None]] = None,
        steps: Sequence[AnalysisStep] = ANALYSIS_STEPS,
        timings: Optional[FlowTimings] = None,
    ) -> None:
        timings = timings or get_settings().timings
        if not steps:
            raise ValueError("steps must not be empty")
        if timings.analysis_delay < 0:
            raise ValueError("analysis_delay must be non-negative")
        if timings.step_interval <= 0:
            raise ValueError("step_interval must be positive")
        if timings.settle_delay < 0:
            raise ValueError("settle_delay must be non-negative")
        self.steps: Tuple[AnalysisStep, ...] = tuple(steps)
        self.analysis_delay = timings.analysis_delay
        self.step_interval = timings.step_interval
        self.settle_delay = timings.settle_delay
        self._scheduler = scheduler
        self._on_complete = on_complete
        self._on_step = on_step
        self._state = SessionState()
        self._generation = 0
        self._pending: Optional[TimerHandle] = None
        self._timer_token = 0
        self._completed = False
        self._analysis_started_at: Optional[float] = None

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def has_pending_timer(self) -> bool:
        return self._pending is not None

    # -- entry points -----------------------------------------------------

    def mark_centered(self) -> SessionSnapshot:
        """Signal that the map is centered on the user and a session may start."""

        if self._state.status in {SessionStatus.IDLE, SessionStatus.COMPLETE}:
            self._open_session()
            self._state.status = SessionStatus.AWAITING_START
        else:
            _logger.debug("mark_centered ignored in status %s", self._state.status.value)
        return self.snapshot()

    def begin_selection(self) -> SessionSnapshot:
        state = self._state
        if state.status != SessionStatus.AWAITING_START:
            _logger.debug("begin_selection ignored in status %s", state.status.value)
            return self.snapshot()
        state.selection.clear()
        state.boundary = None
        state.area_acres = None
        state.current_step_index = None
        state.status = SessionStatus.SELECTING
        return self.snapshot()

    def add_point(self, point: GeoPoint) -> SessionSnapshot:
        self.try_add_point(point)
        return self.snapshot()

    def try_add_point(self, point: GeoPoint) -> bool:
        """Append a tapped point; returns False when the tap is dropped."""

        state = self._state
        if (
            state.status != SessionStatus.SELECTING
            or len(state.selection) >= BOUNDARY_POINT_COUNT
        ):
            telemetry.record_point_ignored(
                self._generation, state.status.value, len(state.selection)
            )
            return False

        indexed = GeoPoint(
            latitude=point.latitude,
            longitude=point.longitude,
            sequence_index=len(state.selection) + 1,
        )
        state.selection.append(indexed)
        telemetry.record_point_added(self._generation, indexed.sequence_index or 0)
        if len(state.selection) == BOUNDARY_POINT_COUNT:
            self._form_boundary()
        return True

    def teardown(self) -> SessionSnapshot:
        """Cancel every pending transition and drop the current session."""

        previous = self._state.status
        self._cancel_pending()
        if previous != SessionStatus.IDLE:
            telemetry.record_teardown(self._generation, previous.value)
            _logger.info(
                "selection session %d torn down in status %s",
                self._generation,
                previous.value,
            )
        self._generation += 1
        self._state = SessionState()
        self._completed = False
        self._analysis_started_at = None
        return self.snapshot()

    def get_result(self) -> Optional[SelectionResult]:
        state = self._state
        if state.boundary is None or state.area_acres is None:
            return None
        return SelectionResult(area_acres=state.area_acres, boundary=state.boundary)

    def snapshot(self) -> SessionSnapshot:
        state = self._state
        index = state.current_step_index
        return SessionSnapshot(
            status=state.status,
            points=tuple(state.selection),
            boundary=state.boundary,
            area_acres=state.area_acres,
            current_step_index=index,
            current_step=self.steps[index] if index is not None else None,
            points_remaining=BOUNDARY_POINT_COUNT - len(state.selection),
            generation=self._generation,
        )

    # -- transitions ------------------------------------------------------

    def _open_session(self) -> None:
        self._cancel_pending()
        self._generation += 1
        self._state = SessionState()
        self._completed = False
        self._analysis_started_at = None
        telemetry.record_session_started(self._generation)

    def _form_boundary(self) -> None:
        state = self._state
        boundary = tuple(state.selection)
        state.area_acres = compute_area_acres(boundary)
        state.boundary = boundary
        state.status = SessionStatus.BOUNDARY_READY
        telemetry.record_boundary_ready(self._generation, state.area_acres)
        _logger.info(
            "selection session %d boundary ready: %.3f acres",
            self._generation,
            state.area_acres,
        )
        self._schedule(self.analysis_delay, self._start_analysis)

    def _start_analysis(self) -> None:
        self._state.status = SessionStatus.ANALYZING
        self._analysis_started_at = self._scheduler.time()
        self._enter_step(0)

    def _advance_step(self) -> None:
        current = self._state.current_step_index
        self._enter_step(0 if current is None else current + 1)

    def _enter_step(self, index: int) -> None:
        self._state.current_step_index = index
        step = self.steps[index]
        telemetry.record_analysis_step(self._generation, index, step.title)
        _logger.debug("selection session %d step %d: %s", self._generation, index, step.title)
        if index < len(self.steps) - 1:
            self._schedule(self.step_interval, self._advance_step)
        else:
            self._schedule(self.step_interval + self.settle_delay, self._complete)
        if self._on_step is not None:
            self._on_step(index, step)

    def _complete(self) -> None:
        if self._completed:
            return
        self._completed = True
        self._state.status = SessionStatus.COMPLETE
        duration_ms = None
        if self._analysis_started_at is not None:
            duration_ms = (self._scheduler.time() - self._analysis_started_at) * 1000.0
        telemetry.record_analysis_complete(self._generation, duration_ms)
        _logger.info("selection session %d analysis complete", self._generation)
        if self._on_complete is not None:
            self._on_complete()

    # -- timers -----------------------------------------------------------

    def _schedule(self, delay: float, action: Callable[[], None]) -> None:
        self._cancel_pending()
        self._timer_token += 1
        token = self._timer_token
        generation = self._generation

        def _fire() -> None:
            if token != self._timer_token or generation != self._generation:
                _logger.debug(
                    "ignoring stale timer for session %d (current %d)",
                    generation,
                    self._generation,
                )
                telemetry.record_stale_timer(generation, self._generation)
                return
            self._pending = None
            action()

        self._pending = self._scheduler.call_later(delay, _fire)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._timer_token += 1
