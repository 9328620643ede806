"""Telemetry helpers for the boundary selection lifecycle."""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Mapping, MutableMapping, Optional

SelectionTelemetryEmitter = Callable[[str, Mapping[str, object]], None]

_emitter: Optional[SelectionTelemetryEmitter] = None
_logger = logging.getLogger("farmplot.telemetry")


def set_selection_telemetry_emitter(
    candidate: SelectionTelemetryEmitter | None,
) -> None:
    """Register a telemetry emitter used for selection instrumentation."""

    global _emitter
    _emitter = candidate if callable(candidate) else None


def _now_ms() -> int:
    return int(time.time() * 1000)


def _safe_emit(event: str, payload: MutableMapping[str, object]) -> None:
    payload["ts"] = _now_ms()
    if not _emitter:
        _logger.debug("telemetry emitter not configured for event %s", event)
        return
    try:
        _emitter(event, dict(payload))
    except Exception:  # pragma: no cover - defensive logging only
        _logger.exception("failed to emit telemetry event %s", event)


def record_session_started(generation: int) -> None:
    _safe_emit("selection.session_started", {"generation": generation})


def record_point_added(generation: int, sequence_index: int) -> None:
    _safe_emit(
        "selection.point_added",
        {"generation": generation, "sequenceIndex": sequence_index},
    )


def record_point_ignored(generation: int, status: str, point_count: int) -> None:
    _safe_emit(
        "selection.point_ignored",
        {"generation": generation, "status": status, "pointCount": point_count},
    )


def record_boundary_ready(generation: int, area_acres: float) -> None:
    _safe_emit(
        "selection.boundary_ready",
        {"generation": generation, "areaAcres": area_acres},
    )


def record_analysis_step(generation: int, index: int, title: str) -> None:
    _safe_emit(
        "selection.analysis_step",
        {"generation": generation, "stepIndex": index, "title": title},
    )


def record_analysis_complete(generation: int, duration_ms: float | None = None) -> None:
    payload: Dict[str, object] = {"generation": generation}
    if duration_ms is not None:
        payload["durationMs"] = int(max(0, round(duration_ms)))
    _safe_emit("selection.analysis_complete", payload)


def record_teardown(generation: int, status: str) -> None:
    _safe_emit("selection.teardown", {"generation": generation, "status": status})


def record_stale_timer(expected: int, current: int) -> None:
    _safe_emit(
        "selection.stale_timer",
        {"generation": expected, "currentGeneration": current},
    )


__all__ = [
    "SelectionTelemetryEmitter",
    "record_analysis_complete",
    "record_analysis_step",
    "record_boundary_ready",
    "record_point_added",
    "record_point_ignored",
    "record_session_started",
    "record_stale_timer",
    "record_teardown",
    "set_selection_telemetry_emitter",
]
