"""Shared pytest fixtures for farmplot tests."""

from __future__ import annotations

from typing import Dict, List, Mapping, Tuple

import pytest

from farmplot.config import reset_settings_cache
from farmplot.telemetry import set_selection_telemetry_emitter


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()
    set_selection_telemetry_emitter(None)


@pytest.fixture
def telemetry_events() -> List[Tuple[str, Dict[str, object]]]:
    events: List[Tuple[str, Dict[str, object]]] = []

    def _emit(event: str, payload: Mapping[str, object]) -> None:
        events.append((event, dict(payload)))

    set_selection_telemetry_emitter(_emit)
    return events
