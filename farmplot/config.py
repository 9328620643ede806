"""Environment driven configuration for the selection flows."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

from farmplot.constants import (
    DEFAULT_ANALYSIS_DELAY_MS,
    DEFAULT_CENTER_DELAY_MS,
    DEFAULT_MAP_ZOOM_MS,
    DEFAULT_MESSAGE_DELAY_MS,
    DEFAULT_SETTLE_DELAY_MS,
    DEFAULT_STEP_INTERVAL_MS,
    NEXT_SCREEN,
)

__all__ = [
    "FlowTimings",
    "Settings",
    "get_settings",
    "reset_settings_cache",
]

_logger = logging.getLogger("farmplot.config")


@dataclass(frozen=True)
class FlowTimings:
    analysis_delay_ms: int = DEFAULT_ANALYSIS_DELAY_MS
    step_interval_ms: int = DEFAULT_STEP_INTERVAL_MS
    settle_delay_ms: int = DEFAULT_SETTLE_DELAY_MS
    map_zoom_ms: int = DEFAULT_MAP_ZOOM_MS
    message_delay_ms: int = DEFAULT_MESSAGE_DELAY_MS
    center_delay_ms: int = DEFAULT_CENTER_DELAY_MS

    @property
    def analysis_delay(self) -> float:
        return self.analysis_delay_ms / 1000.0

    @property
    def step_interval(self) -> float:
        return self.step_interval_ms / 1000.0

    @property
    def settle_delay(self) -> float:
        return self.settle_delay_ms / 1000.0

    @property
    def map_zoom(self) -> float:
        return self.map_zoom_ms / 1000.0

    @property
    def message_delay(self) -> float:
        return self.message_delay_ms / 1000.0

    @property
    def center_delay(self) -> float:
        return self.center_delay_ms / 1000.0


@dataclass(frozen=True)
class Settings:
    timings: FlowTimings = field(default_factory=FlowTimings)
    next_screen: str = NEXT_SCREEN


def _ms_env(name: str, default: int, *, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        _logger.warning("ignoring non-integer %s=%r", name, raw)
        return default
    if value < minimum:
        _logger.warning("ignoring %s=%r below minimum %d", name, raw, minimum)
        return default
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings read from the environment."""

    timings = FlowTimings(
        analysis_delay_ms=_ms_env("FARMPLOT_ANALYSIS_DELAY_MS", DEFAULT_ANALYSIS_DELAY_MS),
        step_interval_ms=_ms_env(
            "FARMPLOT_STEP_INTERVAL_MS", DEFAULT_STEP_INTERVAL_MS, minimum=1
        ),
        settle_delay_ms=_ms_env("FARMPLOT_SETTLE_DELAY_MS", DEFAULT_SETTLE_DELAY_MS),
        map_zoom_ms=_ms_env("FARMPLOT_MAP_ZOOM_MS", DEFAULT_MAP_ZOOM_MS),
        message_delay_ms=_ms_env("FARMPLOT_MESSAGE_DELAY_MS", DEFAULT_MESSAGE_DELAY_MS),
        center_delay_ms=_ms_env("FARMPLOT_CENTER_DELAY_MS", DEFAULT_CENTER_DELAY_MS),
    )
    next_screen = os.getenv("FARMPLOT_NEXT_SCREEN", "").strip() or NEXT_SCREEN
    return Settings(timings=timings, next_screen=next_screen)


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()
