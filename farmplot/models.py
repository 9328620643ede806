"""Value types shared by the area calculator and the selection flows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float
    sequence_index: Optional[int] = None

    def as_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class AnalysisStep:
    title: str
    icon: str
    color: str


@dataclass(frozen=True)
class SelectionResult:
    area_acres: float
    boundary: Tuple[GeoPoint, ...]
