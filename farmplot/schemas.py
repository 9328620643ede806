"""Pydantic schemas for the boundary selection API."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from farmplot.flows.selection import SessionSnapshot
from farmplot.models import AnalysisStep, GeoPoint


class GeoPointIn(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    def to_point(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class SessionCreateRequest(BaseModel):
    latitude: Optional[float] = Field(None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(None, ge=-180.0, le=180.0)

    @model_validator(mode="after")
    def _both_or_neither(self) -> "SessionCreateRequest":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        return self

    def to_point(self) -> Optional[GeoPoint]:
        if self.latitude is None or self.longitude is None:
            return None
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class PointOut(BaseModel):
    latitude: float
    longitude: float
    sequenceIndex: Optional[int] = None

    @classmethod
    def from_point(cls, point: GeoPoint) -> "PointOut":
        return cls(
            latitude=point.latitude,
            longitude=point.longitude,
            sequenceIndex=point.sequence_index,
        )


class StepOut(BaseModel):
    index: int
    title: str
    icon: str
    color: str

    @classmethod
    def from_step(cls, index: int, step: AnalysisStep) -> "StepOut":
        return cls(index=index, title=step.title, icon=step.icon, color=step.color)


class SessionView(BaseModel):
    sessionId: str
    status: str
    center: PointOut
    points: List[PointOut]
    boundary: Optional[List[PointOut]] = None
    areaAcres: Optional[float] = None
    currentStepIndex: Optional[int] = None
    currentStep: Optional[StepOut] = None
    pointsRemaining: int
    accepted: Optional[bool] = None

    @classmethod
    def build(
        cls,
        session_id: str,
        center: GeoPoint,
        snapshot: SessionSnapshot,
        *,
        accepted: Optional[bool] = None,
    ) -> "SessionView":
        current_step = None
        if snapshot.current_step is not None and snapshot.current_step_index is not None:
            current_step = StepOut.from_step(
                snapshot.current_step_index, snapshot.current_step
            )
        boundary = None
        if snapshot.boundary is not None:
            boundary = [PointOut.from_point(p) for p in snapshot.boundary]
        return cls(
            sessionId=session_id,
            status=snapshot.status.value,
            center=PointOut.from_point(center),
            points=[PointOut.from_point(p) for p in snapshot.points],
            boundary=boundary,
            areaAcres=snapshot.area_acres,
            currentStepIndex=snapshot.current_step_index,
            currentStep=current_step,
            pointsRemaining=snapshot.points_remaining,
            accepted=accepted,
        )


class SelectionResultOut(BaseModel):
    sessionId: str
    areaAcres: float
    boundary: List[PointOut]
    complete: bool
    nextScreen: Optional[str] = None
