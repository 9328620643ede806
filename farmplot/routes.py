"""Boundary selection endpoints.

Handlers are coroutines so that every controller mutation runs on the event
loop that also delivers the timer callbacks.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from farmplot.schemas import (
    GeoPointIn,
    PointOut,
    SelectionResultOut,
    SessionCreateRequest,
    SessionView,
    StepOut,
)
from farmplot.sessions import (
    HostedSession,
    SessionNotFoundError,
    SessionRegistry,
    get_session_registry,
)
from farmplot.steps import ANALYSIS_STEPS

router = APIRouter(prefix="/selection", tags=["selection"])


def _lookup(registry: SessionRegistry, session_id: str) -> HostedSession:
    try:
        return registry.get(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


def _view(hosted: HostedSession, *, accepted: Optional[bool] = None) -> SessionView:
    return SessionView.build(
        hosted.session_id,
        hosted.center,
        hosted.controller.snapshot(),
        accepted=accepted,
    )


@router.get("/steps", response_model=List[StepOut])
async def list_steps() -> List[StepOut]:
    return [StepOut.from_step(index, step) for index, step in enumerate(ANALYSIS_STEPS)]


@router.post(
    "/sessions", response_model=SessionView, status_code=status.HTTP_201_CREATED
)
async def create_session(
    payload: Optional[SessionCreateRequest] = None,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionView:
    center = payload.to_point() if payload is not None else None
    return _view(registry.create(center))


@router.get("/sessions/{session_id}", response_model=SessionView)
async def get_session(
    session_id: str, registry: SessionRegistry = Depends(get_session_registry)
) -> SessionView:
    return _view(_lookup(registry, session_id))


@router.post("/sessions/{session_id}/start", response_model=SessionView)
async def start_selection(
    session_id: str, registry: SessionRegistry = Depends(get_session_registry)
) -> SessionView:
    hosted = _lookup(registry, session_id)
    hosted.controller.begin_selection()
    return _view(hosted)


@router.post("/sessions/{session_id}/points", response_model=SessionView)
async def add_point(
    session_id: str,
    point: GeoPointIn,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionView:
    hosted = _lookup(registry, session_id)
    accepted = hosted.controller.try_add_point(point.to_point())
    return _view(hosted, accepted=accepted)


@router.get("/sessions/{session_id}/result", response_model=SelectionResultOut)
async def get_result(
    session_id: str, registry: SessionRegistry = Depends(get_session_registry)
) -> SelectionResultOut:
    hosted = _lookup(registry, session_id)
    result = hosted.controller.get_result()
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="boundary not selected yet"
        )
    body = SelectionResultOut(
        sessionId=hosted.session_id,
        areaAcres=result.area_acres,
        boundary=[PointOut.from_point(p) for p in result.boundary],
        complete=hosted.complete,
        nextScreen=hosted.next_screen,
    )
    if hosted.complete:
        # completed sessions are released once their result has been handed out
        registry.remove(session_id)
    return body


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str, registry: SessionRegistry = Depends(get_session_registry)
) -> Response:
    try:
        registry.remove(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
