"""In-memory registry of selection sessions served over HTTP."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional
from uuid import uuid4

from farmplot.config import Settings, get_settings
from farmplot.flows.selection import BoundarySelectionController, SessionStatus
from farmplot.location import LocationProvider, StaticLocationSource
from farmplot.models import GeoPoint
from farmplot.timing import AsyncioScheduler, Scheduler

_logger = logging.getLogger("farmplot.sessions")


class SessionNotFoundError(LookupError):
    pass


@dataclass
class HostedSession:
    session_id: str
    center: GeoPoint
    controller: BoundarySelectionController
    next_screen: Optional[str] = None

    @property
    def complete(self) -> bool:
        return self.controller.status == SessionStatus.COMPLETE


class SessionRegistry:
    """Keeps one controller per client session.

    All mutation happens on the thread that delivers the scheduler's callbacks,
    which for :class:`AsyncioScheduler` is the event loop serving requests.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        *,
        settings: Optional[Settings] = None,
    ) -> None:
        self.scheduler = scheduler or AsyncioScheduler()
        self.settings = settings or get_settings()
        self._sessions: Dict[str, HostedSession] = {}

    def create(self, center: Optional[GeoPoint] = None) -> HostedSession:
        source = StaticLocationSource(center) if center is not None else None
        resolved = LocationProvider(source).get_initial_center()
        session_id = str(uuid4())
        controller = BoundarySelectionController(
            scheduler=self.scheduler,
            on_complete=lambda: self._handle_complete(session_id),
            timings=self.settings.timings,
        )
        hosted = HostedSession(session_id=session_id, center=resolved, controller=controller)
        self._sessions[session_id] = hosted
        controller.mark_centered()
        _logger.info("selection session %s created", session_id)
        return hosted

    def get(self, session_id: str) -> HostedSession:
        hosted = self._sessions.get(session_id)
        if hosted is None:
            raise SessionNotFoundError(f"session {session_id} not found")
        return hosted

    def remove(self, session_id: str) -> None:
        hosted = self._sessions.pop(session_id, None)
        if hosted is None:
            raise SessionNotFoundError(f"session {session_id} not found")
        hosted.controller.teardown()

    def close_all(self) -> int:
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for hosted in sessions:
            hosted.controller.teardown()
        return len(sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def _handle_complete(self, session_id: str) -> None:
        hosted = self._sessions.get(session_id)
        if hosted is None:
            return
        hosted.next_screen = self.settings.next_screen
        _logger.info(
            "selection session %s complete; next screen %s",
            session_id,
            hosted.next_screen,
        )


@lru_cache(maxsize=1)
def get_session_registry() -> SessionRegistry:
    return SessionRegistry()
