from __future__ import annotations

import logging
import os
import platform
import time
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farmplot import __version__
from farmplot.config import get_settings
from farmplot.routes import router as selection_router
from farmplot.sessions import get_session_registry

_logger = logging.getLogger("farmplot.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        closed = get_session_registry().close_all()
        if closed:
            _logger.info("tore down %d selection sessions on shutdown", closed)


async def health() -> Dict[str, Any]:
    timings = get_settings().timings
    return {
        "status": "ok",
        "version": __version__,
        "ts": time.time(),
        "timings": {
            "analysisDelayMs": timings.analysis_delay_ms,
            "stepIntervalMs": timings.step_interval_ms,
            "settleDelayMs": timings.settle_delay_ms,
        },
        "runtime": {
            "python": platform.python_version(),
        },
    }


app = FastAPI(lifespan=lifespan)

allow = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost,http://127.0.0.1").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in allow if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(selection_router)
app.add_api_route(
    "/health",
    health,
    methods=["GET"],
    response_model=None,
    tags=["health"],
)
