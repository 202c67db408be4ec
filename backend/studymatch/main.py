"""StudyMatch API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StudyMatchError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - In-memory stores initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studymatch.api.error_handlers import register_error_handlers
from studymatch.api.routes import (
    auth, health, matches, profile, session_requests,
)
from studymatch.config import get_settings
from studymatch.infrastructure.memory_store import init_stores
from studymatch.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_stores()
    logger.info("StudyMatch API started")
    yield
    logger.info("StudyMatch API shutting down")


app = FastAPI(
    title="StudyMatch API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(matches.router)
app.include_router(session_requests.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("studymatch.main:app", host="0.0.0.0", port=8000)
