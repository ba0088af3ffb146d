"""FastAPI application factory for the rug pull dashboard API."""

from __future__ import annotations

import os
import time
from typing import TYPE_CHECKING

from fastapi import FastAPI
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.cors import CORSMiddleware

from src.api.feed import LiveFeed
from src.api.middleware import SecurityHeadersMiddleware

if TYPE_CHECKING:
    from src.detector.orchestrator import RugPullDetector

# Rate limiter (shared instance)
limiter = Limiter(key_func=get_remote_address)


def create_app(
    detector: RugPullDetector,
    *,
    feed: LiveFeed | None = None,
    demo_mode: bool = False,
) -> FastAPI:
    """Build and configure the FastAPI application around a detector."""
    app = FastAPI(
        title="Solana Rug Pull Detector API",
        version="0.1.0",
        docs_url="/api/docs" if os.getenv("DASHBOARD_DEBUG") else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if os.getenv("DASHBOARD_DEBUG") else None,
    )

    app.state.detector = detector
    app.state.feed = feed if feed is not None else LiveFeed()
    app.state.demo_mode = demo_mode
    app.state.started_at = time.monotonic()

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    from src.api.routers.check import router as check_router
    from src.api.routers.health import router as health_router

    app.include_router(health_router)
    app.include_router(check_router)

    return app
