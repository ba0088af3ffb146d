"""Dashboard server: runs uvicorn inside the existing asyncio event loop."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uvicorn
from loguru import logger

from config.settings import settings
from src.api.feed import LiveFeed

if TYPE_CHECKING:
    from src.detector.orchestrator import RugPullDetector


async def run_dashboard_server(detector: RugPullDetector) -> None:
    """Serve the FastAPI app until cancelled.

    Uses ``uvicorn.Server.serve()`` which is fully async.
    """
    from src.api.app import create_app

    app = create_app(
        detector,
        feed=LiveFeed(settings.live_feed_size),
        demo_mode=settings.demo_mode,
    )
    config = uvicorn.Config(
        app=app,
        host="0.0.0.0",
        port=settings.dashboard_port,
        log_level="warning",
        loop="none",  # use the existing event loop
    )
    server = uvicorn.Server(config)
    logger.info(f"[API] Dashboard API starting on http://0.0.0.0:{settings.dashboard_port}")
    await server.serve()
