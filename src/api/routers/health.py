"""Health check: no auth required."""

from __future__ import annotations

import time

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(prefix="/api/v1", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    demo_mode: bool
    uptime_sec: int
    analyses_in_feed: int


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    state = request.app.state
    return HealthResponse(
        status="ok",
        version=request.app.version,
        demo_mode=state.demo_mode,
        uptime_sec=int(time.monotonic() - state.started_at),
        analyses_in_feed=len(state.feed),
    )
