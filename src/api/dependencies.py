"""FastAPI dependency injection: detector and live feed from app state."""

from __future__ import annotations

from fastapi import Request

from src.api.feed import LiveFeed
from src.detector.orchestrator import RugPullDetector


def get_detector(request: Request) -> RugPullDetector:
    return request.app.state.detector


def get_feed(request: Request) -> LiveFeed:
    return request.app.state.feed
