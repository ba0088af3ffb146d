"""Telegram bot lifecycle: aiogram 3.x polling mode.

Runs as an asyncio task alongside the dashboard server.
Only starts if telegram_bot_token is configured.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from config.settings import settings

if TYPE_CHECKING:
    from aiogram import Bot, Dispatcher

    from src.detector.orchestrator import RugPullDetector

_bot_instance: Bot | None = None


def get_bot() -> Bot:
    """Get or create the aiogram Bot singleton."""
    global _bot_instance
    if _bot_instance is None:
        from aiogram import Bot

        if not settings.telegram_bot_token:
            raise RuntimeError("TELEGRAM_BOT_TOKEN not configured")
        _bot_instance = Bot(token=settings.telegram_bot_token)
    return _bot_instance


def create_dispatcher(detector: RugPullDetector) -> Dispatcher:
    """Dispatcher with handlers registered and the detector injected."""
    from aiogram import Dispatcher

    from src.bot.handlers import router

    dp = Dispatcher()
    dp["detector"] = detector
    dp.include_router(router)
    return dp


async def run_bot(detector: RugPullDetector) -> None:
    """Start polling; runs until cancelled."""
    try:
        bot = get_bot()
    except RuntimeError as e:
        logger.warning(f"[BOT] Cannot start: {e}")
        return

    dp = create_dispatcher(detector)
    logger.info("[BOT] Starting Telegram bot (polling mode)")
    try:
        await dp.start_polling(bot, close_bot_session=False, handle_signals=False)
    except Exception as e:
        logger.error(f"[BOT] Fatal error: {e}")


async def stop_bot() -> None:
    """Gracefully close the bot session."""
    global _bot_instance
    if _bot_instance:
        await _bot_instance.session.close()
        _bot_instance = None
