"""Entry point for the Solana rug pull detector (dashboard API + Telegram bot)."""

import asyncio
import signal

from loguru import logger

from config.settings import settings
from src.analyzers.factory import create_analyzers, create_detector
from src.api.server import run_dashboard_server
from src.bot.bot import run_bot, stop_bot
from src.utils.logger import setup_logger


async def main() -> None:
    setup_logger(level="INFO")
    logger.info(f"Starting rug pull detector (demo_mode={settings.demo_mode})...")

    analyzers = create_analyzers(settings.demo_mode, settings=settings)
    detector = create_detector(analyzers)

    # Graceful shutdown on SIGINT/SIGTERM
    loop = asyncio.get_running_loop()
    shutdown_event = asyncio.Event()

    def _signal_handler() -> None:
        logger.info("Shutdown signal received")
        shutdown_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _signal_handler)

    tasks = [asyncio.create_task(run_bot(detector), name="telegram_bot")]
    if settings.dashboard_enabled:
        tasks.append(asyncio.create_task(run_dashboard_server(detector), name="dashboard"))
    tasks.append(asyncio.create_task(shutdown_event.wait(), name="shutdown"))

    # Bot exits immediately when no token is configured; only stop when
    # the dashboard finishes or a shutdown signal arrives
    stoppers = [t for t in tasks if t.get_name() != "telegram_bot"]
    await asyncio.wait(stoppers, return_when=asyncio.FIRST_COMPLETED)

    for task in tasks:
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    await stop_bot()
    await analyzers.close()
    logger.info("Shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
