import os
import sys

from loguru import logger


def setup_logger(
    *, json_logs: bool = False, level: str = "INFO", log_dir: str | None = "logs"
) -> None:
    """Configure loguru sinks for the detector services.

    Console level comes from LOG_LEVEL env when set. The file sink (skipped
    when log_dir is None) always keeps DEBUG for post-mortem analysis.
    """
    console_level = os.getenv("LOG_LEVEL", level).upper()
    logger.remove()

    if json_logs:
        logger.add(sys.stdout, serialize=True, level=console_level)
    else:
        logger.add(
            sys.stdout,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
                "<level>{message}</level>"
            ),
            level=console_level,
            colorize=True,
        )

    if log_dir:
        logger.add(
            f"{log_dir}/rugpull_detector_{{time:YYYY-MM-DD}}.log",
            rotation="20 MB",
            retention="7 days",
            compression="gz",
            level="DEBUG",
            serialize=json_logs,
        )
