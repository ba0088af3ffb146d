"""Telegram bot command handlers.

The detector is injected by the Dispatcher (dp["detector"]), so handlers
receive it as a keyword argument.
"""

import asyncio
import html

from aiogram import F, Router
from aiogram.filters import BaseFilter, Command, CommandObject, CommandStart
from aiogram.types import Message
from loguru import logger

from config.settings import settings
from src.bot.formatters import ALERTS_TEXT, HELP_TEXT, START_TEXT, format_report, format_short
from src.detector.exceptions import NotFoundError
from src.detector.orchestrator import RugPullDetector
from src.parsers.token_resolver import is_valid_address

router = Router()

MAX_SYMBOL_LEN = 64
SYMBOL_PATTERN = r"^[A-Z]{3,12}$"


class AdminFilter(BaseFilter):
    """Only allow messages from the configured admin user."""

    async def __call__(self, message: Message) -> bool:
        admin_id = settings.telegram_admin_id
        if not admin_id:
            return True  # no admin configured = public bot
        return message.from_user is not None and message.from_user.id == admin_id


router.message.filter(AdminFilter())


@router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    await message.answer(START_TEXT, parse_mode="HTML")


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await message.answer(HELP_TEXT, parse_mode="HTML")


@router.message(Command("alerts"))
async def cmd_alerts(message: Message) -> None:
    await message.answer(ALERTS_TEXT, parse_mode="HTML")


@router.message(Command("check"))
async def cmd_check(
    message: Message, command: CommandObject, detector: RugPullDetector
) -> None:
    """Full rug pull analysis: /check <SYMBOL>."""
    args = (command.args or "").split()
    if not args:
        await message.answer(
            "Usage: /check &lt;TOKEN_SYMBOL&gt;\nExample: /check MOONSHOT",
            parse_mode="HTML",
        )
        return

    symbol = args[0][:MAX_SYMBOL_LEN]
    # Mint addresses are case-sensitive base58
    if not is_valid_address(symbol):
        symbol = symbol.upper()
    shown = html.escape(symbol)
    await message.answer(f"🔍 Analyzing ${shown}...", parse_mode="HTML")

    try:
        report = await asyncio.wait_for(
            detector.analyze(symbol), timeout=settings.analysis_timeout_sec
        )
    except NotFoundError:
        await message.answer(
            f"❌ Token ${shown} not found or analysis failed.", parse_mode="HTML"
        )
        return
    except Exception as e:
        logger.error(f"[BOT] /check {symbol} failed: {type(e).__name__}: {e}")
        await message.answer("❌ Error analyzing token. Please try again later.")
        return

    await message.answer(format_report(report), parse_mode="HTML")


@router.message(F.text.regexp(SYMBOL_PATTERN))
async def on_symbol_text(message: Message, detector: RugPullDetector) -> None:
    """Quick score for a bare symbol message; failures stay silent."""
    symbol = (message.text or "").strip()
    await message.answer(f"🔍 Analyzing ${symbol}...")
    try:
        report = await asyncio.wait_for(
            detector.analyze(symbol), timeout=settings.analysis_timeout_sec
        )
    except Exception as e:
        logger.debug(f"[BOT] Quick check {symbol} failed: {e}")
        return
    await message.answer(format_short(report), parse_mode="HTML")
