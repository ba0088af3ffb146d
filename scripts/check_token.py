"""One-shot rug pull check from the command line.

Runs the same detector as the bot and API, prints the summary (or JSON).
Demo mode unless --live is given.

Usage:
    python scripts/check_token.py BONK
    python scripts/check_token.py FAKECOIN MOONSHOT --json
    python scripts/check_token.py DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263 --live
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import settings  # noqa: E402
from src.analyzers.factory import create_analyzers, create_detector  # noqa: E402
from src.detector.exceptions import NotFoundError, SubAnalyzerError  # noqa: E402
from src.utils.logger import setup_logger  # noqa: E402


async def run(tokens: list[str], *, live: bool, as_json: bool) -> int:
    analyzers = create_analyzers(not live, settings=settings)
    detector = create_detector(analyzers)
    exit_code = 0
    try:
        for token in tokens:
            try:
                report = await asyncio.wait_for(
                    detector.analyze(token), timeout=settings.analysis_timeout_sec
                )
            except NotFoundError:
                print(f"❌ Token {token} not found")
                exit_code = 1
                continue
            except (SubAnalyzerError, TimeoutError) as e:
                print(f"❌ Analysis of {token} failed: {e}")
                exit_code = 1
                continue

            if as_json:
                print(json.dumps(report.model_dump(mode="json"), indent=2))
            else:
                print(f"=== {report.token} ({report.mint_address}) ===")
                print(report.summary)
                print("\nRecommendations:")
                for rec in report.recommendations:
                    print(f"  - {rec}")
                print()
    finally:
        await analyzers.close()
    return exit_code


async def main() -> None:
    parser = argparse.ArgumentParser(description="Check Solana tokens for rug pull risk")
    parser.add_argument("tokens", nargs="+", help="Token symbols or mint addresses")
    parser.add_argument("--live", action="store_true", help="Use live RPC/Twitter analyzers")
    parser.add_argument("--json", action="store_true", help="Print full reports as JSON")
    args = parser.parse_args()

    setup_logger(level="WARNING", log_dir=None)
    sys.exit(await run(args.tokens, live=args.live, as_json=args.json))


if __name__ == "__main__":
    asyncio.run(main())
