"""On-chain economics analyzer: mint authority, holder concentration, LP lock.

Component weights: mint authority 40%, holder concentration 35%,
liquidity pool 25%. Each component scores 0 (safe) to 100.
"""

from __future__ import annotations

import asyncio
from dataclasses import asdict, dataclass, field
from decimal import Decimal

from loguru import logger

from src.detector.exceptions import SubAnalyzerError
from src.detector.models import SubAnalysis, TokenInfo
from src.detector.scoring import round_half_up
from src.parsers.mint_parser import MintDecodeError, MintInfo, decode_mint
from src.parsers.rugcheck.client import RugcheckClient
from src.parsers.rugcheck.models import RugcheckReport
from src.parsers.solana_rpc.client import SolanaRpcClient
from src.parsers.solana_rpc.models import TokenAccountBalance
from src.parsers.token_resolver import TokenResolver

MINT_AUTHORITY_WEIGHT = Decimal("0.4")
HOLDER_WEIGHT = Decimal("0.35")
LIQUIDITY_WEIGHT = Decimal("0.25")

TOP_HOLDERS_TRACKED = 10

# (top-3 share above, score, label)
CONCENTRATION_BANDS: list[tuple[float, int, str]] = [
    (90.0, 100, "extreme"),
    (70.0, 75, "high"),
    (50.0, 50, "moderate"),
]


@dataclass
class ComponentRisk:
    score: int
    issues: list[str] = field(default_factory=list)
    description: str = ""


def analyze_mint_authority(mint: MintInfo) -> ComponentRisk:
    if not mint.mint_authority_active:
        return ComponentRisk(
            score=0,
            description="Mint authority renounced - safe from unlimited minting",
        )
    return ComponentRisk(
        score=100,
        issues=["Active mint authority - developers can create unlimited tokens"],
        description="Mint authority NOT renounced - HIGH RISK",
    )


def analyze_holder_concentration(
    holders: list[TokenAccountBalance], supply: int
) -> ComponentRisk:
    """Score the share of supply held by the three largest accounts."""
    if not holders or supply <= 0:
        return ComponentRisk(
            score=50,
            issues=["Could not analyze holder distribution"],
            description="Unknown holder distribution",
        )

    top3_pct = sum(int(h.amount) for h in holders[:3]) / supply * 100
    for threshold, score, label in CONCENTRATION_BANDS:
        if top3_pct > threshold:
            issue = (
                f"Top 3 wallets hold {top3_pct:.1f}% of supply - {label} concentration"
            )
            return ComponentRisk(
                score=score,
                issues=[issue],
                description=f"High holder concentration - {issue}",
            )

    return ComponentRisk(score=0, description="Good holder distribution - decentralized ownership")


def analyze_liquidity_pool(
    report: RugcheckReport | None, locked_min_pct: float
) -> ComponentRisk:
    if report is None or report.lp_locked_pct is None:
        return ComponentRisk(
            score=50,
            issues=["Could not verify liquidity lock"],
            description="Unknown LP lock status",
        )
    if report.lp_locked_pct >= locked_min_pct:
        return ComponentRisk(
            score=0,
            description=f"Liquidity pool locked ({report.lp_locked_pct:.1f}%)",
        )
    return ComponentRisk(
        score=100,
        issues=["Liquidity pool not locked - developers can remove all liquidity instantly"],
        description=f"Liquidity pool NOT locked ({report.lp_locked_pct:.1f}% locked) - HIGH RISK",
    )


# (minimum composite, advice) checked top-down
CHAIN_ADVICE_BANDS: list[tuple[int, tuple[str, str]]] = [
    (80, ("DO NOT BUY - Extremely high rug pull risk",
          "Wait for proper audits and LP locking before considering")),
    (60, ("HIGH RISK - Exercise extreme caution",
          "Only invest what you can afford to lose completely")),
    (40, ("MEDIUM RISK - Proceed with caution",
          "Monitor closely and set stop-losses if trading")),
    (0, ("Appears legitimate - but always DYOR",
         "Consider waiting for community adoption before large positions")),
]


def chain_advice(
    score: int, mint_risk: ComponentRisk, holder_risk: ComponentRisk, lp_risk: ComponentRisk
) -> list[str]:
    """Chain-specific advice stored in the on-chain details."""
    advice = list(next(a for threshold, a in CHAIN_ADVICE_BANDS if score >= threshold))
    if mint_risk.score > 0:
        advice.append("Verify mint authority is renounced before any investment")
    if holder_risk.score > 50:
        advice.append("Monitor top wallet movements for potential dumps")
    if lp_risk.score > 0:
        advice.append("Confirm LP tokens are locked in a reputable locker")
    return advice


class LiveChainAnalyzer:
    """Chain collaborator backed by Solana RPC and Rugcheck."""

    def __init__(
        self,
        rpc: SolanaRpcClient,
        resolver: TokenResolver,
        rugcheck: RugcheckClient,
        *,
        lp_locked_min_pct: float = 90.0,
    ) -> None:
        self._rpc = rpc
        self._resolver = resolver
        self._rugcheck = rugcheck
        self._lp_locked_min_pct = lp_locked_min_pct

    async def get_token_info(self, identifier: str) -> TokenInfo | None:
        mint = await self._resolver.resolve(identifier)
        if mint is None:
            return None

        supply = await self._rpc.get_token_supply(mint)
        if supply is None:
            logger.info(f"[CHAIN] {mint[:12]}... is not a token mint")
            return None

        return TokenInfo(
            symbol=identifier.upper() if identifier != mint else "",
            mint_address=mint,
            total_supply=supply.uiAmountString,
            decimals=supply.decimals,
        )

    async def analyze_token_economics(self, identifier: str) -> SubAnalysis:
        mint_address = await resolve_mint(self._resolver, identifier)

        raw, holders, rugcheck = await asyncio.gather(
            self._rpc.get_account_data(mint_address),
            self._rpc.get_token_largest_accounts(mint_address),
            self._rugcheck.get_token_report(mint_address),
        )
        mint = decode_mint_or_raise(raw, mint_address)

        mint_risk = analyze_mint_authority(mint)
        holder_risk = analyze_holder_concentration(holders[:TOP_HOLDERS_TRACKED], mint.supply)
        lp_risk = analyze_liquidity_pool(rugcheck, self._lp_locked_min_pct)

        score = round_half_up(
            mint_risk.score * MINT_AUTHORITY_WEIGHT
            + holder_risk.score * HOLDER_WEIGHT
            + lp_risk.score * LIQUIDITY_WEIGHT
        )
        logger.debug(
            f"[CHAIN] {mint_address[:12]}... mint={mint_risk.score} "
            f"holders={holder_risk.score} lp={lp_risk.score} -> {score}"
        )

        return SubAnalysis(
            risk_score=score,
            red_flags=mint_risk.issues + holder_risk.issues + lp_risk.issues,
            details={
                "mint_authority": asdict(mint_risk),
                "holder_distribution": asdict(holder_risk),
                "liquidity_pool": asdict(lp_risk),
                "recommendations": chain_advice(score, mint_risk, holder_risk, lp_risk),
            },
        )


async def resolve_mint(resolver: TokenResolver, identifier: str) -> str:
    """Resolve identifier to a mint or raise SubAnalyzerError."""
    mint = await resolver.resolve(identifier)
    if mint is None:
        raise SubAnalyzerError(f"Cannot resolve token {identifier}")
    return mint


def decode_mint_or_raise(raw: bytes | None, mint_address: str) -> MintInfo:
    if raw is None:
        raise SubAnalyzerError(f"Mint account {mint_address} not found")
    try:
        return decode_mint(raw)
    except MintDecodeError as e:
        raise SubAnalyzerError(f"Malformed mint account {mint_address}: {e}") from e
