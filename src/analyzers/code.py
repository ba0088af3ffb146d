"""Token program configuration analyzer.

SPL tokens carry no per-token contract code, so the attack surface is the
mint configuration: freeze authority and Token-2022 extensions that let
the issuer seize, block or tax holder funds.
"""

from src.analyzers.chain import decode_mint_or_raise, resolve_mint
from src.detector.models import SubAnalysis
from src.parsers.mint_parser import MintInfo
from src.parsers.solana_rpc.client import SolanaRpcClient
from src.parsers.token_resolver import TokenResolver

FREEZE_AUTHORITY_RISK = 30
DANGEROUS_EXTENSION_RISK = 35
RISKY_EXTENSION_RISK = 15

EXTENSION_DESCRIPTIONS = {
    "PERMANENT_DELEGATE": "issuer can transfer or burn tokens from any wallet",
    "NON_TRANSFERABLE": "tokens cannot be transferred or sold",
    "TRANSFER_HOOK": "custom program runs on every transfer (possible backdoor)",
    "TRANSFER_FEE_CONFIG": "transfer fee can be charged on every trade",
    "DEFAULT_ACCOUNT_STATE": "new token accounts may start frozen",
}


def score_mint_config(mint: MintInfo) -> SubAnalysis:
    score = 0
    red_flags: list[str] = []
    green_flags: list[str] = []

    if mint.freeze_authority_active:
        score += FREEZE_AUTHORITY_RISK
        red_flags.append("Freeze authority active - holder accounts can be frozen")
    else:
        green_flags.append("Freeze authority renounced")

    for name in mint.dangerous_extensions:
        score += DANGEROUS_EXTENSION_RISK
        red_flags.append(f"Dangerous extension {name}: {EXTENSION_DESCRIPTIONS.get(name, '')}")
    for name in mint.risky_extensions:
        score += RISKY_EXTENSION_RISK
        red_flags.append(f"Risky extension {name}: {EXTENSION_DESCRIPTIONS.get(name, '')}")

    if not mint.dangerous_extensions and not mint.risky_extensions:
        green_flags.append("No dangerous token extensions")

    return SubAnalysis(
        risk_score=min(score, 100),
        red_flags=red_flags,
        green_flags=green_flags,
        details={
            "token2022": mint.is_token2022,
            "extensions": mint.extensions,
        },
    )


class LiveCodeAnalyzer:
    """Code collaborator backed by the on-chain mint account."""

    def __init__(self, rpc: SolanaRpcClient, resolver: TokenResolver) -> None:
        self._rpc = rpc
        self._resolver = resolver

    async def analyze_code(self, identifier: str) -> SubAnalysis:
        mint_address = await resolve_mint(self._resolver, identifier)
        raw = await self._rpc.get_account_data(mint_address)
        return score_mint_config(decode_mint_or_raise(raw, mint_address))
