"""Pydantic models for Solana JSON-RPC token responses."""

from pydantic import BaseModel


class TokenSupply(BaseModel):
    """getTokenSupply result value."""

    amount: str = "0"
    decimals: int = 0
    uiAmountString: str = "0"

    model_config = {"extra": "ignore"}


class TokenAccountBalance(BaseModel):
    """Entry of getTokenLargestAccounts."""

    address: str
    amount: str = "0"
    decimals: int = 0
    uiAmount: float | None = None

    model_config = {"extra": "ignore"}
