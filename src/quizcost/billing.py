"""Pre-flight affordability checks and display formatting.

The billing ledger remains the authority on balances; these helpers only
compare an estimate with a balance snapshot the caller already fetched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from quizcost.types import EstimationResult


@dataclass(frozen=True)
class TokenBalance:
    """A user's token balance as reported by the billing API."""

    available_tokens: int
    reserved_tokens: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TokenBalance:
        """Build from ``availableTokens`` / ``reservedTokens`` (or snake_case)."""
        available = data.get("availableTokens", data.get("available_tokens", 0))
        reserved = data.get("reservedTokens", data.get("reserved_tokens", 0))
        return cls(available_tokens=int(available or 0), reserved_tokens=int(reserved or 0))


@dataclass(frozen=True)
class AffordabilityCheck:
    """Outcome of comparing an estimate with a balance."""

    affordable: bool
    required_tokens: int
    available_tokens: int
    shortfall_tokens: int


def check_affordability(
    result: EstimationResult, balance: TokenBalance
) -> AffordabilityCheck:
    """Compare estimated billing tokens with the spendable balance.

    Reserved tokens are held for in-flight generations and do not count
    toward the spendable amount reported here.
    """
    required = result.estimated_billing_tokens
    available = max(0, balance.available_tokens)
    shortfall = max(0, required - available)
    return AffordabilityCheck(
        affordable=shortfall == 0,
        required_tokens=required,
        available_tokens=available,
        shortfall_tokens=shortfall,
    )


def humanize_tokens(count: int) -> str:
    """Compact token count for display: ``1.2M``, ``3.4K``, or ``999``."""
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1000:
        return f"{count / 1000:.1f}K"
    return f"{count:,}"
