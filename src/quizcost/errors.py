"""Exception hierarchy for quizcost.

Estimation itself never raises: degenerate input degrades to the active
strategy's minimum result. Errors only surface while building configuration
or selecting a strategy.
"""

from __future__ import annotations


class QuizcostError(Exception):
    """Base exception for all quizcost errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message including the hint, when present."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ConfigurationError(QuizcostError):
    """Configuration validation or strategy resolution failed."""
