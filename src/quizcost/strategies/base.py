"""Estimation strategy protocol.

Concise contract for the formula generations behind the service.

Requirements (must):
- Be pure and deterministic (no I/O, no randomness, no shared state)
- Read configuration only from the snapshot passed to each call
- Never raise; degenerate input returns ``minimum_result(config)``
- Round every token-count step up, never down

Guidelines (should):
- Keep calibration in immutable values, not in control flow
- Keep implementation small and testable
"""

from __future__ import annotations

from fractions import Fraction
import math
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from quizcost.config import EstimationConfig
    from quizcost.types import EstimationResult, QuestionTypeDistribution


@runtime_checkable
class EstimationStrategy(Protocol):
    """Protocol for one generation of the quiz cost formula."""

    @property
    def name(self) -> str:  # pragma: no cover - trivial
        """Return the registry name (for example, 'linear')."""
        ...

    def minimum_result(self, config: EstimationConfig) -> EstimationResult:
        """Floor result returned for empty or unusable input."""
        ...

    def estimate_from_text(
        self,
        text: str | None,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
        config: EstimationConfig,
    ) -> EstimationResult:
        """Estimate a request generated from one block of text."""
        ...

    def estimate_from_char_count(
        self,
        char_count: int,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
        config: EstimationConfig,
    ) -> EstimationResult:
        """Estimate a request whose text is known only by its length."""
        ...

    def estimate_from_chunks(
        self,
        chunks: Sequence[object] | None,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
        config: EstimationConfig,
    ) -> EstimationResult:
        """Estimate a request generated from a list of document chunks."""
        ...


# --- Exact rounding helpers ---


def _exact(value: int | float | Fraction) -> Fraction:
    # str() recovers the shortest decimal a float was written as (1.15, not 1.1499...)
    if isinstance(value, float):
        return Fraction(str(value))
    return Fraction(value)


def ceil_product(*factors: int | float | Fraction) -> int:
    """Ceiling of the product of ``factors`` in exact decimal arithmetic."""
    product = Fraction(1)
    for factor in factors:
        product *= _exact(factor)
    return math.ceil(product)


def ceil_div(numerator: int | float, denominator: int | float) -> int:
    """Ceiling of ``numerator / denominator``; 0 when the denominator is not positive."""
    if denominator <= 0:
        return 0
    return math.ceil(_exact(numerator) / _exact(denominator))


def has_content(text: object) -> bool:
    """True when ``text`` is a string with at least one non-whitespace character."""
    return isinstance(text, str) and bool(text.strip())
