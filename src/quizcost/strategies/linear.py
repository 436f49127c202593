"""Simplified linear cost model.

Billing tokens grow linearly with content length and with the number of
distinct question types requested; question counts and difficulty do not
enter the formula. Depends only on total character count, so chunked and
whole-text requests of the same size cost the same.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING

from quizcost.strategies.base import ceil_product, has_content
from quizcost.types import EstimationResult, normalize_distribution, total_char_count

if TYPE_CHECKING:
    from collections.abc import Sequence

    from quizcost.config import EstimationConfig
    from quizcost.types import QuestionTypeDistribution


@dataclass(frozen=True)
class LinearCalibration:
    """Empirically-derived coefficients (versioned)."""

    tokens_per_block: float = 0.35
    block_chars: int = 1000
    base_billing_tokens: int = 3

    @classmethod
    def v1(cls) -> LinearCalibration:  # pragma: no cover - alias
        """First calibration against backend billing."""
        return cls()

    @classmethod
    def latest(cls) -> LinearCalibration:  # pragma: no cover - alias
        """Alias to the current tagged calibration."""
        return cls.v1()


class LinearStrategy:
    """Coarse estimate: ``ceil(chars / 1000 * 0.35) * types + 3`` billing tokens."""

    def __init__(self, calibration: LinearCalibration | None = None) -> None:
        """Initialize with a versioned calibration."""
        self.calibration = calibration or LinearCalibration.latest()

    @property
    def name(self) -> str:
        """Registry name."""
        return "linear"

    def minimum_result(self, config: EstimationConfig) -> EstimationResult:
        """Base billing tokens only, with no input/completion breakdown."""
        return self._result(self.calibration.base_billing_tokens, config)

    # --- Public API ---

    def estimate_from_text(
        self,
        text: str | None,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
        config: EstimationConfig,
    ) -> EstimationResult:
        """Estimate from the trimmed length of ``text``."""
        if not isinstance(text, str) or not has_content(text):
            return self.minimum_result(config)
        return self.estimate_from_char_count(len(text.strip()), distribution, difficulty, config)

    def estimate_from_chunks(
        self,
        chunks: Sequence[object] | None,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
        config: EstimationConfig,
    ) -> EstimationResult:
        """Estimate from the summed effective size of all chunks."""
        if not chunks:
            return self.minimum_result(config)
        return self.estimate_from_char_count(
            total_char_count(chunks), distribution, difficulty, config
        )

    def estimate_from_char_count(
        self,
        char_count: int,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
        config: EstimationConfig,
    ) -> EstimationResult:
        """Estimate from a character count alone; difficulty does not enter."""
        del difficulty
        type_count = len(normalize_distribution(distribution))
        if type_count == 0 or char_count <= 0:
            return self.minimum_result(config)

        cal = self.calibration
        per_type = ceil_product(Fraction(char_count, cal.block_chars), cal.tokens_per_block)
        return self._result(per_type * type_count + cal.base_billing_tokens, config)

    # --- Internals ---

    def _result(self, billing: int, config: EstimationConfig) -> EstimationResult:
        return EstimationResult(
            estimated_llm_tokens=billing * config.effective_ratio,
            estimated_billing_tokens=billing,
            strategy=self.name,
        )
