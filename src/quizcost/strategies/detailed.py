"""Detailed multiplicative cost model.

Each requested question type is generated by its own backend call, so the
prompt overhead (system prompt, context template, type template and the
content itself) is paid once per distinct type. On the chunk path it is paid
once per (chunk, type) pair. Completion tokens scale with question count,
a per-type base and the difficulty multiplier. The sum is padded by the
safety factor and then by the estimation coefficient.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from quizcost.strategies.base import ceil_div, ceil_product, has_content
from quizcost.types import EstimationResult, effective_char_count, normalize_distribution

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from quizcost.config import EstimationConfig
    from quizcost.types import QuestionType, QuestionTypeDistribution

MIN_LLM_TOKENS = 1000
MIN_BILLING_TOKENS = 1


class DetailedStrategy:
    """Component-cost-aware estimate with input/completion breakdown."""

    def __init__(self, min_llm_tokens: int = MIN_LLM_TOKENS) -> None:
        """Initialize with the LLM token count reported for empty input."""
        self.min_llm_tokens = min_llm_tokens

    @property
    def name(self) -> str:
        """Registry name."""
        return "detailed"

    def minimum_result(self, config: EstimationConfig) -> EstimationResult:
        """Flat 1000 LLM tokens, converted to billing tokens with a floor of 1."""
        billing = max(MIN_BILLING_TOKENS, ceil_div(self.min_llm_tokens, config.effective_ratio))
        return EstimationResult(
            estimated_llm_tokens=self.min_llm_tokens,
            estimated_billing_tokens=billing,
            strategy=self.name,
        )

    # --- Public API ---

    def estimate_from_text(
        self,
        text: str | None,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
        config: EstimationConfig,
    ) -> EstimationResult:
        """Per-type overhead plus the whole text, once per distinct type."""
        if not isinstance(text, str) or not has_content(text):
            return self.minimum_result(config)
        return self.estimate_from_char_count(len(text), distribution, difficulty, config)

    def estimate_from_char_count(
        self,
        char_count: int,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
        config: EstimationConfig,
    ) -> EstimationResult:
        """Same as the text path for a text known only by its length."""
        if char_count <= 0 or config.chars_per_token <= 0:
            return self.minimum_result(config)

        content_tokens = ceil_div(char_count, config.chars_per_token)
        present = normalize_distribution(distribution)
        multiplier = config.difficulty_multiplier_for(difficulty)

        input_tokens, completion_tokens = self._accumulate(
            present, content_tokens, multiplier, config
        )
        return self._finalize(input_tokens, completion_tokens, config)

    def estimate_from_chunks(
        self,
        chunks: Sequence[object] | None,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
        config: EstimationConfig,
    ) -> EstimationResult:
        """Per-type overhead plus each chunk, once per (chunk, type) pair."""
        if not chunks or config.chars_per_token <= 0:
            return self.minimum_result(config)

        present = normalize_distribution(distribution)
        multiplier = config.difficulty_multiplier_for(difficulty)

        input_tokens = 0
        completion_tokens = 0
        for chunk in chunks:
            content_tokens = ceil_div(effective_char_count(chunk), config.chars_per_token)
            chunk_input, chunk_completion = self._accumulate(
                present, content_tokens, multiplier, config
            )
            input_tokens += chunk_input
            completion_tokens += chunk_completion
        return self._finalize(input_tokens, completion_tokens, config)

    # --- Internals ---

    def _accumulate(
        self,
        present: Mapping[QuestionType, int],
        content_tokens: int,
        multiplier: float,
        config: EstimationConfig,
    ) -> tuple[int, int]:
        """Input and completion tokens for one virtual call per present type."""
        overhead = config.system_prompt_tokens + config.context_template_tokens
        input_tokens = 0
        completion_tokens = 0
        for qtype, count in present.items():
            input_tokens += overhead + config.template_tokens_for(qtype) + content_tokens
            completion_tokens += ceil_product(
                count, config.completion_tokens_for(qtype), multiplier
            )
        return input_tokens, completion_tokens

    def _finalize(
        self, input_tokens: int, completion_tokens: int, config: EstimationConfig
    ) -> EstimationResult:
        raw = input_tokens + completion_tokens
        adjusted = ceil_product(raw, config.safety_factor)
        final = ceil_product(adjusted, config.estimation_coefficient)
        billing = max(MIN_BILLING_TOKENS, ceil_div(final, config.effective_ratio))
        return EstimationResult(
            estimated_llm_tokens=final,
            estimated_billing_tokens=billing,
            input_tokens=input_tokens,
            completion_tokens=completion_tokens,
            strategy=self.name,
        )
