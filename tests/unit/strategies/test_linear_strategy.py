"""Unit tests for the simplified linear cost model."""

from __future__ import annotations

import pytest

from quizcost.config import DEFAULT_CONFIG, EstimationConfig
from quizcost.strategies import LinearCalibration, LinearStrategy
from quizcost.types import Difficulty, DocumentChunk, QuestionType

pytestmark = pytest.mark.unit


def test_single_type_scenario(linear: LinearStrategy, single_type) -> None:
    # ceil(2000 / 1000 * 0.35) = ceil(0.7) = 1 -> 1 + 3
    result = linear.estimate_from_text("a" * 2000, single_type, Difficulty.MEDIUM, DEFAULT_CONFIG)

    assert result.estimated_billing_tokens == 4
    assert result.estimated_llm_tokens == 4000
    assert result.input_tokens == 0
    assert result.completion_tokens == 0
    assert result.strategy == "linear"


def test_two_type_scenario(linear: LinearStrategy) -> None:
    dist = {QuestionType.MCQ_SINGLE: 5, QuestionType.TRUE_FALSE: 3}

    result = linear.estimate_from_text("a" * 2000, dist, Difficulty.MEDIUM, DEFAULT_CONFIG)

    assert result.estimated_billing_tokens == 5
    assert result.estimated_llm_tokens == 5000


@pytest.mark.parametrize(
    ("chars", "billing"),
    [
        (1, 4),
        (3000, 5),  # ceil(1.05) = 2
        (20_000, 10),  # exactly 7.0, no float drift to 8
        (20_001, 11),
    ],
)
def test_rounding_is_exact_ceiling(
    linear: LinearStrategy, single_type, chars: int, billing: int
) -> None:
    result = linear.estimate_from_text("a" * chars, single_type, "MEDIUM", DEFAULT_CONFIG)

    assert result.estimated_billing_tokens == billing


def test_counts_and_difficulty_do_not_matter(linear: LinearStrategy) -> None:
    text = "a" * 5000
    low = linear.estimate_from_text(text, {QuestionType.OPEN: 1}, Difficulty.EASY, DEFAULT_CONFIG)
    high = linear.estimate_from_text(text, {QuestionType.OPEN: 40}, Difficulty.HARD, DEFAULT_CONFIG)

    assert low == high


def test_text_is_trimmed_before_counting(linear: LinearStrategy, single_type) -> None:
    padded = "   " + "a" * 2000 + "\n\n"

    result = linear.estimate_from_text(padded, single_type, "MEDIUM", DEFAULT_CONFIG)
    assert result.estimated_billing_tokens == 4


@pytest.mark.parametrize(
    ("text", "dist"),
    [
        ("", {}),
        ("", {QuestionType.OPEN: 3}),
        (None, {QuestionType.OPEN: 3}),
        ("a" * 2000, {}),
        ("a" * 2000, {QuestionType.OPEN: 0}),
    ],
)
def test_degenerate_input_returns_minimum(linear: LinearStrategy, text, dist) -> None:
    result = linear.estimate_from_text(text, dist, "MEDIUM", DEFAULT_CONFIG)

    assert result.estimated_billing_tokens == 3
    assert result.estimated_llm_tokens == 3000
    assert result.input_tokens == result.completion_tokens == 0


def test_llm_tokens_follow_ratio(linear: LinearStrategy, single_type) -> None:
    cfg = EstimationConfig(token_to_llm_ratio=250)
    result = linear.estimate_from_text("a" * 2000, single_type, "MEDIUM", cfg)

    assert result.estimated_llm_tokens == 1000


def test_minimum_with_zero_ratio_uses_one(linear: LinearStrategy) -> None:
    result = linear.minimum_result(EstimationConfig(token_to_llm_ratio=0))

    assert result.estimated_llm_tokens == 3


def test_custom_calibration(single_type) -> None:
    strategy = LinearStrategy(
        LinearCalibration(tokens_per_block=1.0, block_chars=100, base_billing_tokens=5)
    )

    result = strategy.estimate_from_text("a" * 250, single_type, "MEDIUM", DEFAULT_CONFIG)

    # ceil(2.5) + 5
    assert result.estimated_billing_tokens == 8


class TestChunkPath:
    def test_sums_effective_sizes(self, linear: LinearStrategy, single_type) -> None:
        chunks = [DocumentChunk(content="a" * 1500), DocumentChunk(character_count=500)]

        result = linear.estimate_from_chunks(chunks, single_type, "MEDIUM", DEFAULT_CONFIG)

        expected = linear.estimate_from_text("a" * 2000, single_type, "MEDIUM", DEFAULT_CONFIG)
        assert result == expected
        assert result.estimated_billing_tokens == 4

    def test_wire_shaped_chunks(self, linear: LinearStrategy, single_type) -> None:
        chunks = [{"content": None, "characterCount": 20_000}]

        result = linear.estimate_from_chunks(chunks, single_type, "MEDIUM", DEFAULT_CONFIG)
        assert result.estimated_billing_tokens == 10

    @pytest.mark.parametrize("chunks", [[], None, [DocumentChunk()]])
    def test_empty_chunks_return_minimum(self, linear: LinearStrategy, single_type, chunks) -> None:
        result = linear.estimate_from_chunks(chunks, single_type, "MEDIUM", DEFAULT_CONFIG)

        assert result.estimated_billing_tokens == 3
