"""Scope dispatch between the chunk and whole-text paths."""

from __future__ import annotations

import pytest

from quizcost.config import DEFAULT_CONFIG
from quizcost.dispatch import estimate_from_document
from quizcost.types import DocumentChunk, QuestionType, QuizScope

pytestmark = pytest.mark.unit

DIST = {QuestionType.MCQ_SINGLE: 5}
LONG_TEXT = "a" * 20_000  # linear: 7 + 3 = 10 billing tokens
SMALL_CHUNKS = [DocumentChunk(content="a" * 500)]  # linear: 1 + 3 = 4
ENTIRE = QuizScope.ENTIRE_DOCUMENT


@pytest.mark.parametrize(
    "scope",
    [QuizScope.SPECIFIC_CHUNKS, QuizScope.SPECIFIC_CHAPTER, "SPECIFIC_SECTION"],
)
def test_chunk_scopes_use_chunks_and_ignore_content(linear, scope) -> None:
    result = estimate_from_document(
        linear, DEFAULT_CONFIG, LONG_TEXT, SMALL_CHUNKS, scope, DIST, "MEDIUM"
    )

    assert result.estimated_billing_tokens == 4


def test_entire_document_uses_content_and_ignores_chunks(linear) -> None:
    result = estimate_from_document(
        linear, DEFAULT_CONFIG, LONG_TEXT, SMALL_CHUNKS, ENTIRE, DIST, "MEDIUM"
    )

    assert result.estimated_billing_tokens == 10


def test_chunk_scope_without_chunks_falls_back_to_content(linear) -> None:
    result = estimate_from_document(
        linear, DEFAULT_CONFIG, LONG_TEXT, [], QuizScope.SPECIFIC_CHAPTER, DIST, "MEDIUM"
    )

    assert result.estimated_billing_tokens == 10


def test_missing_content_uses_chunk_sizes(linear) -> None:
    chunks = [DocumentChunk(character_count=12_000), DocumentChunk(character_count=8_000)]

    result = estimate_from_document(linear, DEFAULT_CONFIG, None, chunks, ENTIRE, DIST, "MEDIUM")

    assert result.estimated_billing_tokens == 10


def test_chunk_sizes_match_text_of_same_length_in_detailed_model(detailed) -> None:
    chunks = [DocumentChunk(character_count=4000)]

    via_document = estimate_from_document(
        detailed, DEFAULT_CONFIG, "", chunks, ENTIRE, DIST, "MEDIUM"
    )
    via_text = detailed.estimate_from_text("a" * 4000, DIST, "MEDIUM", DEFAULT_CONFIG)

    assert via_document == via_text
    assert via_document.estimated_llm_tokens == 3323


def test_huge_declared_chunk_size_is_estimated_without_building_text(linear, detailed) -> None:
    chunks = [DocumentChunk(character_count=10**13)]

    linear_result = estimate_from_document(
        linear, DEFAULT_CONFIG, None, chunks, ENTIRE, DIST, "MEDIUM"
    )
    detailed_result = estimate_from_document(
        detailed, DEFAULT_CONFIG, None, chunks, ENTIRE, DIST, "MEDIUM"
    )

    # ceil(10**10 * 0.35) + 3
    assert linear_result.estimated_billing_tokens == 3_500_000_003
    # 10**13 chars / 4 -> 2.5 * 10**12 content tokens
    assert detailed_result.input_tokens == 300 + 150 + 80 + 2_500_000_000_000


@pytest.mark.parametrize("chunks", [None, [], [DocumentChunk()]])
def test_nothing_usable_returns_minimum(linear, detailed, chunks) -> None:
    for strategy in (linear, detailed):
        result = estimate_from_document(
            strategy, DEFAULT_CONFIG, None, chunks, ENTIRE, DIST, "MEDIUM"
        )
        assert result == strategy.minimum_result(DEFAULT_CONFIG)


@pytest.mark.parametrize("scope", ["WHOLE_BOOK", None, 3])
def test_unknown_scope_is_treated_as_entire_document(linear, scope) -> None:
    result = estimate_from_document(
        linear, DEFAULT_CONFIG, LONG_TEXT, SMALL_CHUNKS, scope, DIST, "MEDIUM"
    )

    assert result.estimated_billing_tokens == 10
