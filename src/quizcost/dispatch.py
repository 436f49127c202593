"""Scope dispatch for document-based quiz requests.

Chooses between the chunk path and the whole-text path of a strategy based
on the quiz scope and on which inputs are actually available.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from quizcost.strategies.base import has_content
from quizcost.types import QuizScope, total_char_count

if TYPE_CHECKING:
    from collections.abc import Sequence

    from quizcost.config import EstimationConfig
    from quizcost.strategies.base import EstimationStrategy
    from quizcost.types import EstimationResult, QuestionTypeDistribution

log = logging.getLogger(__name__)

def estimate_from_document(
    strategy: EstimationStrategy,
    config: EstimationConfig,
    document_content: str | None,
    chunks: Sequence[object] | None,
    scope: QuizScope | str | None,
    distribution: QuestionTypeDistribution | None,
    difficulty: object,
) -> EstimationResult:
    """Route a document request to the chunk or text path.

    - Chunk-scoped request with chunks: chunk path, document content ignored.
    - Otherwise document content when present: text path, chunks ignored.
    - Otherwise chunk sizes only: estimate from the summed character count.
    - Nothing usable: the strategy's minimum result.

    Unknown scope values are treated as ``ENTIRE_DOCUMENT``.
    """
    parsed = QuizScope.parse(scope) or QuizScope.ENTIRE_DOCUMENT

    if parsed.is_chunk_scoped and chunks:
        return strategy.estimate_from_chunks(chunks, distribution, difficulty, config)

    if isinstance(document_content, str) and has_content(document_content):
        return strategy.estimate_from_text(
            document_content, distribution, difficulty, config
        )

    char_count = total_char_count(chunks)
    if char_count > 0:
        log.debug("No document content; estimating from %d chunk characters", char_count)
        return strategy.estimate_from_char_count(char_count, distribution, difficulty, config)

    return strategy.minimum_result(config)
