"""Token estimation service: public entry points over a swappable config.

The service holds one immutable ``EstimationConfig`` snapshot. Each call
reads the snapshot reference once at entry; ``update_config`` installs a new
snapshot with a single attribute assignment. Concurrent callers therefore
never observe a partially updated configuration and need no lock.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from quizcost import dispatch
from quizcost.config import DEFAULT_CONFIG, EstimationConfig, resolve_config, strategy_from_env
from quizcost.strategies import EstimationStrategy, get_strategy

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from quizcost.types import EstimationResult, QuestionTypeDistribution, QuizScope

log = logging.getLogger(__name__)


class TokenEstimationService:
    """Estimate billing tokens for quiz-generation requests.

    Example:
        service = TokenEstimationService(strategy="detailed")
        result = service.estimate_from_text(text, {"MCQ_SINGLE": 5}, "MEDIUM")
        print(result.estimated_billing_tokens)
    """

    def __init__(
        self,
        config: EstimationConfig | Mapping[str, Any] | None = None,
        *,
        strategy: EstimationStrategy | str | None = None,
    ) -> None:
        """Initialize with a config snapshot (or overrides) and a strategy.

        Args:
            config: A frozen snapshot, a mapping of overrides on the defaults,
                or None for defaults.
            strategy: A strategy instance or registered name; None selects
                the default strategy.

        Raises:
            ConfigurationError: If the overrides or strategy name are invalid.
        """
        if isinstance(config, EstimationConfig):
            self._config = config
        elif config:
            self._config = resolve_config(config, use_env=False)
        else:
            self._config = DEFAULT_CONFIG

        if strategy is None or isinstance(strategy, str):
            self._strategy = get_strategy(strategy)
        else:
            self._strategy = strategy

    @classmethod
    def from_env(
        cls, *, strategy: EstimationStrategy | str | None = None
    ) -> TokenEstimationService:
        """Build a service from ``QUIZCOST_*`` environment variables."""
        return cls(resolve_config(), strategy=strategy or strategy_from_env())

    @property
    def strategy(self) -> EstimationStrategy:
        """The strategy this service delegates to."""
        return self._strategy

    # --- Configuration ---

    def get_config(self) -> EstimationConfig:
        """Return the current snapshot (immutable; safe to keep)."""
        return self._config

    def update_config(
        self, partial: Mapping[str, Any] | None = None, **changes: Any
    ) -> None:
        """Install a new snapshot built from the current one plus ``changes``.

        Results already returned, and calls already in progress, keep the
        snapshot they started with.

        Raises:
            ConfigurationError: If a key is unknown or a value has the wrong type.
        """
        merged = {**(partial or {}), **changes}
        if not merged:
            return
        new_config = resolve_config(merged, base=self._config, use_env=False)
        self._config = new_config
        log.debug("Estimation config updated: %s", sorted(merged))

    # --- Estimation ---

    def estimate_from_text(
        self,
        text: str | None,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
    ) -> EstimationResult:
        """Estimate a quiz generated from free text."""
        config = self._config
        result = self._strategy.estimate_from_text(text, distribution, difficulty, config)
        return self._logged("text", result)

    def estimate_from_chunks(
        self,
        chunks: Sequence[object] | None,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
    ) -> EstimationResult:
        """Estimate a quiz generated from selected document chunks."""
        config = self._config
        result = self._strategy.estimate_from_chunks(chunks, distribution, difficulty, config)
        return self._logged("chunks", result)

    def estimate_from_document(
        self,
        document_content: str | None,
        chunks: Sequence[object] | None,
        scope: QuizScope | str | None,
        distribution: QuestionTypeDistribution | None,
        difficulty: object,
    ) -> EstimationResult:
        """Estimate a quiz generated from a document under a given scope."""
        config = self._config
        result = dispatch.estimate_from_document(
            self._strategy,
            config,
            document_content,
            chunks,
            scope,
            distribution,
            difficulty,
        )
        return self._logged("document", result)

    def _logged(self, path: str, result: EstimationResult) -> EstimationResult:
        log.debug(
            "Estimate (%s path): strategy=%s billing=%d llm=%d",
            path,
            result.strategy,
            result.estimated_billing_tokens,
            result.estimated_llm_tokens,
        )
        return result


# --- Module-level convenience ---

_default_service: TokenEstimationService | None = None


def default_service() -> TokenEstimationService:
    """Return the lazily created process-wide service."""
    global _default_service
    if _default_service is None:
        _default_service = TokenEstimationService()
    return _default_service


def estimate_from_text(
    text: str | None,
    distribution: QuestionTypeDistribution | None,
    difficulty: object,
) -> EstimationResult:
    """Estimate with the default service."""
    return default_service().estimate_from_text(text, distribution, difficulty)


def estimate_from_chunks(
    chunks: Sequence[object] | None,
    distribution: QuestionTypeDistribution | None,
    difficulty: object,
) -> EstimationResult:
    """Estimate with the default service."""
    return default_service().estimate_from_chunks(chunks, distribution, difficulty)


def estimate_from_document(
    document_content: str | None,
    chunks: Sequence[object] | None,
    scope: QuizScope | str | None,
    distribution: QuestionTypeDistribution | None,
    difficulty: object,
) -> EstimationResult:
    """Estimate with the default service."""
    return default_service().estimate_from_document(
        document_content, chunks, scope, distribution, difficulty
    )
