"""quizcost: pre-flight token cost estimates for AI quiz generation.

Public API:
    - TokenEstimationService: estimate_from_text / _chunks / _document
    - EstimationConfig, resolve_config: immutable configuration snapshots
    - DetailedStrategy, LinearStrategy: the two formula generations
    - check_affordability, humanize_tokens: billing-side helpers
"""

from __future__ import annotations

import logging

from quizcost.billing import (
    AffordabilityCheck,
    TokenBalance,
    check_affordability,
    humanize_tokens,
)
from quizcost.config import DEFAULT_CONFIG, EstimationConfig, Settings, resolve_config
from quizcost.errors import ConfigurationError, QuizcostError
from quizcost.service import (
    TokenEstimationService,
    estimate_from_chunks,
    estimate_from_document,
    estimate_from_text,
)
from quizcost.strategies import (
    DEFAULT_STRATEGY,
    DetailedStrategy,
    EstimationStrategy,
    LinearCalibration,
    LinearStrategy,
    get_strategy,
    list_strategies,
    register_strategy,
)
from quizcost.types import (
    Difficulty,
    DocumentChunk,
    EstimationResult,
    QuestionType,
    QuizScope,
    effective_char_count,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("quizcost")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("quizcost").addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_STRATEGY",
    "AffordabilityCheck",
    "ConfigurationError",
    "DetailedStrategy",
    "Difficulty",
    "DocumentChunk",
    "EstimationConfig",
    "EstimationResult",
    "EstimationStrategy",
    "LinearCalibration",
    "LinearStrategy",
    "QuestionType",
    "QuizScope",
    "QuizcostError",
    "Settings",
    "TokenBalance",
    "TokenEstimationService",
    "check_affordability",
    "effective_char_count",
    "estimate_from_chunks",
    "estimate_from_document",
    "estimate_from_text",
    "get_strategy",
    "humanize_tokens",
    "list_strategies",
    "register_strategy",
    "resolve_config",
]
