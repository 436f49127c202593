"""Estimator configuration: pydantic schema wall, frozen runtime snapshot.

Resolution is resolve-once, freeze-then-flow. Input from defaults, a base
snapshot, ``QUIZCOST_*`` environment variables and programmatic overrides is
validated through ``Settings`` and frozen into an ``EstimationConfig``. A
snapshot is never mutated; updates build a new one.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
import logging
import os
from types import MappingProxyType
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from quizcost.errors import ConfigurationError
from quizcost.types import Difficulty, QuestionType

log = logging.getLogger(__name__)

ENV_PREFIX = "QUIZCOST_"
STRATEGY_ENV_VAR = "QUIZCOST_STRATEGY"

# --- Calibration tables ---

TEMPLATE_TOKENS_BY_TYPE: Mapping[QuestionType, int] = MappingProxyType(
    {
        QuestionType.MCQ_SINGLE: 80,
        QuestionType.MCQ_MULTI: 90,
        QuestionType.TRUE_FALSE: 60,
        QuestionType.OPEN: 100,
        QuestionType.FILL_GAP: 85,
        QuestionType.ORDERING: 95,
        QuestionType.COMPLIANCE: 100,
        QuestionType.MATCHING: 100,
        QuestionType.HOTSPOT: 100,
    }
)

COMPLETION_TOKENS_BY_TYPE: Mapping[QuestionType, int] = MappingProxyType(
    {
        QuestionType.MCQ_SINGLE: 120,
        QuestionType.MCQ_MULTI: 140,
        QuestionType.TRUE_FALSE: 60,
        QuestionType.OPEN: 180,
        QuestionType.FILL_GAP: 120,
        QuestionType.ORDERING: 140,
        QuestionType.COMPLIANCE: 160,
        QuestionType.MATCHING: 160,
        QuestionType.HOTSPOT: 160,
    }
)

DIFFICULTY_MULTIPLIERS: Mapping[Difficulty, float] = MappingProxyType(
    {
        Difficulty.EASY: 0.9,
        Difficulty.MEDIUM: 1.0,
        Difficulty.HARD: 1.15,
    }
)

# Compensates systematic underestimation of the detailed model
ESTIMATION_COEFFICIENT = 1.3

# Used when a table entry for a type or difficulty is missing or 0
FALLBACK_TEMPLATE_TOKENS = 80
FALLBACK_COMPLETION_TOKENS = 120
FALLBACK_DIFFICULTY_MULTIPLIER = 1.0

_TABLE_FIELDS = frozenset(
    {"question_template_tokens", "completion_tokens_by_type", "difficulty_multipliers"}
)


# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Validation schema for every configuration input.

    Accepts snake_case names and the client's camelCase aliases. Negative
    numbers are normalized to 0 rather than rejected; values of the wrong type,
    infinities, NaN and unknown keys fail validation.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, allow_inf_nan=False)

    chars_per_token: float = Field(default=4.0, alias="charsPerToken")
    token_to_llm_ratio: int = Field(default=1000, alias="tokenToLlmRatio")
    safety_factor: float = Field(default=1.2, alias="safetyFactor")
    system_prompt_tokens: int = Field(default=300, alias="systemPromptTokens")
    context_template_tokens: int = Field(default=150, alias="contextTemplateTokens")
    question_template_tokens: dict[QuestionType, int] = Field(
        default_factory=lambda: dict(TEMPLATE_TOKENS_BY_TYPE),
        alias="questionTemplateTokens",
    )
    completion_tokens_by_type: dict[QuestionType, int] = Field(
        default_factory=lambda: dict(COMPLETION_TOKENS_BY_TYPE),
        alias="completionTokensByType",
    )
    difficulty_multipliers: dict[Difficulty, float] = Field(
        default_factory=lambda: dict(DIFFICULTY_MULTIPLIERS),
        alias="difficultyMultipliers",
    )
    estimation_coefficient: float = Field(
        default=ESTIMATION_COEFFICIENT, alias="estimationCoefficient"
    )

    @field_validator(
        "chars_per_token",
        "token_to_llm_ratio",
        "safety_factor",
        "system_prompt_tokens",
        "context_template_tokens",
        "estimation_coefficient",
    )
    @classmethod
    def clamp_non_negative(cls, v: float) -> float:
        """Normalize negative scalars to 0."""
        return v if v >= 0 else type(v)(0)

    @field_validator(
        "question_template_tokens", "completion_tokens_by_type", "difficulty_multipliers"
    )
    @classmethod
    def clamp_table_non_negative(cls, v: dict[Any, Any]) -> dict[Any, Any]:
        """Normalize negative table entries to 0."""
        return {k: (n if n >= 0 else type(n)(0)) for k, n in v.items()}


# --- Immutable runtime payload ---


def _freeze(m: Mapping[Any, Any]) -> Mapping[Any, Any]:
    if isinstance(m, MappingProxyType):
        return m
    return MappingProxyType(dict(m))


@dataclass(frozen=True)
class EstimationConfig:
    """Immutable configuration snapshot observed by one estimation call.

    Build through ``resolve_config`` to get validation and normalization;
    direct construction is accepted for tests and trusted callers.
    """

    chars_per_token: float = 4.0
    token_to_llm_ratio: int = 1000
    safety_factor: float = 1.2
    system_prompt_tokens: int = 300
    context_template_tokens: int = 150
    question_template_tokens: Mapping[QuestionType, int] = field(
        default_factory=lambda: TEMPLATE_TOKENS_BY_TYPE
    )
    completion_tokens_by_type: Mapping[QuestionType, int] = field(
        default_factory=lambda: COMPLETION_TOKENS_BY_TYPE
    )
    difficulty_multipliers: Mapping[Difficulty, float] = field(
        default_factory=lambda: DIFFICULTY_MULTIPLIERS
    )
    estimation_coefficient: float = ESTIMATION_COEFFICIENT

    def __post_init__(self) -> None:
        """Freeze table fields so snapshots stay read-only."""
        for name in _TABLE_FIELDS:
            object.__setattr__(self, name, _freeze(getattr(self, name)))

    # --- Accessors with fallbacks ---

    @property
    def effective_ratio(self) -> int:
        """Billing divisor, never below 1."""
        return max(1, int(self.token_to_llm_ratio))

    def template_tokens_for(self, qtype: QuestionType) -> int:
        """Prompt template overhead for one question type; 0 means unset."""
        return self.question_template_tokens.get(qtype) or FALLBACK_TEMPLATE_TOKENS

    def completion_tokens_for(self, qtype: QuestionType) -> int:
        """Base completion tokens per generated question of one type; 0 means unset."""
        return self.completion_tokens_by_type.get(qtype) or FALLBACK_COMPLETION_TOKENS

    def difficulty_multiplier_for(self, difficulty: object) -> float:
        """Completion multiplier for a difficulty; unknown or 0 gets 1.0."""
        parsed = Difficulty.parse(difficulty)
        if parsed is None:
            return FALLBACK_DIFFICULTY_MULTIPLIER
        return self.difficulty_multipliers.get(parsed) or FALLBACK_DIFFICULTY_MULTIPLIER

    # --- Copy-on-write ---

    def replace(self, **changes: Any) -> EstimationConfig:
        """Return a new validated snapshot with ``changes`` applied."""
        return resolve_config(changes, base=self, use_env=False)

    def to_dict(self) -> dict[str, Any]:
        """Plain dict copy of the snapshot (tables keyed by enum)."""
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = dict(value) if f.name in _TABLE_FIELDS else value
        return out


DEFAULT_CONFIG = EstimationConfig()


# --- Loading ---


def load_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Read scalar ``QUIZCOST_*`` variables into a raw override mapping.

    Values stay strings; ``Settings`` does the coercion. Tables are not
    configurable from the environment.
    """
    env = os.environ if environ is None else environ
    scalar_fields = set(Settings.model_fields) - _TABLE_FIELDS
    config: dict[str, Any] = {}
    for key, value in env.items():
        if not key.startswith(ENV_PREFIX) or key == STRATEGY_ENV_VAR:
            continue
        name = key[len(ENV_PREFIX) :].lower()
        if name not in scalar_fields:
            log.debug("Ignoring unrecognized environment variable %s", key)
            continue
        config[name] = value
    return config


def _explicit_fields(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Validate one layer and keep only the fields it actually set."""
    settings = Settings.model_validate(dict(layer))
    return settings.model_dump(include=settings.model_fields_set)


def _merge(base: dict[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for name, value in layer.items():
        if name in _TABLE_FIELDS and isinstance(merged.get(name), Mapping):
            merged[name] = {**merged[name], **value}
        else:
            merged[name] = value
    return merged


def resolve_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    base: EstimationConfig | None = None,
    use_env: bool = True,
) -> EstimationConfig:
    """Resolve configuration into an immutable ``EstimationConfig``.

    Precedence: defaults < base snapshot < environment < overrides. Table
    overrides merge per key into the table below them.

    Raises:
        ConfigurationError: If a value has the wrong type or a key is unknown.
    """
    layers: list[Mapping[str, Any]] = []
    if base is not None:
        layers.append(base.to_dict())
    if use_env:
        load_dotenv()
        layers.append(load_env())
    if overrides:
        layers.append(overrides)

    merged: dict[str, Any] = Settings().model_dump()
    try:
        for layer in layers:
            merged = _merge(merged, _explicit_fields(layer))
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        raise ConfigurationError(
            f"Configuration validation failed: {loc}: {msg}",
            hint="Check field names and value types against quizcost.config.Settings",
        ) from e

    return EstimationConfig(**settings.model_dump())


def strategy_from_env(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the strategy name selected by ``QUIZCOST_STRATEGY``, if any."""
    env = os.environ if environ is None else environ
    value = env.get(STRATEGY_ENV_VAR, "").strip()
    return value or None


__all__ = [
    "COMPLETION_TOKENS_BY_TYPE",
    "DEFAULT_CONFIG",
    "DIFFICULTY_MULTIPLIERS",
    "ESTIMATION_COEFFICIENT",
    "TEMPLATE_TOKENS_BY_TYPE",
    "EstimationConfig",
    "Settings",
    "load_env",
    "resolve_config",
    "strategy_from_env",
]
