"""Strategy registry.

Maps strategy names to shared instances. Strategies are stateless, so one
instance per name serves every service.
"""

from __future__ import annotations

from quizcost.errors import ConfigurationError
from quizcost.strategies.base import EstimationStrategy
from quizcost.strategies.detailed import DetailedStrategy
from quizcost.strategies.linear import LinearStrategy

DEFAULT_STRATEGY = "linear"


class _StrategyRegistry:
    """Internal registry for estimation strategies."""

    def __init__(self) -> None:
        self._strategies: dict[str, EstimationStrategy] = {}

    def register(self, strategy: EstimationStrategy) -> None:
        """Register a strategy under its (lowercased) name."""
        if not isinstance(strategy, EstimationStrategy):
            raise ConfigurationError(
                f"Not an estimation strategy: {strategy!r}",
                hint="Implement name, minimum_result, estimate_from_text and estimate_from_chunks",
            )
        self._strategies[strategy.name.lower()] = strategy

    def get(self, name: str) -> EstimationStrategy:
        """Return the strategy registered under ``name``.

        Raises:
            ConfigurationError: If no strategy has that name.
        """
        key = name.strip().lower() if isinstance(name, str) else ""
        try:
            return self._strategies[key]
        except KeyError:
            raise ConfigurationError(
                f"Unknown estimation strategy: {name!r}",
                hint=f"Available strategies: {', '.join(self.names())}",
            ) from None

    def names(self) -> list[str]:
        """Sorted list of registered names."""
        return sorted(self._strategies)


_registry = _StrategyRegistry()
_registry.register(DetailedStrategy())
_registry.register(LinearStrategy())


def register_strategy(strategy: EstimationStrategy) -> None:
    """Register an additional strategy, replacing any with the same name."""
    _registry.register(strategy)


def get_strategy(name: str | None = None) -> EstimationStrategy:
    """Return a registered strategy; ``None`` selects the default."""
    return _registry.get(DEFAULT_STRATEGY if name is None else name)


def list_strategies() -> list[str]:
    """Names of all registered strategies."""
    return _registry.names()
