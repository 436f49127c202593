"""Interchangeable formula generations behind the estimation service."""

from quizcost.strategies.base import EstimationStrategy
from quizcost.strategies.detailed import DetailedStrategy
from quizcost.strategies.linear import LinearCalibration, LinearStrategy
from quizcost.strategies.registry import (
    DEFAULT_STRATEGY,
    get_strategy,
    list_strategies,
    register_strategy,
)

__all__ = [
    "DEFAULT_STRATEGY",
    "DetailedStrategy",
    "EstimationStrategy",
    "LinearCalibration",
    "LinearStrategy",
    "get_strategy",
    "list_strategies",
    "register_strategy",
]
