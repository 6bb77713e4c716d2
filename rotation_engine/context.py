"""Runtime-swappable holder for the active rotation strategy."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from .exceptions import InvalidStrategy, NoStrategySelected
from .models import PlanContext, Recommendation
from .nutrient_strategy import NutrientBasedStrategy
from .pest_strategy import PestManagementStrategy
from .seasonal_strategy import SeasonalStrategy
from .strategy import RotationStrategy, validate_strategy
from .utils import normalize_key

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "STRATEGY_FACTORIES",
    "RotationContext",
    "get_available_strategies",
    "describe_strategies",
    "strategy_for_key",
]

STRATEGY_FACTORIES: dict[str, Callable[[], RotationStrategy]] = {
    "nutrient": NutrientBasedStrategy,
    "pest": PestManagementStrategy,
    "seasonal": SeasonalStrategy,
}


def get_available_strategies() -> dict[str, RotationStrategy]:
    """Return a fresh instance of every built-in strategy keyed by name."""
    return {key: factory() for key, factory in STRATEGY_FACTORIES.items()}


def describe_strategies() -> list[dict[str, str]]:
    """Return ``key``, ``name`` and ``description`` for each built-in strategy."""
    return [
        {"key": key, "name": strategy.name(), "description": strategy.description()}
        for key, strategy in get_available_strategies().items()
    ]


def strategy_for_key(key: str | None, default: str = "nutrient") -> RotationStrategy:
    """Return a new strategy for ``key`` falling back to ``default``.

    Unknown keys (including ``mixed``) resolve to the default strategy.
    """

    factory = STRATEGY_FACTORIES.get(normalize_key(key)) if key else None
    if factory is None:
        factory = STRATEGY_FACTORIES.get(normalize_key(default), NutrientBasedStrategy)
    return factory()


class RotationContext:
    """Hold at most one active strategy and delegate rotations to it.

    The active slot is shared between threads so reads and writes go
    through a lock. Scoring itself runs outside the lock since strategies
    are pure.
    """

    def __init__(self, strategy: Any | None = None) -> None:
        self._lock = threading.Lock()
        self._strategy: RotationStrategy | None = None
        if strategy is not None:
            self.set_strategy(strategy)

    @property
    def strategy(self) -> RotationStrategy | None:
        with self._lock:
            return self._strategy

    def set_strategy(self, strategy: Any) -> None:
        """Activate ``strategy`` replacing any current one."""
        try:
            validated = validate_strategy(strategy)
        except InvalidStrategy:
            _LOGGER.warning("Rejected strategy %r", strategy)
            raise
        with self._lock:
            previous = self._strategy
            self._strategy = validated
        _LOGGER.debug(
            "Active strategy changed from %s to %s",
            previous.name() if previous is not None else None,
            validated.name(),
        )

    def clear_strategy(self) -> None:
        with self._lock:
            self._strategy = None

    def execute_rotation(self, plan: PlanContext) -> list[Recommendation]:
        """Run the active strategy against ``plan`` and return its ranking unmodified."""
        strategy = self.strategy
        if strategy is None:
            raise NoStrategySelected("No strategy set. Use set_strategy() first.")
        _LOGGER.info("Executing %s strategy", strategy.name())
        return strategy.calculate_rotation(plan)

    def get_available_strategies(self) -> dict[str, RotationStrategy]:
        return get_available_strategies()
