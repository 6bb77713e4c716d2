"""Strategy capability shared by every rotation scoring algorithm."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, ClassVar, Protocol

from .constants import REASON_SEPARATOR
from .exceptions import InvalidStrategy
from .models import Crop, PlanContext, Recommendation

__all__ = [
    "RotationStrategy",
    "BaseStrategy",
    "rank_recommendations",
    "validate_strategy",
    "join_reasons",
]

_REQUIRED_MEMBERS = ("calculate_rotation", "name", "description")


class RotationStrategy(Protocol):
    """Anything that ranks candidate crops for a plan.

    ``calculate_rotation`` must return exactly one :class:`Recommendation`
    per crop in ``plan.available_crops`` ordered by descending score, with
    equal scores kept in candidate order.
    """

    def calculate_rotation(self, plan: PlanContext) -> list[Recommendation]: ...

    def name(self) -> str: ...

    def description(self) -> str: ...


def validate_strategy(candidate: Any) -> RotationStrategy:
    """Return ``candidate`` if it provides the strategy capability.

    Classes are rejected so an uninstantiated strategy type cannot be
    activated by mistake.
    """

    if candidate is None or isinstance(candidate, type):
        raise InvalidStrategy(f"{candidate!r} is not a rotation strategy instance")
    missing = [m for m in _REQUIRED_MEMBERS if not callable(getattr(candidate, m, None))]
    if missing:
        raise InvalidStrategy(
            f"{type(candidate).__name__} does not implement {', '.join(missing)}"
        )
    return candidate


def rank_recommendations(recommendations: Iterable[Recommendation]) -> list[Recommendation]:
    """Return ``recommendations`` sorted by score, highest first.

    ``sorted`` is stable with ``reverse=True`` so ties keep candidate order.
    """

    return sorted(recommendations, key=lambda rec: rec.score, reverse=True)


def join_reasons(reasons: Iterable[str], fallback: str) -> str:
    """Return ``reasons`` joined for display or ``fallback`` when there are none."""
    text = REASON_SEPARATOR.join(reasons)
    return text or fallback


class BaseStrategy(ABC):
    """Convenience base scoring each candidate independently."""

    summary: ClassVar[str] = "Base rotation strategy"

    def name(self) -> str:
        return type(self).__name__

    def description(self) -> str:
        return self.summary

    def calculate_rotation(self, plan: PlanContext) -> list[Recommendation]:
        return rank_recommendations(self.score_crop(crop, plan) for crop in plan.available_crops)

    @abstractmethod
    def score_crop(self, crop: Crop, plan: PlanContext) -> Recommendation:
        """Return the recommendation for a single candidate."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
