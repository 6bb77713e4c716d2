"""Rotation scoring that breaks pest and disease cycles."""

from __future__ import annotations

from .constants import (
    DIFFERENT_FAMILY_BONUS,
    GROWTH_HABIT_BONUS,
    PEST_BASE_SCORE,
    PEST_HISTORY_PENALTY,
    PEST_PRONE_FAMILIES,
    PEST_REASON_BANDS,
    PEST_REASON_FALLBACK,
    SAME_FAMILY_PEST_PENALTY,
)
from .models import Crop, PlanContext, Recommendation
from .strategy import BaseStrategy

__all__ = ["PestManagementStrategy", "classify_pest_score"]


def classify_pest_score(score: float) -> str:
    """Return the rationale for a clamped pest score."""
    for floor, reason in PEST_REASON_BANDS:
        if score >= floor:
            return reason
    return PEST_REASON_FALLBACK


class PestManagementStrategy(BaseStrategy):
    """Prefer crops that interrupt the pests carried by the current crop.

    Scores start at ``PEST_BASE_SCORE`` and are clamped at zero so no
    negative score ever surfaces.
    """

    summary = "Focuses on breaking pest and disease cycles through crop diversity"

    def score_crop(self, crop: Crop, plan: PlanContext) -> Recommendation:
        current = plan.current_crop
        score: float = PEST_BASE_SCORE

        if current is not None and crop.family == current.family:
            score -= SAME_FAMILY_PEST_PENALTY

        if self.has_common_pests(plan.pest_history, crop.family):
            score -= PEST_HISTORY_PENALTY

        if current is not None and crop.family != current.family:
            score += DIFFERENT_FAMILY_BONUS

        score += self.growth_habit_change(current, crop)

        score = max(0, score)
        return Recommendation(crop=crop, score=score, reason=classify_pest_score(score))

    @staticmethod
    def has_common_pests(pest_history: bool, family: str) -> bool:
        return bool(pest_history) and family in PEST_PRONE_FAMILIES

    @staticmethod
    def growth_habit_change(current: Crop | None, candidate: Crop) -> int:
        """Return a bonus when the feeding habit changes between plantings."""
        if current is None:
            return 0
        return GROWTH_HABIT_BONUS if candidate.type != current.type else 0
