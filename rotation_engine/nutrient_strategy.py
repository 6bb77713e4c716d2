"""Rotation scoring driven by soil nutrient deficiencies."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    COMPATIBILITY_BASELINE,
    LOW_FEEDER_NITROGEN_BONUS,
    NITROGEN_DEFICIENT_BELOW,
    NITROGEN_FIXER_BONUS,
    ORGANIC_MATTER_DEFICIENT_BELOW,
    PHOSPHORUS_DEFICIENT_BELOW,
    PHOSPHORUS_MATCH_BONUS,
    POTASSIUM_DEFICIENT_BELOW,
    REASON_NITROGEN_FIXER,
    REASON_NUTRIENT_FALLBACK,
    REASON_NUTRIENT_MATCH,
    SAME_FAMILY_NUTRIENT_PENALTY,
)
from .models import Crop, NutrientLevel, PlanContext, Recommendation, SoilTestResults
from .strategy import BaseStrategy, join_reasons

__all__ = ["NutrientDeficiencies", "analyze_soil", "NutrientBasedStrategy"]


@dataclass(slots=True, frozen=True)
class NutrientDeficiencies:
    """Deficiency flags derived from a soil test.

    ``potassium`` is reported but does not currently affect scoring.
    """

    nitrogen: bool = False
    phosphorus: bool = False
    potassium: bool = False
    organic_matter: bool = False


def _below(value: float | None, threshold: float) -> bool:
    return value is not None and value < threshold


def analyze_soil(results: SoilTestResults | None) -> NutrientDeficiencies:
    """Return deficiency flags for ``results``. Missing readings are never deficient."""

    if results is None:
        return NutrientDeficiencies()
    return NutrientDeficiencies(
        nitrogen=_below(results.nitrogen, NITROGEN_DEFICIENT_BELOW),
        phosphorus=_below(results.phosphorus, PHOSPHORUS_DEFICIENT_BELOW),
        potassium=_below(results.potassium, POTASSIUM_DEFICIENT_BELOW),
        organic_matter=_below(results.organic_matter, ORGANIC_MATTER_DEFICIENT_BELOW),
    )


class NutrientBasedStrategy(BaseStrategy):
    summary = "Focuses on balancing soil nutrients through strategic crop sequencing"

    def score_crop(self, crop: Crop, plan: PlanContext) -> Recommendation:
        deficiencies = analyze_soil(plan.soil_test_results)
        current = plan.current_crop
        score: float = 0

        if current is not None and crop.family == current.family:
            score -= SAME_FAMILY_NUTRIENT_PENALTY

        score += self.match_nutrient_needs(crop, deficiencies)

        if deficiencies.nitrogen and crop.nitrogen_fixer:
            score += NITROGEN_FIXER_BONUS

        score += self.compatibility_bonus(crop, current)

        return Recommendation(
            crop=crop,
            score=score,
            reason=self.generate_reason(crop, score, deficiencies),
        )

    @staticmethod
    def match_nutrient_needs(crop: Crop, deficiencies: NutrientDeficiencies) -> int:
        score = 0
        if deficiencies.nitrogen and crop.nutrient_requirement == NutrientLevel.LOW:
            score += LOW_FEEDER_NITROGEN_BONUS
        if deficiencies.phosphorus and crop.nutrient_requirement != NutrientLevel.HIGH:
            score += PHOSPHORUS_MATCH_BONUS
        return score

    @staticmethod
    def compatibility_bonus(crop: Crop, current: Crop | None) -> float:
        """Return the compatibility score centred on the neutral midpoint."""
        entry = crop.compatibility_with(current)
        if entry is None:
            return 0
        return entry.score - COMPATIBILITY_BASELINE

    @staticmethod
    def generate_reason(crop: Crop, score: float, deficiencies: NutrientDeficiencies) -> str:
        reasons: list[str] = []
        if crop.nitrogen_fixer and deficiencies.nitrogen:
            reasons.append(REASON_NITROGEN_FIXER)
        if score > 0:
            reasons.append(REASON_NUTRIENT_MATCH)
        return join_reasons(reasons, REASON_NUTRIENT_FALLBACK)
