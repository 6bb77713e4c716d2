"""Rotation scoring that matches crops to season and climate."""

from __future__ import annotations

from .constants import (
    CLIMATE_MATCH_BONUS,
    DEFAULT_SEASON_LENGTH_DAYS,
    EXCELLENT_SEASONAL_SCORE,
    LATE_MATURITY_PENALTY,
    LOW_WATER_MAX,
    MATURES_IN_SEASON_BONUS,
    MEDIUM_WATER_MAX,
    RAINFALL_BANDS,
    REASON_EXCELLENT_SEASONAL,
    REASON_SEASONAL_FALLBACK,
    SEASON_LENGTH_DAYS,
    SEASON_MATCH_BONUS,
    WATER_MATCH_BONUS,
)
from .models import Climate, Crop, CropFamily, PlanContext, Recommendation
from .strategy import BaseStrategy, join_reasons
from .utils import normalize_key

__all__ = ["SeasonalStrategy", "water_category", "rainfall_matches"]


def water_category(requirement: float) -> str:
    """Return ``low``, ``medium`` or ``high`` for a 0-10 water requirement."""
    if requirement <= LOW_WATER_MAX:
        return "low"
    if requirement <= MEDIUM_WATER_MAX:
        return "medium"
    return "high"


def rainfall_matches(requirement: float, rainfall: float) -> bool:
    """Return ``True`` if ``rainfall`` lies in the ideal band for ``requirement``."""
    low, high, high_inclusive = RAINFALL_BANDS[water_category(requirement)]
    if rainfall < low:
        return False
    return rainfall <= high if high_inclusive else rainfall < high


class SeasonalStrategy(BaseStrategy):
    summary = "Focuses on matching crops to seasonal conditions and climate"

    def score_crop(self, crop: Crop, plan: PlanContext) -> Recommendation:
        season = plan.target_season
        in_season = season in crop.season
        score: float = 0

        if in_season:
            score += SEASON_MATCH_BONUS

        score += self.climate_suitability(crop, plan.climate)
        score += self.growth_duration_fit(crop, season)

        climate = plan.climate
        if climate is not None and climate.rainfall is not None:
            if rainfall_matches(crop.water_requirement, climate.rainfall):
                score += WATER_MATCH_BONUS

        reasons: list[str] = []
        if in_season:
            reasons.append(f"Suitable for {season}")
        if score > EXCELLENT_SEASONAL_SCORE:
            reasons.append(REASON_EXCELLENT_SEASONAL)

        return Recommendation(
            crop=crop,
            score=score,
            reason=join_reasons(reasons, REASON_SEASONAL_FALLBACK),
        )

    @staticmethod
    def climate_suitability(crop: Crop, climate: Climate | None) -> int:
        """Return the climate bonus for ``crop`` under ``climate``."""
        # Only grasses in a moderate temperature band are covered so far.
        if climate is None or not climate.temp_range:
            return 0
        if crop.family == CropFamily.POACEAE and normalize_key(climate.temp_range) == "moderate":
            return CLIMATE_MATCH_BONUS
        return 0

    @staticmethod
    def growth_duration_fit(crop: Crop, season: str) -> int:
        available = SEASON_LENGTH_DAYS.get(str(season), DEFAULT_SEASON_LENGTH_DAYS)
        if crop.growth_duration <= available:
            return MATURES_IN_SEASON_BONUS
        return LATE_MATURITY_PENALTY
