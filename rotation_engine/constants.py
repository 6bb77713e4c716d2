"""Central constants used across the rotation engine."""

from __future__ import annotations

# Soil test deficiency thresholds. A reading strictly below the value sets
# the corresponding deficiency flag.
NITROGEN_DEFICIENT_BELOW = 30.0
PHOSPHORUS_DEFICIENT_BELOW = 20.0
POTASSIUM_DEFICIENT_BELOW = 25.0
ORGANIC_MATTER_DEFICIENT_BELOW = 3.0

# Nutrient strategy weights
SAME_FAMILY_NUTRIENT_PENALTY = 3
LOW_FEEDER_NITROGEN_BONUS = 2
PHOSPHORUS_MATCH_BONUS = 1
NITROGEN_FIXER_BONUS = 2
COMPATIBILITY_BASELINE = 5

# Pest strategy weights
PEST_BASE_SCORE = 10
SAME_FAMILY_PEST_PENALTY = 8
PEST_HISTORY_PENALTY = 4
DIFFERENT_FAMILY_BONUS = 3
GROWTH_HABIT_BONUS = 2
PEST_PRONE_FAMILIES: frozenset[str] = frozenset({"Solanaceae", "Brassicaceae"})

# Highest band first; the first band whose floor the score reaches wins.
PEST_REASON_BANDS: tuple[tuple[float, str], ...] = (
    (8, "Excellent pest cycle disruption"),
    (6, "Good pest management choice"),
    (4, "Moderate pest control"),
)
PEST_REASON_FALLBACK = "Consider alternative for better pest control"

# Seasonal strategy weights
SEASON_MATCH_BONUS = 5
CLIMATE_MATCH_BONUS = 2
MATURES_IN_SEASON_BONUS = 2
LATE_MATURITY_PENALTY = -1
WATER_MATCH_BONUS = 3
EXCELLENT_SEASONAL_SCORE = 7
SEASON_LENGTH_DAYS: dict[str, int] = {
    "spring": 90,
    "summer": 90,
    "autumn": 90,
    "winter": 90,
}
DEFAULT_SEASON_LENGTH_DAYS = 90

# Upper bound of each water requirement band on the 0-10 scale
LOW_WATER_MAX = 3
MEDIUM_WATER_MAX = 7
# Ideal seasonal rainfall (mm) per water band as ``(low, high, high_inclusive)``
RAINFALL_BANDS: dict[str, tuple[float, float, bool]] = {
    "low": (0.0, 300.0, False),
    "medium": (300.0, 600.0, False),
    "high": (600.0, 1000.0, True),
}

# Reason strings
REASON_NITROGEN_FIXER = "Nitrogen fixing crop needed"
REASON_NUTRIENT_MATCH = "Good nutrient match"
REASON_NUTRIENT_FALLBACK = "Moderate match"
REASON_EXCELLENT_SEASONAL = "Excellent seasonal match"
REASON_SEASONAL_FALLBACK = "Seasonal suitability unknown"
REASON_SEPARATOR = ", "

# Aggregation
DEFAULT_RECOMMENDATION_LIMIT = 5
YIELD_MULTIPLIERS: dict[str, float] = {"low": 2, "medium": 4, "high": 6}
DEFAULT_YIELD_MULTIPLIER = 3

# Defaults applied when building plan contexts from partial records
DEFAULT_WATER_REQUIREMENT = 5.0
DEFAULT_GROWTH_DURATION = 90
DEFAULT_SEASON = "spring"
DEFAULT_RAINFALL = 500.0
DEFAULT_TEMP_RANGE = "moderate"
DEFAULT_FIELD_SIZE = 1.0

# Soil acidity matcher
DEFAULT_SOIL_THRESHOLD_HP = 50.0
