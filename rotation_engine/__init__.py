"""Crop rotation recommendation engine."""

from __future__ import annotations

from .aggregator import aggregate_recommendations, calculate_expected_yield
from .context import RotationContext, describe_strategies, get_available_strategies
from .exceptions import (
    ConfigError,
    CropNotFound,
    EmptyCandidatePool,
    InvalidNumeric,
    InvalidRecord,
    InvalidStrategy,
    NoStrategySelected,
    RotationError,
)
from .models import (
    Climate,
    CompatibilityEntry,
    Crop,
    CropFamily,
    CropType,
    NutrientLevel,
    PlanContext,
    Recommendation,
    Season,
    SoilTestResults,
)
from .nutrient_strategy import NutrientBasedStrategy
from .pest_strategy import PestManagementStrategy
from .rotation_service import RotationService
from .schemas import crop_from_dict, plan_from_dict
from .seasonal_strategy import SeasonalStrategy
from .soil_matcher import AcidityCheck, SoilAcidityMatcher, check_acidity, get_soil, set_soil
from .strategy import BaseStrategy, RotationStrategy

__version__ = "0.1.0"

__all__ = [
    "AcidityCheck",
    "BaseStrategy",
    "Climate",
    "CompatibilityEntry",
    "ConfigError",
    "Crop",
    "CropFamily",
    "CropNotFound",
    "CropType",
    "EmptyCandidatePool",
    "InvalidNumeric",
    "InvalidRecord",
    "InvalidStrategy",
    "NoStrategySelected",
    "NutrientBasedStrategy",
    "NutrientLevel",
    "PestManagementStrategy",
    "PlanContext",
    "Recommendation",
    "RotationContext",
    "RotationError",
    "RotationService",
    "RotationStrategy",
    "Season",
    "SeasonalStrategy",
    "SoilAcidityMatcher",
    "SoilTestResults",
    "aggregate_recommendations",
    "calculate_expected_yield",
    "check_acidity",
    "crop_from_dict",
    "describe_strategies",
    "get_available_strategies",
    "get_soil",
    "plan_from_dict",
    "set_soil",
]
