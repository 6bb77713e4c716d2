"""Crop, plan and recommendation records consumed by the strategies."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

from .constants import (
    DEFAULT_FIELD_SIZE,
    DEFAULT_GROWTH_DURATION,
    DEFAULT_SEASON,
    DEFAULT_WATER_REQUIREMENT,
)

__all__ = [
    "CropFamily",
    "NutrientLevel",
    "Season",
    "CropType",
    "CompatibilityEntry",
    "Crop",
    "SoilTestResults",
    "Climate",
    "PlanContext",
    "Recommendation",
]


class CropFamily(StrEnum):
    POACEAE = "Poaceae"
    FABACEAE = "Fabaceae"
    SOLANACEAE = "Solanaceae"
    BRASSICACEAE = "Brassicaceae"
    CUCURBITACEAE = "Cucurbitaceae"
    ASTERACEAE = "Asteraceae"
    OTHER = "Other"


class NutrientLevel(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Season(StrEnum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


class CropType(StrEnum):
    """Feeding habit derived from nutrient demand and nitrogen fixation."""

    NITROGEN_FIXER = "nitrogen-fixer"
    HEAVY_FEEDER = "heavy-feeder"
    LIGHT_FEEDER = "light-feeder"
    MODERATE_FEEDER = "moderate-feeder"


@dataclass(slots=True, frozen=True)
class CompatibilityEntry:
    """Pairwise affinity of a crop following ``crop_id`` (0-10 scale)."""

    crop_id: str | int
    score: float


@dataclass(slots=True, frozen=True)
class Crop:
    """Read-only crop record."""

    name: str
    family: str = CropFamily.OTHER
    nutrient_requirement: str = NutrientLevel.MEDIUM
    water_requirement: float = DEFAULT_WATER_REQUIREMENT
    season: tuple[str, ...] = (Season.SPRING, Season.SUMMER)
    growth_duration: int = DEFAULT_GROWTH_DURATION
    nitrogen_fixer: bool = False
    compatibility: tuple[CompatibilityEntry, ...] = ()
    id: str | int | None = None
    scientific_name: str | None = None
    soil_types: tuple[str, ...] = ("loamy",)
    is_active: bool = True
    acidity: float = 0

    @property
    def type(self) -> CropType:
        """Return the feeding habit of the crop."""
        if self.nitrogen_fixer:
            return CropType.NITROGEN_FIXER
        if self.nutrient_requirement == NutrientLevel.HIGH:
            return CropType.HEAVY_FEEDER
        if self.nutrient_requirement == NutrientLevel.LOW:
            return CropType.LIGHT_FEEDER
        return CropType.MODERATE_FEEDER

    def compatibility_with(self, previous: Crop | None) -> CompatibilityEntry | None:
        """Return the compatibility entry matching ``previous`` if present."""
        if previous is None or previous.id is None:
            return None
        for entry in self.compatibility:
            if str(entry.crop_id) == str(previous.id):
                return entry
        return None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["season"] = list(self.season)
        data["soil_types"] = list(self.soil_types)
        data["compatibility"] = [asdict(c) for c in self.compatibility]
        data["type"] = str(self.type)
        return data


@dataclass(slots=True, frozen=True)
class SoilTestResults:
    """Soil test readings. Missing readings are ``None``."""

    nitrogen: float | None = None
    phosphorus: float | None = None
    potassium: float | None = None
    ph: float | None = None
    organic_matter: float | None = None


@dataclass(slots=True, frozen=True)
class Climate:
    rainfall: float | None = None
    temp_range: str | None = None


@dataclass(slots=True)
class PlanContext:
    """Everything a strategy needs to score a candidate pool."""

    available_crops: Sequence[Crop] = ()
    current_crop: Crop | None = None
    soil_test_results: SoilTestResults = field(default_factory=SoilTestResults)
    climate: Climate | None = None
    target_season: str = DEFAULT_SEASON
    pest_history: bool = False
    field_size: float = DEFAULT_FIELD_SIZE


@dataclass(slots=True, frozen=True)
class Recommendation:
    """Scored crop produced by a strategy.

    ``score`` is only comparable within a single strategy run.
    ``expected_yield`` is attached by the aggregator.
    """

    crop: Crop
    score: float
    reason: str
    expected_yield: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "crop": self.crop.id,
            "cropName": self.crop.name,
            "score": self.score,
            "reason": self.reason,
        }
        if self.expected_yield is not None:
            data["expectedYield"] = self.expected_yield
        return data
