"""Recommendation workflow combining strategy selection and aggregation."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from .aggregator import aggregate_recommendations
from .catalog import list_crops
from .config import get_config
from .context import STRATEGY_FACTORIES, RotationContext, describe_strategies, strategy_for_key
from .exceptions import CropNotFound, EmptyCandidatePool
from .models import Crop, PlanContext, Recommendation
from .schemas import plan_from_dict
from .utils import normalize_key

_LOGGER = logging.getLogger(__name__)

__all__ = ["RotationService"]

# Flat soil columns used by stored plan records
_SOIL_COLUMNS = {
    "soil_nitrogen": "nitrogen",
    "soil_phosphorus": "phosphorus",
    "soil_potassium": "potassium",
    "soil_ph": "ph",
    "soil_organic_matter": "organic_matter",
}


def _first(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _has_any(record: Mapping[str, Any], *keys: str) -> bool:
    return any(key in record for key in keys)


class RotationService:
    """Generate ranked, yield-annotated recommendations for rotation plans."""

    def __init__(
        self,
        context: RotationContext | None = None,
        config: Mapping[str, Any] | None = None,
    ) -> None:
        self.context = context or RotationContext()
        self._config = config
        # Keeps set_strategy and execute_rotation together for each caller
        self._lock = threading.Lock()

    @property
    def config(self) -> Mapping[str, Any]:
        return self._config if self._config is not None else get_config()

    def list_strategies(self) -> list[dict[str, str]]:
        return describe_strategies()

    def generate_recommendations(
        self,
        plan: PlanContext | Mapping[str, Any],
        strategy_key: str | None = None,
        *,
        limit: int | None = None,
        strict: bool = False,
    ) -> list[Recommendation]:
        """Return the top recommendations for ``plan`` using ``strategy_key``.

        Unknown keys fall back to the configured default strategy. With
        ``strict`` an empty candidate pool raises :class:`EmptyCandidatePool`
        instead of yielding an empty list.
        """

        if not isinstance(plan, PlanContext):
            plan = plan_from_dict(plan, self.config)
        if strict and not plan.available_crops:
            raise EmptyCandidatePool("Plan has no available crops to rank")

        default_key = self.config["default_strategy"]
        if strategy_key and normalize_key(strategy_key) not in STRATEGY_FACTORIES:
            _LOGGER.info("Unknown strategy %s, using %s", strategy_key, default_key)
        strategy = strategy_for_key(strategy_key or default_key, default_key)

        with self._lock:
            self.context.set_strategy(strategy)
            ranked = self.context.execute_rotation(plan)

        if limit is None:
            limit = self.config["recommendation_limit"]
        return aggregate_recommendations(ranked, plan.field_size, limit)

    def plan_from_record(
        self, record: Mapping[str, Any], catalog: Iterable[Crop] | None = None
    ) -> PlanContext:
        """Return a :class:`PlanContext` for a stored plan ``record``.

        ``currentCropId`` is resolved against ``catalog`` (default: the bundled
        active catalog), which also supplies the candidate pool when the
        record carries none. Flat ``soil_*`` columns and the first planned
        crop's season are understood as well.
        """

        crops = list(catalog) if catalog is not None else list_crops()
        data = dict(record)

        current_id = _first(record, "currentCropId", "current_crop_id")
        if current_id is not None and not _has_any(record, "currentCrop", "current_crop"):
            data["current_crop"] = self._find_crop(crops, current_id)

        if not _has_any(record, "availableCrops", "available_crops"):
            data["available_crops"] = [crop for crop in crops if crop.is_active]

        if not _has_any(record, "soilTestResults", "soil_test_results"):
            soil = {
                name: record[column] for column, name in _SOIL_COLUMNS.items() if column in record
            }
            if soil:
                data["soil_test_results"] = soil

        if not _has_any(record, "season", "targetSeason", "target_season"):
            planned = _first(record, "plannedCrops", "planned_crops")
            if planned and isinstance(planned[0], Mapping) and planned[0].get("season"):
                data["target_season"] = planned[0]["season"]

        return plan_from_dict(data, self.config)

    def generate_for_record(
        self,
        record: Mapping[str, Any],
        catalog: Iterable[Crop] | None = None,
        *,
        strict: bool = False,
    ) -> list[Recommendation]:
        """Resolve ``record`` and rank it with its own ``rotationStrategy``."""
        plan = self.plan_from_record(record, catalog)
        key = _first(record, "rotationStrategy", "rotation_strategy")
        return self.generate_recommendations(plan, key, strict=strict)

    @staticmethod
    def _find_crop(crops: Iterable[Crop], crop_id: Any) -> Crop:
        for crop in crops:
            if str(crop.id) == str(crop_id):
                return crop
        raise CropNotFound(f"Current crop not found: {crop_id}")
