"""Truncate strategy output and attach yield estimates."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from .constants import DEFAULT_RECOMMENDATION_LIMIT, DEFAULT_YIELD_MULTIPLIER, YIELD_MULTIPLIERS
from .exceptions import InvalidNumeric
from .models import Crop, Recommendation
from .utils import parse_finite_number, warn_once

_LOGGER = logging.getLogger(__name__)

__all__ = ["yield_multiplier", "calculate_expected_yield", "aggregate_recommendations"]


def yield_multiplier(nutrient_requirement: str) -> float:
    """Return the yield multiplier for a nutrient requirement level."""
    multiplier = YIELD_MULTIPLIERS.get(str(nutrient_requirement))
    if multiplier is None:
        warn_once(
            _LOGGER,
            f"unknown_nutrient_requirement_{nutrient_requirement}",
            f"Using default yield multiplier for {nutrient_requirement!r}",
        )
        return DEFAULT_YIELD_MULTIPLIER
    return multiplier


def _field_size(value: float) -> float:
    size = parse_finite_number(value)
    if size is None or size <= 0:
        raise InvalidNumeric(f"field_size must be a positive number, got {value!r}")
    return size


def calculate_expected_yield(crop: Crop, field_size: float) -> float:
    """Return the simplified yield estimate for ``crop`` over ``field_size``."""
    return _field_size(field_size) * yield_multiplier(crop.nutrient_requirement)


def aggregate_recommendations(
    ranked: Sequence[Recommendation],
    field_size: float,
    limit: int = DEFAULT_RECOMMENDATION_LIMIT,
) -> list[Recommendation]:
    """Return the first ``limit`` entries of ``ranked`` with expected yields.

    ``ranked`` is assumed to be in strategy order already and is never
    re-sorted. The input records are left untouched.
    """

    if limit < 0:
        raise ValueError("limit must not be negative")
    size = _field_size(field_size)
    top = list(ranked[:limit])
    if len(ranked) > limit:
        _LOGGER.debug("Truncated %d recommendations to %d", len(ranked), limit)
    return [
        replace(rec, expected_yield=size * yield_multiplier(rec.crop.nutrient_requirement))
        for rec in top
    ]
