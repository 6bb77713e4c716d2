"""Voluptuous schemas turning untrusted mappings into rotation records.

Records handed over by storage or HTTP layers may use camelCase
(``nutrientRequirement``) or snake_case keys and may carry seasons as comma
delimited text. Everything is normalised here so the strategies only ever
see typed dataclasses.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

import voluptuous as vol
from voluptuous.humanize import humanize_error

from .constants import DEFAULT_RAINFALL, DEFAULT_SEASON, DEFAULT_TEMP_RANGE
from .exceptions import InvalidRecord
from .models import (
    Climate,
    CompatibilityEntry,
    Crop,
    CropFamily,
    NutrientLevel,
    PlanContext,
    Season,
    SoilTestResults,
)
from .utils import normalize_key

__all__ = [
    "CROP_SCHEMA",
    "SOIL_TEST_SCHEMA",
    "CLIMATE_SCHEMA",
    "PLAN_SCHEMA",
    "crop_from_dict",
    "soil_tests_from_dict",
    "climate_from_dict",
    "plan_from_dict",
    "parse_season",
]

_CAMEL_PATTERN = re.compile(r"(?<=[a-z0-9])([A-Z])")

CROP_ALIASES = {"_id": "id", "soil_type": "soil_types"}
COMPATIBILITY_ALIASES = {"crop": "crop_id"}
PLAN_ALIASES = {
    "season": "target_season",
    "soil_tests": "soil_test_results",
}

_FAMILIES = {normalize_key(f.value): f for f in CropFamily}
_SEASONS = {s.value: s for s in Season}


def _snake(key: Any) -> str:
    return _CAMEL_PATTERN.sub(r"_\1", str(key)).lower()


def _canonical(data: Any, aliases: Mapping[str, str]) -> dict[str, Any]:
    """Return ``data`` with snake_case keys and aliases resolved."""
    if not isinstance(data, Mapping):
        raise vol.Invalid("expected a mapping")
    result: dict[str, Any] = {}
    for key, value in data.items():
        name = _snake(key)
        result[aliases.get(name, name)] = value
    return result


def _text_items(value: Any) -> list[str]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, Iterable) and not isinstance(value, Mapping):
        items = [str(v) for v in value]
    else:
        raise vol.Invalid("expected a list or comma separated text")
    return [item.strip() for item in items if item.strip()]


def parse_season(value: Any) -> Season:
    """Return ``value`` as a :class:`Season` or raise :class:`vol.Invalid`."""
    key = normalize_key(value) if value is not None else ""
    season = _SEASONS.get(key)
    if season is None:
        raise vol.Invalid(f"unknown season {value!r}")
    return season


def _season_list(value: Any) -> tuple[Season, ...]:
    return tuple(parse_season(item) for item in _text_items(value))


def _text_tuple(value: Any) -> tuple[str, ...]:
    return tuple(_text_items(value))


def _family(value: Any) -> CropFamily:
    family = _FAMILIES.get(normalize_key(value))
    if family is None:
        raise vol.Invalid(f"unknown crop family {value!r}")
    return family


def _nutrient_level(value: Any) -> NutrientLevel:
    try:
        return NutrientLevel(str(value).strip().lower())
    except ValueError as err:
        raise vol.Invalid(f"unknown nutrient requirement {value!r}") from err


def _drop_none(data: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


_Reading = vol.Any(vol.All(vol.Coerce(float), vol.Range(min=0, max=100)), None)

COMPATIBILITY_SCHEMA = vol.Schema(
    {
        vol.Required("crop_id"): vol.Any(str, int),
        vol.Required("score"): vol.All(vol.Coerce(float), vol.Range(min=0, max=10)),
    },
    extra=vol.REMOVE_EXTRA,
)


def _compatibility_entry(value: Any) -> CompatibilityEntry:
    if isinstance(value, CompatibilityEntry):
        return value
    data = COMPATIBILITY_SCHEMA(_canonical(value, COMPATIBILITY_ALIASES))
    return CompatibilityEntry(**data)


CROP_SCHEMA = vol.Schema(
    {
        vol.Required("name"): vol.All(str, vol.Strip, vol.Length(min=1)),
        vol.Optional("id"): vol.Any(str, int, None),
        vol.Optional("family"): vol.Any(_family, None),
        vol.Optional("nutrient_requirement"): vol.Any(_nutrient_level, None),
        vol.Optional("water_requirement"): vol.Any(
            vol.All(vol.Coerce(float), vol.Range(min=0, max=10)), None
        ),
        vol.Optional("season"): vol.Any(_season_list, None),
        vol.Optional("growth_duration"): vol.Any(
            vol.All(vol.Coerce(int), vol.Range(min=30, max=365)), None
        ),
        vol.Optional("nitrogen_fixer"): vol.Any(None, vol.Boolean()),
        vol.Optional("compatibility"): vol.Any(
            vol.All([_compatibility_entry], vol.Coerce(tuple)), None
        ),
        vol.Optional("scientific_name"): vol.Any(str, None),
        vol.Optional("soil_types"): vol.Any(_text_tuple, None),
        vol.Optional("is_active"): vol.Any(None, vol.Boolean()),
        vol.Optional("acidity"): _Reading,
    },
    extra=vol.REMOVE_EXTRA,
)

SOIL_TEST_SCHEMA = vol.Schema(
    {
        vol.Optional("nitrogen"): _Reading,
        vol.Optional("phosphorus"): _Reading,
        vol.Optional("potassium"): _Reading,
        vol.Optional("ph"): vol.Any(vol.All(vol.Coerce(float), vol.Range(min=0, max=14)), None),
        vol.Optional("organic_matter"): _Reading,
    },
    extra=vol.REMOVE_EXTRA,
)

CLIMATE_SCHEMA = vol.Schema(
    {
        vol.Optional("rainfall"): vol.Any(vol.All(vol.Coerce(float), vol.Range(min=0)), None),
        vol.Optional("temp_range"): vol.Any(vol.All(str, vol.Strip, vol.Lower), None),
    },
    extra=vol.REMOVE_EXTRA,
)


def _crop(value: Any) -> Crop:
    if isinstance(value, Crop):
        return value
    data = CROP_SCHEMA(_canonical(value, CROP_ALIASES))
    return Crop(**_drop_none(data))


def _optional_crop(value: Any) -> Crop | None:
    return None if value is None else _crop(value)


def _soil_tests(value: Any) -> SoilTestResults:
    if isinstance(value, SoilTestResults):
        return value
    if value is None:
        return SoilTestResults()
    return SoilTestResults(**SOIL_TEST_SCHEMA(_canonical(value, {})))


def _climate(value: Any) -> Climate | None:
    if value is None or isinstance(value, Climate):
        return value
    return Climate(**CLIMATE_SCHEMA(_canonical(value, {})))


PLAN_SCHEMA = vol.Schema(
    {
        vol.Optional("available_crops"): vol.All(
            vol.Any(None, [_crop], (_crop,)), lambda v: tuple(v or ())
        ),
        vol.Optional("current_crop"): _optional_crop,
        vol.Optional("soil_test_results"): _soil_tests,
        vol.Optional("climate"): _climate,
        vol.Optional("target_season"): vol.Any(parse_season, None),
        vol.Optional("pest_history"): vol.Any(None, vol.Boolean()),
        vol.Optional("field_size"): vol.Any(
            vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False)), None
        ),
    },
    extra=vol.REMOVE_EXTRA,
)


def _validate(schema: vol.Schema, data: Any, kind: str) -> dict[str, Any]:
    try:
        return schema(data)
    except vol.Invalid as err:
        raise InvalidRecord(f"Invalid {kind}: {humanize_error(data, err)}") from err


def crop_from_dict(data: Mapping[str, Any] | Crop) -> Crop:
    """Return a :class:`Crop` built from a crop record mapping."""

    if isinstance(data, Crop):
        return data
    try:
        canonical = _canonical(data, CROP_ALIASES)
    except vol.Invalid as err:
        raise InvalidRecord(f"Invalid crop: {err}") from err
    return Crop(**_drop_none(_validate(CROP_SCHEMA, canonical, "crop")))


def soil_tests_from_dict(data: Mapping[str, Any] | None) -> SoilTestResults:
    """Return :class:`SoilTestResults` from a soil test mapping."""

    try:
        return _soil_tests(data)
    except vol.Invalid as err:
        raise InvalidRecord(f"Invalid soil test results: {humanize_error(data, err)}") from err


def climate_from_dict(data: Mapping[str, Any] | None) -> Climate | None:
    """Return :class:`Climate` from a climate mapping."""

    try:
        return _climate(data)
    except vol.Invalid as err:
        raise InvalidRecord(f"Invalid climate: {humanize_error(data, err)}") from err


def plan_from_dict(
    data: Mapping[str, Any], defaults: Mapping[str, Any] | None = None
) -> PlanContext:
    """Return a :class:`PlanContext` from a plan payload.

    ``defaults`` supplies ``default_season`` and ``default_climate`` for
    payloads that omit them. When not given the loaded configuration is used.
    """

    if defaults is None:
        from .config import get_config

        defaults = get_config()

    try:
        canonical = _canonical(data, PLAN_ALIASES)
    except vol.Invalid as err:
        raise InvalidRecord(f"Invalid plan: {err}") from err
    validated = _validate(PLAN_SCHEMA, canonical, "plan")

    if validated.get("climate") is None:
        fallback = defaults.get("default_climate") or {
            "rainfall": DEFAULT_RAINFALL,
            "temp_range": DEFAULT_TEMP_RANGE,
        }
        validated["climate"] = climate_from_dict(fallback)
    if validated.get("target_season") is None:
        validated["target_season"] = parse_season(
            defaults.get("default_season") or DEFAULT_SEASON
        )
    return PlanContext(**_drop_none(validated))
