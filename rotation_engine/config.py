"""Helpers for loading rotation engine settings."""

from __future__ import annotations

import copy
import logging
import math
import os
from functools import cache
from pathlib import Path
from typing import Any

import voluptuous as vol
from voluptuous.humanize import humanize_error

from .constants import (
    DEFAULT_RAINFALL,
    DEFAULT_RECOMMENDATION_LIMIT,
    DEFAULT_SEASON,
    DEFAULT_SOIL_THRESHOLD_HP,
    DEFAULT_TEMP_RANGE,
)
from .exceptions import ConfigError
from .utils import deep_update, load_data

_LOGGER = logging.getLogger(__name__)

__all__ = ["DEFAULTS", "CONFIG_ENV", "CONFIG_SCHEMA", "load_config", "get_config", "reload_config"]

CONFIG_ENV = "ROTATION_ENGINE_CONFIG"

DEFAULTS: dict[str, Any] = {
    "soil_threshold_hp": DEFAULT_SOIL_THRESHOLD_HP,
    "recommendation_limit": DEFAULT_RECOMMENDATION_LIMIT,
    "default_strategy": "nutrient",
    "default_season": DEFAULT_SEASON,
    "default_climate": {"rainfall": DEFAULT_RAINFALL, "temp_range": DEFAULT_TEMP_RANGE},
    "log_level": "INFO",
}

# Environment variables overriding single settings
ENV_OVERRIDES: dict[str, str] = {
    "ROTATION_SOIL_THRESHOLD_HP": "soil_threshold_hp",
    "ROTATION_RECOMMENDATION_LIMIT": "recommendation_limit",
    "ROTATION_DEFAULT_STRATEGY": "default_strategy",
}


def _finite(value: float) -> float:
    if not math.isfinite(value):
        raise vol.Invalid("must be a finite number")
    return value


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required("soil_threshold_hp"): vol.All(vol.Coerce(float), _finite),
        vol.Required("recommendation_limit"): vol.All(vol.Coerce(int), vol.Range(min=1)),
        vol.Required("default_strategy"): vol.All(
            str, vol.Lower, vol.In(["nutrient", "pest", "seasonal"])
        ),
        vol.Required("default_season"): vol.All(
            str, vol.Lower, vol.In(["spring", "summer", "autumn", "winter"])
        ),
        vol.Required("default_climate"): vol.Schema(
            {
                vol.Optional("rainfall"): vol.Any(vol.All(vol.Coerce(float), vol.Range(min=0)), None),
                vol.Optional("temp_range"): vol.Any(str, None),
            }
        ),
        vol.Required("log_level"): vol.All(
            str, vol.Upper, vol.In(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
        ),
    },
    extra=vol.ALLOW_EXTRA,
)


def _read_file(path: Path) -> dict[str, Any]:
    try:
        data = load_data(path)
    except FileNotFoundError:
        _LOGGER.debug("Config file %s not found, using defaults", path)
        return {}
    except ValueError as err:
        raise ConfigError(str(err)) from err
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_config(path: str | os.PathLike | None = None) -> dict[str, Any]:
    """Return settings merged from defaults, a config file and the environment.

    ``path`` defaults to the file named by ``ROTATION_ENGINE_CONFIG``. A
    missing file falls back to :data:`DEFAULTS`. Invalid values raise
    :class:`ConfigError`.
    """

    merged = copy.deepcopy(DEFAULTS)
    source = path or os.getenv(CONFIG_ENV)
    if source:
        deep_update(merged, _read_file(Path(source).expanduser()))

    for env, key in ENV_OVERRIDES.items():
        value = os.getenv(env)
        if value is not None and value.strip():
            merged[key] = value.strip()

    try:
        return CONFIG_SCHEMA(merged)
    except vol.Invalid as err:
        raise ConfigError(f"Invalid configuration: {humanize_error(merged, err)}") from err


@cache
def get_config() -> dict[str, Any]:
    """Return the process configuration, loaded once."""
    return load_config()


def reload_config() -> dict[str, Any]:
    """Drop the cached configuration and load it again."""
    get_config.cache_clear()
    return get_config()
