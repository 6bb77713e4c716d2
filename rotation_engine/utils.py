"""Utility helpers for reading datasets and parsing rotation inputs."""

from __future__ import annotations

import json
import math
import os
import time
from collections.abc import Mapping
from functools import cache
from os import PathLike
from pathlib import Path
from typing import Any, TextIO, Union

import yaml

__all__ = [
    "load_data",
    "load_dataset",
    "clear_dataset_cache",
    "dataset_paths",
    "get_data_dir",
    "overlay_dir",
    "normalize_key",
    "deep_update",
    "parse_finite_number",
    "warn_once",
]

PathType = Union[str, PathLike]


def _open_text(path: Path) -> TextIO:
    return open(path, encoding="utf-8")


def load_data(path: PathType) -> Any:
    """Return the parsed contents of ``path`` supporting JSON or YAML."""

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)

    try:
        with _open_text(p) as f:
            if p.suffix.lower() in {".yaml", ".yml"}:
                return yaml.safe_load(f) or {}
            return json.load(f)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {p}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {p}: {exc}") from exc


def deep_update(base: dict[str, Any], other: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``other`` into ``base`` and return ``base``."""

    for key, value in other.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, Mapping):
            deep_update(base[key], value)
        else:
            base[key] = value
    return base


# Bundled datasets live in the package ``data`` folder. ``ROTATION_DATA_DIR``
# replaces that directory entirely while ``ROTATION_OVERLAY_DIR`` points at a
# directory whose files are merged over the bundled ones.
DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"
DATA_ENV = "ROTATION_DATA_DIR"
OVERLAY_ENV = "ROTATION_OVERLAY_DIR"

_PATH_CACHE: tuple[Path, ...] | None = None
_ENV_STATE: str | None = None


def get_data_dir() -> Path:
    """Return base dataset directory honoring the ``ROTATION_DATA_DIR`` env."""

    env = os.getenv(DATA_ENV)
    return Path(env).expanduser() if env else DEFAULT_DATA_DIR


def overlay_dir() -> Path | None:
    """Return the overlay directory defined via ``ROTATION_OVERLAY_DIR``."""

    env = os.getenv(OVERLAY_ENV)
    return Path(env).expanduser() if env else None


def dataset_paths() -> tuple[Path, ...]:
    """Return directories searched when loading datasets.

    Results are cached but refreshed automatically when ``ROTATION_DATA_DIR``
    changes.
    """

    global _PATH_CACHE, _ENV_STATE
    env_state = os.getenv(DATA_ENV)
    if _PATH_CACHE is None or _ENV_STATE != env_state:
        _PATH_CACHE = (get_data_dir(),)
        _ENV_STATE = env_state
    return _PATH_CACHE


@cache
def load_dataset(filename: str) -> Any:
    """Return dataset ``filename`` merged with any overlay data."""

    data: Any = {}
    candidates = [base / filename for base in dataset_paths()]
    overlay = overlay_dir()
    if overlay:
        candidates.append(overlay / filename)

    for path in candidates:
        if not path.exists():
            continue
        extra = load_data(path)
        if isinstance(extra, dict) and isinstance(data, dict):
            deep_update(data, extra)
        else:
            data = extra
    return data


def clear_dataset_cache() -> None:
    """Clear cached dataset results loaded via :func:`load_dataset`."""

    global _PATH_CACHE, _ENV_STATE
    load_dataset.cache_clear()
    _PATH_CACHE = None
    _ENV_STATE = None


def normalize_key(key: str) -> str:
    """Return ``key`` normalized for case-insensitive lookups.

    Whitespace, hyphens and underscores collapse to a single underscore.
    """

    value = str(key).casefold()
    for sep in ("_", "-"):
        value = value.replace(sep, " ")
    parts = [p for p in value.strip().split() if p]
    return "_".join(parts)


def parse_finite_number(value: Any) -> float | None:
    """Return ``value`` as a finite float or ``None`` when not representable.

    Strings are stripped before conversion. Booleans are rejected even though
    they are ``int`` subclasses.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


_LAST_WARNED: dict[str, float] = {}
_MAX_CODES = 1024


def warn_once(logger, code: str, message: str, window: int = 60) -> None:
    """Log a warning once per time window for a given code.

    The cache is capped and the oldest entries are discarded.
    """
    now = time.monotonic()
    last = _LAST_WARNED.get(code)
    if last is None or now - last > window:
        if len(_LAST_WARNED) >= _MAX_CODES:
            oldest = min(_LAST_WARNED, key=_LAST_WARNED.get)
            _LAST_WARNED.pop(oldest, None)
        _LAST_WARNED[code] = now
        logger.warning("%s: %s", code, message)
