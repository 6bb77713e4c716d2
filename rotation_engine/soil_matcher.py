"""Soil acidity matcher backed by one process-wide threshold.

The matcher is independent of the strategy pipeline. A single
:class:`SoilAcidityMatcher` is created on first use with the configured
threshold and is shared by every caller afterwards. Reads and writes of
the threshold are serialised with a lock.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

from .constants import DEFAULT_SOIL_THRESHOLD_HP
from .exceptions import InvalidNumeric
from .utils import parse_finite_number

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "AcidityCheck",
    "SoilAcidityMatcher",
    "get_soil_matcher",
    "reset_soil_matcher",
    "get_soil",
    "set_soil",
    "check_acidity",
]


@dataclass(slots=True, frozen=True)
class AcidityCheck:
    acidity: float
    threshold_hp: float
    match: bool

    def to_dict(self) -> dict[str, Any]:
        return {"acidity": self.acidity, "soilHP": self.threshold_hp, "match": self.match}


def _parse(value: Any, field: str) -> float:
    number = parse_finite_number(value)
    if number is None:
        _LOGGER.warning("Rejected %s value %r", field, value)
        raise InvalidNumeric(f"Invalid {field} value: {value!r}")
    return number


class SoilAcidityMatcher:
    """Compare acidity readings against a mutable ``threshold_hp``."""

    def __init__(self, threshold_hp: float = DEFAULT_SOIL_THRESHOLD_HP) -> None:
        self._lock = threading.Lock()
        self._threshold_hp = _parse(threshold_hp, "hp")

    @property
    def threshold_hp(self) -> float:
        with self._lock:
            return self._threshold_hp

    def get_soil(self) -> float:
        return self.threshold_hp

    def set_soil(self, hp: Any) -> float:
        """Replace the threshold with ``hp`` and return the new value."""
        value = _parse(hp, "hp")
        with self._lock:
            self._threshold_hp = value
        _LOGGER.debug("Soil threshold set to %s", value)
        return value

    def check_acidity(self, acidity: Any) -> AcidityCheck:
        """Return whether ``acidity`` is at or below the threshold."""
        value = _parse(acidity, "acidity")
        threshold = self.threshold_hp
        return AcidityCheck(acidity=value, threshold_hp=threshold, match=value <= threshold)

    def as_dict(self) -> dict[str, float]:
        return {"hp": self.threshold_hp}


_MATCHER: SoilAcidityMatcher | None = None
_MATCHER_LOCK = threading.Lock()


def get_soil_matcher() -> SoilAcidityMatcher:
    """Return the shared matcher, creating it from configuration once."""

    global _MATCHER
    with _MATCHER_LOCK:
        if _MATCHER is None:
            from .config import get_config

            _MATCHER = SoilAcidityMatcher(get_config()["soil_threshold_hp"])
        return _MATCHER


def reset_soil_matcher(threshold_hp: float | None = None) -> SoilAcidityMatcher:
    """Restore the shared matcher to ``threshold_hp`` or the configured default."""

    matcher = get_soil_matcher()
    if threshold_hp is None:
        from .config import get_config

        threshold_hp = get_config()["soil_threshold_hp"]
    matcher.set_soil(threshold_hp)
    return matcher


def get_soil() -> float:
    return get_soil_matcher().get_soil()


def set_soil(hp: Any) -> float:
    return get_soil_matcher().set_soil(hp)


def check_acidity(acidity: Any) -> AcidityCheck:
    return get_soil_matcher().check_acidity(acidity)
