"""Exceptions raised by the rotation engine."""

from __future__ import annotations

__all__ = [
    "RotationError",
    "InvalidStrategy",
    "NoStrategySelected",
    "InvalidNumeric",
    "EmptyCandidatePool",
    "InvalidRecord",
    "CropNotFound",
    "ConfigError",
]


class RotationError(Exception):
    """Base class for all rotation engine errors."""


class InvalidStrategy(RotationError, TypeError):
    """Raised when a value lacking the strategy capability is activated."""


class NoStrategySelected(RotationError, RuntimeError):
    """Raised when a rotation is executed before a strategy is set."""


class InvalidNumeric(RotationError, ValueError):
    """Raised when an input cannot be read as a finite number."""


class EmptyCandidatePool(RotationError, ValueError):
    """Raised by strict callers when a plan has no candidate crops."""


class InvalidRecord(RotationError, ValueError):
    """Raised when a crop or plan mapping fails schema validation."""


class CropNotFound(RotationError, KeyError):
    """Raised when a crop id is not present in the catalog."""

    def __str__(self) -> str:
        # ``KeyError`` would otherwise repr() the message
        return str(self.args[0]) if self.args else "Crop not found"


class ConfigError(RotationError, ValueError):
    """Raised when configuration values fail validation."""
