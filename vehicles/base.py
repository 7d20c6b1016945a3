# vehicles/base.py
import math
from dataclasses import dataclass


class PenRobotError(Exception):
    """Base class for simulator errors."""


class ConfigurationError(PenRobotError, ValueError):
    """Raised when a vehicle is built or reconfigured with bad parameters."""


class ValidationError(PenRobotError, ValueError):
    """Raised when a step/solve input is not a finite number."""


def require_finite(name, value):
    try:
        ok = math.isfinite(value)
    except TypeError:
        raise ValidationError(f"{name} must be a number, got {value!r}") from None
    if not ok:
        raise ValidationError(f"{name} must be finite, got {value!r}")


def require_positive(name, value):
    try:
        ok = math.isfinite(value) and value > 0
    except TypeError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None
    if not ok:
        raise ConfigurationError(f"{name} must be a finite value > 0, got {value!r}")


def require_non_negative(name, value):
    try:
        ok = math.isfinite(value) and value >= 0
    except TypeError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None
    if not ok:
        raise ConfigurationError(f"{name} must be a finite value >= 0, got {value!r}")


@dataclass(frozen=True)
class State2D:
    """Simple pose container (centimeters, radians)."""
    x: float
    y: float
    theta: float

    @property
    def position(self):
        return (self.x, self.y)

    def __iter__(self):
        return iter((self.x, self.y, self.theta))


@dataclass(frozen=True)
class WheelCommand:
    """Signed travel owed to each wheel (cm)."""
    left_distance: float
    right_distance: float
