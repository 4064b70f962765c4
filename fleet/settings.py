"""Tunable thresholds read from the ``settings`` section of a fleet file."""

from numbers import Real
from typing import Any, Dict, List, Optional

from .errors import ValidationError

DEFAULT_REQUIRED_TRAINING = ["Safety Training", "DOT Compliance"]


def _check_days(value, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{key} must be a whole number of days, got {value!r}")
    if value < 0:
        raise ValidationError(f"{key} must not be negative, got {value}")
    return value


def _check_fraction(value, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{key} must be a number, got {value!r}")
    if not 0 <= value < 1:
        raise ValidationError(f"{key} must be in [0, 1), got {value}")
    return value


def _check_training(value, key: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
        raise ValidationError(f"{key} must be a list of training types, got {value!r}")
    return value


class Settings:
    """Warning windows and due-soon thresholds used by the status calculations."""

    def __init__(
            self,
            warning_window_days: int = 30,
            upcoming_window_days: int = 90,
            pm_due_soon_days: int = 7,
            pm_due_soon_fraction: float = 0.05,
            required_training: Optional[List[str]] = None,
    ):
        self.warning_window_days = _check_days(warning_window_days, "warningWindowDays")
        self.upcoming_window_days = _check_days(
            upcoming_window_days, "upcomingWindowDays"
        )
        self.pm_due_soon_days = _check_days(pm_due_soon_days, "pmDueSoonDays")
        self.pm_due_soon_fraction = _check_fraction(
            pm_due_soon_fraction, "pmDueSoonFraction"
        )
        if required_training is None:
            required_training = list(DEFAULT_REQUIRED_TRAINING)
        self.required_training = _check_training(required_training, "requiredTraining")

    @classmethod
    def from_dict(cls, dct: Optional[Dict[str, Any]]) -> "Settings":
        """Build settings from the camelCase YAML mapping (missing keys use defaults)."""
        dct = dct or {}
        if not isinstance(dct, dict):
            raise ValidationError(f"settings must be a mapping, got {dct!r}")
        defaults = cls()
        return cls(
            warning_window_days=dct.get("warningWindowDays", defaults.warning_window_days),
            upcoming_window_days=dct.get(
                "upcomingWindowDays", defaults.upcoming_window_days
            ),
            pm_due_soon_days=dct.get("pmDueSoonDays", defaults.pm_due_soon_days),
            pm_due_soon_fraction=dct.get(
                "pmDueSoonFraction", defaults.pm_due_soon_fraction
            ),
            required_training=dct.get("requiredTraining"),
        )
