"""PM template class and trigger types."""
from enum import Enum
from numbers import Real
from typing import List, Optional

from .errors import ValidationError


class TriggerType(Enum):
    """Dimension along which a PM schedule's due value advances."""

    MILEAGE = "mileage"
    HOURS = "hours"
    DAYS = "days"

    @classmethod
    def parse(cls, value) -> "TriggerType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(t.value for t in cls)
            raise ValidationError(
                f"Unknown trigger type {value!r} (expected one of: {choices})"
            )

    @property
    def unit(self) -> str:
        return {"mileage": "mi", "hours": "hr", "days": "days"}[self.value]


def check_interval(trigger_interval) -> float:
    """Reject intervals that would put the due value at or before the baseline."""
    if isinstance(trigger_interval, bool) or not isinstance(trigger_interval, Real):
        raise ValidationError(
            f"Trigger interval must be a number, got {trigger_interval!r}"
        )
    if trigger_interval <= 0:
        raise ValidationError(
            f"Trigger interval must be positive, got {trigger_interval}"
        )
    return trigger_interval


class PMTemplate:
    """A reusable preventive maintenance definition, independent of any vehicle."""

    def __init__(
            self,
            key: str,
            trigger_type: TriggerType,
            trigger_interval: float,
            name: Optional[str] = None,
            checklist: Optional[List[str]] = None,
            parts: Optional[List[str]] = None,
            estimated_labor_hours: Optional[float] = None,
    ):
        self.key = key
        self.trigger_type = TriggerType.parse(trigger_type)
        self.trigger_interval = check_interval(trigger_interval)
        self.name = name
        self.checklist = checklist or []
        self.parts = parts or []
        self.estimated_labor_hours = estimated_labor_hours

    @property
    def display_name(self) -> str:
        return self.name or self.key

    @property
    def interval_label(self) -> str:
        """Interval for display (e.g., '5,000 mi' or '90 days')."""
        return f"{self.trigger_interval:,.0f} {self.trigger_type.unit}"
