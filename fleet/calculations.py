"""Helper functions for PM due calculations."""

from dataclasses import dataclass
from datetime import date
from numbers import Real
from typing import Any, Dict, Optional, Union

from dateutil.relativedelta import relativedelta

from .dates import DateLike, parse_date, require_date
from .errors import ValidationError
from .pm_template import TriggerType, check_interval
from .status import DueStatus


DEFAULT_DUE_SOON_DAYS = 7
DEFAULT_DUE_SOON_FRACTION = 0.05


@dataclass(frozen=True)
class Baseline:
    """Starting readings a next-due value is computed from."""

    date: Optional[date] = None
    mileage: Optional[float] = None
    engine_hours: Optional[float] = None

    def value_for(self, trigger_type: TriggerType):
        if trigger_type is TriggerType.MILEAGE:
            return self.mileage
        if trigger_type is TriggerType.HOURS:
            return self.engine_hours
        return self.date


@dataclass(frozen=True)
class NextDue:
    """A computed next-due value. Exactly one of the three fields is set."""

    trigger_type: TriggerType
    next_due_date: Optional[date] = None
    next_due_mileage: Optional[float] = None
    next_due_engine_hours: Optional[float] = None

    @property
    def value(self) -> Union[date, float]:
        if self.trigger_type is TriggerType.MILEAGE:
            return self.next_due_mileage
        if self.trigger_type is TriggerType.HOURS:
            return self.next_due_engine_hours
        return self.next_due_date

    def to_dict(self) -> Dict[str, Any]:
        """Store fields (camelCase) for the one meaningful due value."""
        if self.trigger_type is TriggerType.MILEAGE:
            return {"nextDueMileage": self.next_due_mileage}
        if self.trigger_type is TriggerType.HOURS:
            return {"nextDueEngineHours": self.next_due_engine_hours}
        return {"nextDueDate": self.next_due_date.isoformat()}


@dataclass(frozen=True)
class Unscheduled:
    """No due value could be computed; the schedule is not yet satisfied either."""

    trigger_type: TriggerType
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {}


def _check_reading(value, field: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{field} must be a number, got {value!r}")
    if value < 0:
        raise ValidationError(f"{field} must not be negative, got {value}")
    return value


def compute_next_due(
    trigger_type: Union[TriggerType, str],
    trigger_interval: float,
    baseline: Baseline,
) -> Union[NextDue, Unscheduled]:
    """
    Calculate the next-due value for a PM schedule.

    - mileage: baseline mileage + interval
    - hours: baseline engine hours + interval
    - days: baseline date + interval days

    A missing baseline for the trigger's dimension is not an error; the
    result is Unscheduled so callers can't mistake it for "satisfied".
    """
    trigger_type = TriggerType.parse(trigger_type)
    interval = check_interval(trigger_interval)
    # Every reading is stored with the schedule, not only the trigger's own
    mileage = _check_reading(baseline.mileage, "Baseline mileage")
    engine_hours = _check_reading(baseline.engine_hours, "Baseline engine hours")

    if trigger_type is TriggerType.DAYS:
        if interval != int(interval):
            raise ValidationError(
                f"Day intervals must be whole days, got {trigger_interval}"
            )
        start = parse_date(baseline.date)
        if start is None:
            return Unscheduled(trigger_type, "no baseline date")
        return NextDue(
            trigger_type, next_due_date=start + relativedelta(days=int(interval))
        )

    if trigger_type is TriggerType.MILEAGE:
        if mileage is None:
            return Unscheduled(trigger_type, "no baseline mileage")
        return NextDue(trigger_type, next_due_mileage=mileage + interval)

    if engine_hours is None:
        return Unscheduled(trigger_type, "no baseline engine hours")
    return NextDue(trigger_type, next_due_engine_hours=engine_hours + interval)


def check_status(current: float, due: float, soon_threshold: float) -> DueStatus:
    """Determine status by comparing current value to due threshold."""
    if current > due:
        return DueStatus.OVERDUE
    if current >= due - soon_threshold:
        return DueStatus.DUE_SOON
    return DueStatus.ON_TRACK


def due_status(
    next_due: Union[NextDue, Unscheduled],
    today: DateLike,
    current_reading: Optional[float] = None,
    trigger_interval: Optional[float] = None,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
    due_soon_fraction: float = DEFAULT_DUE_SOON_FRACTION,
) -> DueStatus:
    """
    Classify a schedule as overdue, due soon or on track.

    Date-based schedules are due soon within due_soon_days of the due date.
    Mileage and hour schedules are due soon within due_soon_fraction of the
    interval; with no interval known, only the overdue check applies.
    """
    if isinstance(next_due, Unscheduled):
        return DueStatus.UNSCHEDULED

    if next_due.trigger_type is TriggerType.DAYS:
        return check_status(
            require_date(today, "today").toordinal(),
            next_due.next_due_date.toordinal(),
            due_soon_days,
        )

    if current_reading is None:
        return DueStatus.UNKNOWN
    threshold = trigger_interval * due_soon_fraction if trigger_interval else 0
    return check_status(current_reading, next_due.value, threshold)


def remaining(
    next_due: NextDue, today: DateLike, current_reading: Optional[float] = None
) -> Optional[float]:
    """Days, miles or hours left until due (negative when overdue)."""
    if next_due.trigger_type is TriggerType.DAYS:
        return (next_due.next_due_date - require_date(today, "today")).days
    if current_reading is None:
        return None
    return next_due.value - current_reading


def progress_percent(
    baseline_value: float, due_value: float, current_value: Optional[float]
) -> Optional[float]:
    """Share of the baseline-to-due span already used, clamped to 0..100."""
    if current_value is None:
        return None
    span = due_value - baseline_value
    if span <= 0:
        return 0.0
    return max(0.0, min(100.0, (current_value - baseline_value) / span * 100))
