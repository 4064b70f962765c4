"""PMSchedule class binding a template to a vehicle."""
from datetime import date
from typing import Optional, Union

from .calculations import Baseline, NextDue, Unscheduled
from .dates import parse_date
from .pm_template import TriggerType


class PMSchedule:
    """A vehicle-specific instance of a PM template."""

    def __init__(
            self,
            template_key: str,
            vehicle_id: str,
            baseline_date: Optional[str] = None,
            baseline_mileage: Optional[float] = None,
            baseline_engine_hours: Optional[float] = None,
            next_due_date: Optional[str] = None,
            next_due_mileage: Optional[float] = None,
            next_due_engine_hours: Optional[float] = None,
            active: bool = True,
    ):
        self.template_key = template_key
        self.vehicle_id = vehicle_id
        self.baseline_date = baseline_date
        self.baseline_mileage = baseline_mileage
        self.baseline_engine_hours = baseline_engine_hours
        self.next_due_date = next_due_date
        self.next_due_mileage = next_due_mileage
        self.next_due_engine_hours = next_due_engine_hours
        self.active = active

    @property
    def status_label(self) -> str:
        return "active" if self.active else "paused"

    @property
    def baseline(self) -> Baseline:
        return Baseline(
            date=parse_date(self.baseline_date),
            mileage=self.baseline_mileage,
            engine_hours=self.baseline_engine_hours,
        )

    def next_due(self, trigger_type: TriggerType) -> Union[NextDue, Unscheduled]:
        """The stored due value for the template's dimension; other fields are ignored."""
        if trigger_type is TriggerType.MILEAGE:
            if self.next_due_mileage is None:
                return Unscheduled(trigger_type, "no next due mileage")
            return NextDue(trigger_type, next_due_mileage=self.next_due_mileage)
        if trigger_type is TriggerType.HOURS:
            if self.next_due_engine_hours is None:
                return Unscheduled(trigger_type, "no next due engine hours")
            return NextDue(trigger_type, next_due_engine_hours=self.next_due_engine_hours)
        due: Optional[date] = parse_date(self.next_due_date)
        if due is None:
            return Unscheduled(trigger_type, "no next due date")
        return NextDue(trigger_type, next_due_date=due)
