"""ScheduleDue dataclass for calculated PM schedule status."""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING, Union

from .calculations import NextDue, Unscheduled
from .status import DueStatus

if TYPE_CHECKING:
    from .pm_schedule import PMSchedule
    from .pm_template import PMTemplate


@dataclass
class ScheduleDue:
    """Calculated due information for one PM schedule."""

    schedule: "PMSchedule"
    template: "PMTemplate"
    status: DueStatus
    next_due: Optional[Union[NextDue, Unscheduled]] = None
    remaining: Optional[float] = None
    progress: Optional[float] = None
    index: Optional[int] = None  # Position in the fleet file

    @property
    def is_due(self) -> bool:
        return self.status in (DueStatus.OVERDUE, DueStatus.DUE_SOON)

    @property
    def unit(self) -> str:
        return self.template.trigger_type.unit
