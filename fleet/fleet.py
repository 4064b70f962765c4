"""Fleet class - the main aggregate for fleet records and calculations."""

from typing import List, Optional, Tuple

from .calculations import NextDue, due_status, progress_percent, remaining
from .compliance import ComplianceSummary, driver_checklist
from .dates import DateLike, require_date
from .driver import Driver
from .errors import RecordNotFoundError
from .expirations import ExpirationItem, Reminder, due_reminders, upcoming_expirations
from .fuel_log import FuelLog
from .pm_schedule import PMSchedule
from .pm_template import PMTemplate, TriggerType
from .schedule_due import ScheduleDue
from .settings import Settings
from .status import DueStatus
from .vehicle import Vehicle


class Fleet:
    """Complete fleet record: drivers, vehicles, PM templates and schedules, fuel logs."""

    def __init__(
        self,
        drivers: Optional[List[Driver]] = None,
        vehicles: Optional[List[Vehicle]] = None,
        templates: Optional[List[PMTemplate]] = None,
        schedules: Optional[List[PMSchedule]] = None,
        fuel_logs: Optional[List[FuelLog]] = None,
        settings: Optional[Settings] = None,
    ):
        self.drivers = drivers or []
        self.vehicles = vehicles or []
        self.templates = templates or []
        self.schedules = schedules or []
        self.fuel_logs = fuel_logs or []
        self.settings = settings or Settings()

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_driver(self, driver_id: str) -> Optional[Driver]:
        for driver in self.drivers:
            if driver.id == driver_id:
                return driver
        return None

    def get_vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        for vehicle in self.vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        return None

    def get_template(self, key: str) -> Optional[PMTemplate]:
        """Find a template by key (case-insensitive)."""
        wanted = key.lower()
        for template in self.templates:
            if template.key.lower() == wanted:
                return template
        return None

    def require_driver(self, driver_id: str) -> Driver:
        driver = self.get_driver(driver_id)
        if driver is None:
            raise RecordNotFoundError(f"Unknown driver '{driver_id}'")
        return driver

    def require_vehicle(self, vehicle_id: str) -> Vehicle:
        vehicle = self.get_vehicle(vehicle_id)
        if vehicle is None:
            raise RecordNotFoundError(f"Unknown vehicle '{vehicle_id}'")
        return vehicle

    def require_template(self, key: str) -> PMTemplate:
        template = self.get_template(key)
        if template is None:
            raise RecordNotFoundError(f"Unknown PM template '{key}'")
        return template

    def require_schedule(self, index: int) -> PMSchedule:
        if index < 0 or index >= len(self.schedules):
            raise RecordNotFoundError(
                f"PM schedule {index} out of range (0..{len(self.schedules) - 1})"
            )
        return self.schedules[index]

    def schedules_for_vehicle(self, vehicle_id: str) -> List[Tuple[int, PMSchedule]]:
        """Schedules bound to a vehicle, with their position in the fleet file."""
        return [
            (i, s) for i, s in enumerate(self.schedules) if s.vehicle_id == vehicle_id
        ]

    def fuel_logs_for_vehicle(self, vehicle_id: str) -> List[FuelLog]:
        return sorted(
            (log for log in self.fuel_logs if log.vehicle_id == vehicle_id),
            key=lambda log: log.date,
        )

    def validate_references(self) -> List[str]:
        """Report schedules and fuel logs whose parent records don't exist."""
        errors = []
        for i, schedule in enumerate(self.schedules):
            if self.get_template(schedule.template_key) is None:
                errors.append(
                    f"pmSchedules[{i}]: unknown template '{schedule.template_key}'"
                )
            if self.get_vehicle(schedule.vehicle_id) is None:
                errors.append(f"pmSchedules[{i}]: unknown vehicle '{schedule.vehicle_id}'")
        for i, log in enumerate(self.fuel_logs):
            if self.get_vehicle(log.vehicle_id) is None:
                errors.append(f"fuelLogs[{i}]: unknown vehicle '{log.vehicle_id}'")
            if log.driver_id is not None and self.get_driver(log.driver_id) is None:
                errors.append(f"fuelLogs[{i}]: unknown driver '{log.driver_id}'")
        return errors

    # -------------------------------------------------------------------------
    # Compliance
    # -------------------------------------------------------------------------

    def driver_compliance(self, driver_id: str, today: DateLike) -> ComplianceSummary:
        return driver_checklist(
            self.require_driver(driver_id),
            today,
            self.settings.required_training,
            self.settings.warning_window_days,
        )

    def expirations(
        self, today: DateLike, horizon_days: Optional[int] = None
    ) -> List[ExpirationItem]:
        if horizon_days is None:
            horizon_days = self.settings.upcoming_window_days
        return upcoming_expirations(self.drivers, self.vehicles, today, horizon_days)

    def reminders(self, today: DateLike) -> List[Reminder]:
        return due_reminders(self.drivers, self.vehicles, today)

    # -------------------------------------------------------------------------
    # Preventive maintenance
    # -------------------------------------------------------------------------

    @staticmethod
    def current_reading(
        vehicle: Optional[Vehicle], trigger_type: TriggerType
    ) -> Optional[float]:
        if vehicle is None:
            return None
        if trigger_type is TriggerType.MILEAGE:
            return vehicle.current_mileage
        if trigger_type is TriggerType.HOURS:
            return vehicle.current_engine_hours
        return None

    def schedule_status(
        self, schedule: PMSchedule, today: DateLike, index: Optional[int] = None
    ) -> ScheduleDue:
        """
        Calculate where a PM schedule stands as of today.

        Logic:
        - Paused schedules are PAUSED regardless of their due value
        - No stored due value: UNSCHEDULED
        - Date triggers compare today to the due date
        - Mileage/hour triggers compare the vehicle's current reading
        - Progress is the used share of the baseline-to-due span; with no
          baseline on file the span is one interval back from the due value
        """
        template = self.require_template(schedule.template_key)
        trigger_type = template.trigger_type
        next_due = schedule.next_due(trigger_type)
        current_date = require_date(today, "today")

        if not schedule.active:
            return ScheduleDue(
                schedule=schedule,
                template=template,
                status=DueStatus.PAUSED,
                next_due=next_due,
                index=index,
            )

        current = self.current_reading(self.get_vehicle(schedule.vehicle_id), trigger_type)
        status = due_status(
            next_due,
            current_date,
            current_reading=current,
            trigger_interval=template.trigger_interval,
            due_soon_days=self.settings.pm_due_soon_days,
            due_soon_fraction=self.settings.pm_due_soon_fraction,
        )

        left = progress = None
        if isinstance(next_due, NextDue):
            left = remaining(next_due, current_date, current)
            if trigger_type is TriggerType.DAYS:
                due_ord = next_due.next_due_date.toordinal()
                start = schedule.baseline.date
                start_ord = (
                    start.toordinal() if start else due_ord - int(template.trigger_interval)
                )
                progress = progress_percent(start_ord, due_ord, current_date.toordinal())
            else:
                start = schedule.baseline.value_for(trigger_type)
                if start is None:
                    start = next_due.value - template.trigger_interval
                progress = progress_percent(start, next_due.value, current)

        return ScheduleDue(
            schedule=schedule,
            template=template,
            status=status,
            next_due=next_due,
            remaining=left,
            progress=progress,
            index=index,
        )

    def all_schedule_status(
        self, today: DateLike, vehicle_id: Optional[str] = None
    ) -> List[ScheduleDue]:
        """Calculate status for every schedule, optionally for one vehicle only."""
        return [
            self.schedule_status(schedule, today, index=i)
            for i, schedule in enumerate(self.schedules)
            if vehicle_id is None or schedule.vehicle_id == vehicle_id
        ]

    def next_pm_for_vehicle(self, vehicle_id: str, today: DateLike) -> Optional[ScheduleDue]:
        """The active schedule closest to due: most urgent status, then most progress."""
        self.require_vehicle(vehicle_id)
        candidates = [
            svc
            for svc in self.all_schedule_status(today, vehicle_id)
            if isinstance(svc.next_due, NextDue) and svc.status != DueStatus.PAUSED
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda s: (s.status.value, -(s.progress or 0)))
