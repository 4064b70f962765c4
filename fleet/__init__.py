"""
Fleet compliance and preventive maintenance tracking.

This package provides data models and status calculations:
- ExpiryStatus / DueStatus / ExpirationTier: status categories
- classify: expiry classification for licenses, medical cards, training, documents
- compute_next_due / due_status: PM next-due values and urgency
- Driver, Vehicle, PMTemplate, PMSchedule, FuelLog: fleet records
- ComplianceSummary: per-driver checklist and score
- Fleet: main aggregate combining all data
"""

from .status import ExpiryStatus, DueStatus, ExpirationTier
from .errors import FleetError, ValidationError, RecordNotFoundError
from .dates import parse_date
from .settings import Settings
from .expiry import classify, days_until, expiration_tier
from .document import Document
from .driver import Driver, Credential, TrainingRecord
from .vehicle import Vehicle
from .fuel_log import FuelLog, FuelSummary, fuel_summary
from .pm_template import PMTemplate, TriggerType
from .calculations import (
    Baseline,
    NextDue,
    Unscheduled,
    compute_next_due,
    check_status,
    due_status,
    progress_percent,
)
from .pm_schedule import PMSchedule
from .schedule_due import ScheduleDue
from .compliance import (
    ComplianceItem,
    ComplianceSummary,
    compliance_score,
    driver_checklist,
    score_band,
)
from .expirations import (
    ExpirationItem,
    Reminder,
    REMINDER_OFFSETS,
    due_reminders,
    upcoming_expirations,
)
from .fleet import Fleet
from .loader import (
    load_fleet,
    assign_template,
    set_schedule_active,
    delete_schedule,
    save_vehicle_readings,
    add_fuel_log,
)

__all__ = [
    "ExpiryStatus",
    "DueStatus",
    "ExpirationTier",
    "FleetError",
    "ValidationError",
    "RecordNotFoundError",
    "parse_date",
    "Settings",
    "classify",
    "days_until",
    "expiration_tier",
    "Document",
    "Driver",
    "Credential",
    "TrainingRecord",
    "Vehicle",
    "FuelLog",
    "FuelSummary",
    "fuel_summary",
    "PMTemplate",
    "TriggerType",
    "Baseline",
    "NextDue",
    "Unscheduled",
    "compute_next_due",
    "check_status",
    "due_status",
    "progress_percent",
    "PMSchedule",
    "ScheduleDue",
    "ComplianceItem",
    "ComplianceSummary",
    "compliance_score",
    "driver_checklist",
    "score_band",
    "ExpirationItem",
    "Reminder",
    "REMINDER_OFFSETS",
    "due_reminders",
    "upcoming_expirations",
    "Fleet",
    "load_fleet",
    "assign_template",
    "set_schedule_active",
    "delete_schedule",
    "save_vehicle_readings",
    "add_fuel_log",
]
