"""YAML loading and saving utilities for fleet data."""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .calculations import Baseline, NextDue, Unscheduled, compute_next_due
from .dates import parse_date, require_date
from .document import Document
from .driver import Credential, Driver, TrainingRecord
from .errors import RecordNotFoundError, ValidationError
from .fleet import Fleet
from .fuel_log import FuelLog
from .pm_schedule import PMSchedule
from .pm_template import PMTemplate
from .settings import Settings
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def _iso(value):
    """Unquoted YAML dates load as date objects; records keep ISO strings."""
    if isinstance(value, date):
        return value.isoformat()
    return value


def _parse_document(dct: Dict[str, Any]) -> Document:
    return Document(
        dct["documentType"],
        _iso(dct.get("expiryDate")),
        dct.get("fileRef"),
        dct.get("notes"),
    )


def _parse_driver(dct: Dict[str, Any]) -> Driver:
    cred = dct.get("credentials") or {}
    return Driver(
        str(dct["id"]),
        dct.get("firstName"),
        dct.get("lastName"),
        dct.get("email"),
        Credential(
            cred.get("licenseNumber"),
            cred.get("licenseClass"),
            _iso(cred.get("licenseExpiryDate")),
            _iso(cred.get("medicalCardExpiryDate")),
        ),
        [
            TrainingRecord(
                t["trainingType"], _iso(t.get("lastCompleted")), _iso(t.get("nextDue"))
            )
            for t in dct.get("training") or []
        ],
        [_parse_document(d) for d in dct.get("documents") or []],
    )


def _parse_vehicle(dct: Dict[str, Any]) -> Vehicle:
    return Vehicle(
        str(dct["id"]),
        dct.get("make"),
        dct.get("model"),
        dct.get("year"),
        dct.get("currentMileage"),
        dct.get("currentEngineHours"),
        [_parse_document(d) for d in dct.get("documents") or []],
        dct.get("name"),
    )


def _parse_template(dct: Dict[str, Any]) -> PMTemplate:
    return PMTemplate(
        dct["key"],
        dct["triggerType"],
        dct["triggerInterval"],
        dct.get("name"),
        dct.get("checklist"),
        dct.get("parts"),
        dct.get("estimatedLaborHours"),
    )


def _parse_schedule(dct: Dict[str, Any]) -> PMSchedule:
    return PMSchedule(
        dct["templateKey"],
        str(dct["vehicleId"]),
        _iso(dct.get("baselineDate")),
        dct.get("baselineMileage"),
        dct.get("baselineEngineHours"),
        _iso(dct.get("nextDueDate")),
        dct.get("nextDueMileage"),
        dct.get("nextDueEngineHours"),
        dct.get("status", "active") == "active",
    )


def _parse_fuel_log(dct: Dict[str, Any]) -> FuelLog:
    return FuelLog(
        str(dct["vehicleId"]),
        _iso(dct["date"]),
        dct["gallons"],
        dct.get("cost"),
        str(dct["driverId"]) if dct.get("driverId") is not None else None,
        dct.get("notes"),
    )


def _load_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    """Load the raw YAML data (not parsed into objects)."""
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    return data or {}


def _dump(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def parse_fleet(data: Dict[str, Any]) -> Fleet:
    """Build a Fleet from an already-loaded YAML mapping."""
    try:
        return Fleet(
            drivers=[_parse_driver(d) for d in data.get("drivers") or []],
            vehicles=[_parse_vehicle(v) for v in data.get("vehicles") or []],
            templates=[_parse_template(t) for t in data.get("pmTemplates") or []],
            schedules=[_parse_schedule(s) for s in data.get("pmSchedules") or []],
            fuel_logs=[_parse_fuel_log(f) for f in data.get("fuelLogs") or []],
            settings=Settings.from_dict(data.get("settings")),
        )
    except KeyError as e:
        raise ValidationError(f"Missing required field {e}")


def load_fleet(filename: Union[str, Path]) -> Fleet:
    """Load a fleet from a YAML file."""
    fleet = parse_fleet(_load_raw(filename))
    logger.debug(
        "Loaded %s: %d drivers, %d vehicles, %d schedules",
        filename,
        len(fleet.drivers),
        len(fleet.vehicles),
        len(fleet.schedules),
    )
    return fleet


def _schedule_dict(
    template: PMTemplate,
    vehicle_id: str,
    baseline: Baseline,
    outcome: Union[NextDue, Unscheduled],
) -> Dict[str, Any]:
    d: Dict[str, Any] = {"templateKey": template.key, "vehicleId": vehicle_id}
    if baseline.date is not None:
        d["baselineDate"] = baseline.date.isoformat()
    if baseline.mileage is not None:
        d["baselineMileage"] = baseline.mileage
    if baseline.engine_hours is not None:
        d["baselineEngineHours"] = baseline.engine_hours
    d.update(outcome.to_dict())
    d["status"] = "active"
    return d


def assign_template(
    filename: Union[str, Path],
    template_key: str,
    vehicle_id: str,
    baseline: Optional[Baseline] = None,
    today: Optional[date] = None,
) -> Tuple[int, Union[NextDue, Unscheduled]]:
    """
    Assign a PM template to a vehicle and store the new schedule.

    Baseline readings not given default to the vehicle's current mileage and
    engine hours and to today's date. When no due value can be computed the
    schedule is still stored, without one, and the Unscheduled outcome is
    returned so the caller can report it.

    Returns the new schedule's index and the computed outcome.
    """
    fleet = load_fleet(filename)
    template = fleet.require_template(template_key)
    vehicle = fleet.require_vehicle(vehicle_id)

    given = baseline or Baseline()
    baseline = Baseline(
        date=parse_date(given.date) or today or date.today(),
        mileage=given.mileage if given.mileage is not None else vehicle.current_mileage,
        engine_hours=(
            given.engine_hours
            if given.engine_hours is not None
            else vehicle.current_engine_hours
        ),
    )
    outcome = compute_next_due(
        template.trigger_type, template.trigger_interval, baseline
    )
    if isinstance(outcome, Unscheduled):
        logger.warning(
            "Assigned %s to %s without a due value: %s",
            template.key,
            vehicle.id,
            outcome.reason,
        )

    data = _load_raw(filename)
    if data.get("pmSchedules") is None:
        data["pmSchedules"] = []
    data["pmSchedules"].append(_schedule_dict(template, vehicle.id, baseline, outcome))
    _dump(filename, data)

    index = len(data["pmSchedules"]) - 1
    logger.info("Assigned %s to %s as schedule %d", template.key, vehicle.id, index)
    return index, outcome


def _schedules(data: Dict[str, Any], index: int) -> list:
    schedules = data.get("pmSchedules") or []
    if index < 0 or index >= len(schedules):
        raise RecordNotFoundError(
            f"PM schedule index {index} out of range (0..{len(schedules) - 1})"
        )
    return schedules


def set_schedule_active(filename: Union[str, Path], index: int, active: bool) -> None:
    """Toggle a schedule between active and paused."""
    data = _load_raw(filename)
    schedules = _schedules(data, index)
    schedules[index]["status"] = "active" if active else "paused"
    _dump(filename, data)
    logger.info("Schedule %d is now %s", index, schedules[index]["status"])


def delete_schedule(filename: Union[str, Path], index: int) -> None:
    """Remove a schedule at the given index."""
    data = _load_raw(filename)
    schedules = _schedules(data, index)
    removed = schedules.pop(index)
    _dump(filename, data)
    logger.info(
        "Removed schedule %d (%s on %s)",
        index,
        removed.get("templateKey"),
        removed.get("vehicleId"),
    )


def save_vehicle_readings(
    filename: Union[str, Path],
    vehicle_id: str,
    mileage: Optional[float] = None,
    engine_hours: Optional[float] = None,
) -> None:
    """
    Update a vehicle's current odometer and/or engine hour readings.

    Only updates fields that are provided (non-None).
    """
    for value, label in ((mileage, "Mileage"), (engine_hours, "Engine hours")):
        if value is not None and value < 0:
            raise ValidationError(f"{label} must not be negative, got {value}")

    data = _load_raw(filename)
    for vehicle in data.get("vehicles") or []:
        if str(vehicle.get("id")) == vehicle_id:
            if mileage is not None:
                vehicle["currentMileage"] = mileage
            if engine_hours is not None:
                vehicle["currentEngineHours"] = engine_hours
            break
    else:
        raise RecordNotFoundError(f"Unknown vehicle '{vehicle_id}'")

    _dump(filename, data)
    logger.info("Updated readings for %s", vehicle_id)


def add_fuel_log(filename: Union[str, Path], log: FuelLog) -> None:
    """Append a fuel log, omitting None values for cleaner YAML."""
    require_date(log.date, "fuel log date")
    if log.gallons is None or log.gallons <= 0:
        raise ValidationError(f"Gallons must be positive, got {log.gallons}")

    data = _load_raw(filename)
    if data.get("fuelLogs") is None:
        data["fuelLogs"] = []

    entry: Dict[str, Any] = {"vehicleId": log.vehicle_id, "date": log.date}
    if log.driver_id is not None:
        entry["driverId"] = log.driver_id
    entry["gallons"] = log.gallons
    if log.cost is not None:
        entry["cost"] = log.cost
    if log.notes is not None:
        entry["notes"] = log.notes

    data["fuelLogs"].append(entry)
    _dump(filename, data)
    logger.info("Logged %.1f gal for %s on %s", log.gallons, log.vehicle_id, log.date)
