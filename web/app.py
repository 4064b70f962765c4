"""Flask JSON API for fleet compliance and maintenance tracking."""

import logging
import os
from datetime import date
from pathlib import Path

from flask import Flask, current_app, jsonify, request

from fleet import (
    Baseline,
    NextDue,
    RecordNotFoundError,
    ValidationError,
    assign_template,
    delete_schedule,
    load_fleet,
    parse_date,
    set_schedule_active,
)
from fleet.compliance import ComplianceSummary
from fleet.expirations import ExpirationItem
from fleet.logging_config import setup_logging
from fleet.schedule_due import ScheduleDue

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["FLEET_FILE"] = os.environ.get(
    "FLEET_FILE", str(Path(__file__).parent.parent / "fleet.yaml")
)


def get_fleet_path() -> Path:
    return Path(current_app.config["FLEET_FILE"])


def get_today() -> date:
    """The as-of date: ``?as_of=YYYY-MM-DD`` or today."""
    return parse_date(request.args.get("as_of")) or date.today()


def compliance_json(summary: ComplianceSummary) -> dict:
    return {
        "driverId": summary.driver.id,
        "driverName": summary.driver.name,
        "score": summary.score,
        "band": summary.band,
        "counts": summary.counts,
        "items": [
            {
                "name": item.name,
                "kind": item.kind,
                "status": item.status.label,
                "dueDate": item.due_date,
                "needsAttention": item.needs_attention,
            }
            for item in summary.items
        ],
    }


def expiration_json(item: ExpirationItem) -> dict:
    return {
        "ownerType": item.owner_type,
        "ownerId": item.owner_id,
        "ownerName": item.owner_name,
        "itemType": item.item_type,
        "itemName": item.item_name,
        "expiryDate": item.expiry_date.isoformat(),
        "daysUntilExpiry": item.days_until,
        "tier": item.tier.label,
    }


def next_due_json(next_due) -> dict:
    if not isinstance(next_due, NextDue):
        return {"unscheduled": next_due.reason if next_due else None}
    d = next_due.to_dict()
    d["unscheduled"] = None
    return d


def schedule_json(svc: ScheduleDue) -> dict:
    d = {
        "index": svc.index,
        "templateKey": svc.template.key,
        "templateName": svc.template.display_name,
        "vehicleId": svc.schedule.vehicle_id,
        "triggerType": svc.template.trigger_type.value,
        "triggerInterval": svc.template.trigger_interval,
        "status": svc.status.label,
        "active": svc.schedule.active,
        "remaining": svc.remaining,
        "unit": svc.unit,
        "progress": svc.progress,
    }
    d.update(next_due_json(svc.next_due))
    return d


# =============================================================================
# Error handlers
# =============================================================================


@app.errorhandler(ValidationError)
def handle_validation_error(error):
    logger.info("Rejected %s %s: %s", request.method, request.path, error)
    return jsonify({"error": "Bad Request", "message": str(error)}), 400


@app.errorhandler(RecordNotFoundError)
def handle_not_found(error):
    return jsonify({"error": "Not Found", "message": str(error)}), 404


# =============================================================================
# Routes
# =============================================================================


@app.route("/api/drivers/<driver_id>/compliance")
def driver_compliance(driver_id: str):
    fleet = load_fleet(get_fleet_path())
    return jsonify(compliance_json(fleet.driver_compliance(driver_id, get_today())))


@app.route("/api/expirations")
def expirations():
    fleet = load_fleet(get_fleet_path())
    horizon = request.args.get("horizon", type=int)
    items = fleet.expirations(get_today(), horizon)
    tier = request.args.get("tier")
    if tier:
        items = [i for i in items if i.tier.label == tier]
    return jsonify([expiration_json(i) for i in items])


@app.route("/api/reminders")
def reminders():
    fleet = load_fleet(get_fleet_path())
    return jsonify(
        [
            dict(expiration_json(r.item), subject=r.subject, urgent=r.urgent)
            for r in fleet.reminders(get_today())
        ]
    )


@app.route("/api/vehicles/<vehicle_id>/pm")
def vehicle_pm(vehicle_id: str):
    fleet = load_fleet(get_fleet_path())
    fleet.require_vehicle(vehicle_id)
    today = get_today()
    next_pm = fleet.next_pm_for_vehicle(vehicle_id, today)
    return jsonify(
        {
            "vehicleId": vehicle_id,
            "schedules": [
                schedule_json(s) for s in fleet.all_schedule_status(today, vehicle_id)
            ],
            "next": schedule_json(next_pm) if next_pm else None,
        }
    )


@app.route("/api/vehicles/<vehicle_id>/pm", methods=["POST"])
def assign_pm(vehicle_id: str):
    body = request.get_json(silent=True) or {}
    template_key = body.get("templateKey")
    if not template_key:
        raise ValidationError("templateKey is required")
    baseline = Baseline(
        date=parse_date(body.get("baselineDate")),
        mileage=body.get("baselineMileage"),
        engine_hours=body.get("baselineEngineHours"),
    )
    index, outcome = assign_template(
        get_fleet_path(), template_key, vehicle_id, baseline, today=get_today()
    )
    d = {"index": index, "templateKey": template_key, "vehicleId": vehicle_id}
    d.update(next_due_json(outcome))
    return jsonify(d), 201


@app.route("/api/pm-schedules/<int:index>/pause", methods=["POST"])
def pause_schedule(index: int):
    set_schedule_active(get_fleet_path(), index, False)
    return jsonify({"index": index, "status": "paused"})


@app.route("/api/pm-schedules/<int:index>/resume", methods=["POST"])
def resume_schedule(index: int):
    set_schedule_active(get_fleet_path(), index, True)
    return jsonify({"index": index, "status": "active"})


@app.route("/api/pm-schedules/<int:index>", methods=["DELETE"])
def remove_schedule(index: int):
    delete_schedule(get_fleet_path(), index)
    return "", 204


if __name__ == "__main__":
    setup_logging(os.environ.get("LOG_LEVEL", "INFO"))
    app.run(debug=True, host="0.0.0.0", port=5001)
