#!/usr/bin/env python3
"""
Unified CLI for fleet compliance and preventive maintenance tracking.

Commands:
  compliance       - Show a driver's compliance checklist and score
  expirations      - List credentials, training and documents expiring soon
  reminders        - List expiration reminders that fall due today
  pm               - Show which PM schedules are overdue, due soon or on track
  templates        - List PM templates
  assign           - Assign a PM template to a vehicle
  pause / resume   - Toggle a PM schedule between active and paused
  unassign         - Remove a PM schedule
  update-readings  - Update a vehicle's mileage and engine hours
  fuel             - Show fuel logs and totals
  log-fuel         - Add a fuel log
  validate         - Check a fleet file against the schema
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleet import (
    Baseline,
    DueStatus,
    ExpiryStatus,
    FleetError,
    FuelLog,
    NextDue,
    ScheduleDue,
    add_fuel_log,
    assign_template,
    delete_schedule,
    fuel_summary,
    load_fleet,
    parse_date,
    save_vehicle_readings,
    set_schedule_active,
)
from fleet.compliance import ComplianceSummary
from fleet.expirations import ExpirationItem
from fleet.logging_config import setup_logging
from fleet.validation import load_schema, validate_fleet_file

logger = logging.getLogger("fleetctl")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_number(value: Optional[float]) -> str:
    """Format a mileage or hour reading for display."""
    return f"{value:,.0f}" if value is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_days(days: Optional[int]) -> str:
    """Format a day count for display (e.g., '3mo 15d' or '-2mo 5d')."""
    if days is None:
        return "-"
    sign = "-" if days < 0 else ""
    days = abs(days)
    months = days // 30
    if months > 0:
        return f"{sign}{months}mo {days % 30}d"
    return f"{sign}{days}d"


def format_due(svc: ScheduleDue) -> str:
    """Format the next-due value with its unit."""
    if not isinstance(svc.next_due, NextDue):
        return "-"
    if svc.next_due.next_due_date is not None:
        return svc.next_due.next_due_date.isoformat()
    return f"{format_number(svc.next_due.value)} {svc.unit}"


def format_remaining(svc: ScheduleDue) -> str:
    """Format what's left until due in the schedule's own unit."""
    if svc.remaining is None:
        return "-"
    if svc.next_due.next_due_date is not None:
        return format_days(int(svc.remaining))
    if svc.remaining < 0:
        return f"-{abs(svc.remaining):,.0f} {svc.unit}"
    return f"{svc.remaining:,.0f} {svc.unit}"


def format_progress(progress: Optional[float]) -> str:
    return f"{progress:.0f}%" if progress is not None else "-"


# =============================================================================
# Compliance command
# =============================================================================


def make_compliance_table(summary: ComplianceSummary) -> List[List[str]]:
    """Convert checklist items to table rows."""
    return [
        [item.name, item.status.label, item.due_date or "-"] for item in summary.items
    ]


def print_compliance(summary: ComplianceSummary) -> None:
    print(f"Driver: {summary.driver.name} ({summary.driver.id})")
    print(f"Compliance score: {summary.score}% ({summary.band.replace('_', ' ')})")
    counts = ", ".join(
        f"{summary.count(s)} {s.label.replace('_', ' ')}"
        for s in (ExpiryStatus.VALID, ExpiryStatus.EXPIRING_SOON,
                  ExpiryStatus.EXPIRED, ExpiryStatus.MISSING)
    )
    print(f"Breakdown: {counts}")
    print()
    print(
        tabulate(
            make_compliance_table(summary),
            headers=["Item", "Status", "Due"],
            tablefmt="simple",
        )
    )
    attention = summary.needs_attention
    if attention:
        print()
        print("NEEDS ATTENTION:")
        for item in attention:
            if item.status == ExpiryStatus.MISSING:
                note = "Not provided"
            elif item.status == ExpiryStatus.EXPIRED:
                note = "Expired"
            else:
                note = "Expiring soon"
            print(f"  {item.name} - {note}")
    print()


def cmd_compliance(args):
    """Show compliance checklists."""
    fleet = load_fleet(args.fleet_file)
    driver_ids = [args.driver_id] if args.driver_id else [d.id for d in fleet.drivers]
    if not driver_ids:
        print("No drivers found.")
        return 0
    for driver_id in driver_ids:
        print_compliance(fleet.driver_compliance(driver_id, args.as_of))
    return 0


# =============================================================================
# Expirations and reminders commands
# =============================================================================


def make_expiration_table(items: List[ExpirationItem]) -> List[List[str]]:
    """Convert expiration items to table rows."""
    return [
        [
            item.owner_name,
            item.item_name,
            item.expiry_date.isoformat(),
            format_days(item.days_until),
            item.tier.label,
        ]
        for item in items
    ]


def cmd_expirations(args):
    """List records expiring within the horizon."""
    fleet = load_fleet(args.fleet_file)
    items = fleet.expirations(args.as_of, args.horizon)
    if args.tier:
        items = [i for i in items if i.tier.label == args.tier]

    horizon = args.horizon if args.horizon is not None else fleet.settings.upcoming_window_days
    print(f"Expirations within {horizon} days of {args.as_of}")
    print()
    if not items:
        print("Nothing expiring.")
        return 0
    headers = ["Owner", "Item", "Expires", "Remaining", "Tier"]
    print(tabulate(make_expiration_table(items), headers=headers, tablefmt="simple"))
    return 0


def cmd_reminders(args):
    """List reminders that fall due today."""
    fleet = load_fleet(args.fleet_file)
    reminders = fleet.reminders(args.as_of)
    if not reminders:
        print(f"No reminders due on {args.as_of}.")
        return 0
    for reminder in reminders:
        print(f"{reminder.item.owner_name}: {reminder.subject}")
    return 0


# =============================================================================
# PM commands
# =============================================================================


def make_pm_table(services: List[ScheduleDue], fleet) -> List[List[str]]:
    """Convert schedule status list to table rows."""
    rows = []
    for svc in services:
        vehicle = fleet.get_vehicle(svc.schedule.vehicle_id)
        rows.append(
            [
                svc.index,
                vehicle.name if vehicle else svc.schedule.vehicle_id,
                svc.template.display_name,
                svc.template.interval_label,
                format_due(svc),
                format_remaining(svc),
                format_progress(svc.progress),
            ]
        )
    return rows


def cmd_pm(args):
    """Show what preventive maintenance is due, overdue, or on track."""
    fleet = load_fleet(args.fleet_file)
    if args.vehicle:
        fleet.require_vehicle(args.vehicle)

    statuses = fleet.all_schedule_status(args.as_of, args.vehicle)
    print(f"As of: {args.as_of}")
    print(f"Schedules: {len(statuses)}")
    print()

    headers = ["#", "Vehicle", "Template", "Interval", "Due", "Remaining", "Progress"]
    groups = [
        (DueStatus.OVERDUE, "OVERDUE:"),
        (DueStatus.DUE_SOON, "DUE SOON:"),
        (DueStatus.ON_TRACK, "ON TRACK:"),
    ]
    for status, title in groups:
        group = sorted(
            [s for s in statuses if s.status == status],
            key=lambda s: (-(s.progress or 0), s.index),
        )
        if group:
            print(title)
            print(tabulate(make_pm_table(group, fleet), headers=headers, tablefmt="simple"))
            print()

    for status, title in (
        (DueStatus.UNKNOWN, "UNKNOWN (no current reading):"),
        (DueStatus.UNSCHEDULED, "UNSCHEDULED (no due value):"),
        (DueStatus.PAUSED, "PAUSED:"),
    ):
        group = [s for s in statuses if s.status == status]
        if group:
            print(title)
            for svc in group:
                print(f"  [{svc.index}] {svc.template.display_name} on {svc.schedule.vehicle_id}")
            print()

    return 0


def cmd_templates(args):
    """List PM templates."""
    fleet = load_fleet(args.fleet_file)
    rows = [
        [t.key, t.display_name, t.interval_label, len(t.checklist), len(t.parts)]
        for t in sorted(fleet.templates, key=lambda t: t.key)
    ]
    headers = ["Key", "Name", "Interval", "Checklist", "Parts"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


def cmd_assign(args):
    """Assign a PM template to a vehicle."""
    baseline = Baseline(
        date=parse_date(args.baseline_date),
        mileage=args.baseline_mileage,
        engine_hours=args.baseline_hours,
    )
    index, outcome = assign_template(
        args.fleet_file, args.template_key, args.vehicle_id, baseline, today=args.as_of
    )
    print(f"Created schedule [{index}]: {args.template_key} on {args.vehicle_id}")
    if isinstance(outcome, NextDue):
        if outcome.next_due_date is not None:
            print(f"  Next due: {outcome.next_due_date.isoformat()}")
        else:
            unit = outcome.trigger_type.unit
            print(f"  Next due: {format_number(outcome.value)} {unit}")
    else:
        print(f"  Warning: no due value computed ({outcome.reason})")
    return 0


def cmd_toggle(args, active: bool):
    """Pause or resume a PM schedule."""
    fleet = load_fleet(args.fleet_file)
    schedule = fleet.require_schedule(args.index)
    word = "Resume" if active else "Pause"
    print(f"{word} schedule [{args.index}]: {schedule.template_key} on {schedule.vehicle_id}")
    if args.dry_run:
        print("(dry run - no changes made)")
        return 0
    set_schedule_active(args.fleet_file, args.index, active)
    print("Schedule updated.")
    return 0


def cmd_unassign(args):
    """Remove a PM schedule."""
    fleet = load_fleet(args.fleet_file)
    schedule = fleet.require_schedule(args.index)
    print(f"Remove schedule [{args.index}]: {schedule.template_key} on {schedule.vehicle_id}")
    if args.dry_run:
        print("(dry run - no changes made)")
        return 0
    delete_schedule(args.fleet_file, args.index)
    print("Schedule removed.")
    return 0


def cmd_update_readings(args):
    """Update a vehicle's current readings."""
    if args.mileage is None and args.hours is None:
        print("Error: give --mileage and/or --hours")
        return 1

    fleet = load_fleet(args.fleet_file)
    vehicle = fleet.require_vehicle(args.vehicle_id)

    print(f"Vehicle: {vehicle.name}")
    if args.mileage is not None:
        print(f"Mileage:      {format_number(vehicle.current_mileage)} -> {format_number(args.mileage)}")
    if args.hours is not None:
        print(f"Engine hours: {format_number(vehicle.current_engine_hours)} -> {format_number(args.hours)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_vehicle_readings(args.fleet_file, vehicle.id, args.mileage, args.hours)
    print("Readings updated.")
    return 0


# =============================================================================
# Fuel commands
# =============================================================================


def cmd_fuel(args):
    """Show fuel logs and totals."""
    fleet = load_fleet(args.fleet_file)
    if args.vehicle:
        fleet.require_vehicle(args.vehicle)
        logs = fleet.fuel_logs_for_vehicle(args.vehicle)
    else:
        logs = sorted(fleet.fuel_logs, key=lambda log: log.date)

    if not logs:
        print("No fuel logs found.")
        return 0

    rows = [
        [log.date, log.vehicle_id, log.driver_id or "-", f"{log.gallons:,.1f}",
         format_cost(log.cost), format_cost(log.price_per_gallon)]
        for log in logs
    ]
    headers = ["Date", "Vehicle", "Driver", "Gallons", "Cost", "Per Gallon"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))

    summary = fuel_summary(logs)
    print()
    print(f"Fill-ups: {summary.count}")
    print(f"Total gallons: {summary.total_gallons:,.1f}")
    print(f"Total cost: {format_cost(summary.total_cost)}")
    print(f"Average price: {format_cost(summary.average_price)}")
    return 0


def cmd_log_fuel(args):
    """Add a fuel log."""
    fleet = load_fleet(args.fleet_file)
    vehicle = fleet.require_vehicle(args.vehicle_id)
    if args.driver:
        fleet.require_driver(args.driver)

    log = FuelLog(
        vehicle_id=vehicle.id,
        date=args.date or args.as_of.isoformat(),
        gallons=args.gallons,
        cost=args.cost,
        driver_id=args.driver,
        notes=args.notes,
    )
    print(f"Adding fuel log to {args.fleet_file}:")
    print(f"  Vehicle: {vehicle.name}")
    print(f"  Date:    {log.date}")
    print(f"  Gallons: {log.gallons:,.1f}")
    if log.cost is not None:
        print(f"  Cost:    {format_cost(log.cost)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    add_fuel_log(args.fleet_file, log)
    print("Fuel log saved.")
    return 0


def cmd_validate(args):
    """Check the fleet file against the schema."""
    errors = validate_fleet_file(args.fleet_file, load_schema())
    if errors:
        print(f"FAIL: {args.fleet_file.name}")
        for error in errors:
            print(f"  {error}")
        return 1
    print(f"OK: {args.fleet_file.name}")
    return 0


# =============================================================================
# Main
# =============================================================================


def iso_date(value: str) -> date:
    """argparse type for YYYY-MM-DD arguments."""
    try:
        return parse_date(value)
    except FleetError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet compliance and maintenance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fleet.yaml compliance d-101
  %(prog)s fleet.yaml expirations --horizon 30
  %(prog)s fleet.yaml --as-of 2024-01-20 reminders
  %(prog)s fleet.yaml pm --vehicle truck-7
  %(prog)s fleet.yaml assign oil-change truck-7 --baseline-mileage 50000
  %(prog)s fleet.yaml pause 3
  %(prog)s fleet.yaml update-readings truck-7 --mileage 56000
  %(prog)s fleet.yaml log-fuel truck-7 --gallons 42.5 --cost 160.65
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        help="Path to fleet YAML file",
    )
    parser.add_argument(
        "--as-of",
        type=iso_date,
        default=None,
        help="Evaluate statuses as of this date (YYYY-MM-DD, default: today)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    compliance_parser = subparsers.add_parser(
        "compliance", help="Show a driver's compliance checklist and score"
    )
    compliance_parser.add_argument(
        "driver_id", nargs="?", help="Driver id (default: all drivers)"
    )

    expirations_parser = subparsers.add_parser(
        "expirations", help="List credentials, training and documents expiring soon"
    )
    expirations_parser.add_argument(
        "--horizon",
        type=int,
        help="Days ahead to look (default: upcomingWindowDays setting)",
    )
    expirations_parser.add_argument(
        "--tier",
        choices=["overdue", "expiring_30", "expiring_60", "expiring_90"],
        help="Show only one tier",
    )

    subparsers.add_parser("reminders", help="List expiration reminders due today")

    pm_parser = subparsers.add_parser(
        "pm", help="Show which PM schedules are overdue, due soon or on track"
    )
    pm_parser.add_argument("--vehicle", type=str, help="Only this vehicle id")

    subparsers.add_parser("templates", help="List PM templates")

    assign_parser = subparsers.add_parser(
        "assign", help="Assign a PM template to a vehicle"
    )
    assign_parser.add_argument("template_key", help="PM template key")
    assign_parser.add_argument("vehicle_id", help="Vehicle id")
    assign_parser.add_argument(
        "--baseline-date",
        type=str,
        help="Baseline date (default: --as-of date)",
    )
    assign_parser.add_argument(
        "--baseline-mileage",
        type=float,
        help="Baseline odometer reading (default: vehicle's current mileage)",
    )
    assign_parser.add_argument(
        "--baseline-hours",
        type=float,
        help="Baseline engine hours (default: vehicle's current engine hours)",
    )

    for name, help_text in (
        ("pause", "Pause a PM schedule"),
        ("resume", "Resume a paused PM schedule"),
        ("unassign", "Remove a PM schedule"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("index", type=int, help="Schedule number (see 'pm')")
        p.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would change without saving",
        )

    readings_parser = subparsers.add_parser(
        "update-readings", help="Update a vehicle's mileage and engine hours"
    )
    readings_parser.add_argument("vehicle_id", help="Vehicle id")
    readings_parser.add_argument("--mileage", type=float, help="Current mileage")
    readings_parser.add_argument("--hours", type=float, help="Current engine hours")
    readings_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    fuel_parser = subparsers.add_parser("fuel", help="Show fuel logs and totals")
    fuel_parser.add_argument("--vehicle", type=str, help="Only this vehicle id")

    log_fuel_parser = subparsers.add_parser("log-fuel", help="Add a fuel log")
    log_fuel_parser.add_argument("vehicle_id", help="Vehicle id")
    log_fuel_parser.add_argument(
        "--gallons", type=float, required=True, help="Gallons pumped"
    )
    log_fuel_parser.add_argument("--cost", type=float, help="Total cost")
    log_fuel_parser.add_argument("--driver", type=str, help="Driver id")
    log_fuel_parser.add_argument(
        "--date", type=str, help="Fill-up date in YYYY-MM-DD format (default: today)"
    )
    log_fuel_parser.add_argument("--notes", type=str, help="Notes")
    log_fuel_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    subparsers.add_parser("validate", help="Check the fleet file against the schema")

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING")
    if args.as_of is None:
        args.as_of = date.today()

    # Validate fleet file exists
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    try:
        # Dispatch to command handler
        if args.command == "compliance":
            return cmd_compliance(args)
        elif args.command == "expirations":
            return cmd_expirations(args)
        elif args.command == "reminders":
            return cmd_reminders(args)
        elif args.command == "pm":
            return cmd_pm(args)
        elif args.command == "templates":
            return cmd_templates(args)
        elif args.command == "assign":
            return cmd_assign(args)
        elif args.command == "pause":
            return cmd_toggle(args, active=False)
        elif args.command == "resume":
            return cmd_toggle(args, active=True)
        elif args.command == "unassign":
            return cmd_unassign(args)
        elif args.command == "update-readings":
            return cmd_update_readings(args)
        elif args.command == "fuel":
            return cmd_fuel(args)
        elif args.command == "log-fuel":
            return cmd_log_fuel(args)
        elif args.command == "validate":
            return cmd_validate(args)
    except FleetError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
