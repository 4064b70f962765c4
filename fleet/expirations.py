"""Expiration dashboard and reminder selection across drivers and vehicles."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List

from .dates import DateLike, parse_date, require_date
from .driver import Driver
from .expiry import UPCOMING_WINDOW_DAYS, days_until, expiration_tier
from .status import ExpirationTier
from .vehicle import Vehicle

# Days before (positive) or after (negative) expiry on which a reminder goes out
REMINDER_OFFSETS = (90, 60, 30, 7, 0, -7, -14, -30)


@dataclass
class ExpirationItem:
    """A dated record on a driver or vehicle."""

    owner_type: str  # driver or vehicle
    owner_id: str
    owner_name: str
    item_type: str  # license, medical_card, training, document
    item_name: str
    expiry_date: date
    days_until: int

    @property
    def tier(self) -> ExpirationTier:
        return expiration_tier(self.days_until)


@dataclass
class Reminder:
    """A reminder that falls due today for an expiration item."""

    item: ExpirationItem

    @property
    def urgent(self) -> bool:
        return self.item.days_until <= 0

    @property
    def subject(self) -> str:
        if self.urgent:
            return f"URGENT: Your {self.item.item_name} has expired"
        return (
            f"Reminder: Your {self.item.item_name} expires in "
            f"{self.item.days_until} days"
        )


def _item(owner_type, owner_id, owner_name, item_type, item_name, expiry, today):
    expiry_date = parse_date(expiry)
    if expiry_date is None:
        return None
    return ExpirationItem(
        owner_type=owner_type,
        owner_id=owner_id,
        owner_name=owner_name,
        item_type=item_type,
        item_name=item_name,
        expiry_date=expiry_date,
        days_until=days_until(expiry_date, today),
    )


def collect_expirations(
    drivers: Iterable[Driver], vehicles: Iterable[Vehicle], now: DateLike
) -> List[ExpirationItem]:
    """Every dated record across the fleet, soonest expiry first."""
    today = require_date(now, "now")
    candidates = []
    for driver in drivers:
        cred = driver.credential
        candidates.append(
            _item("driver", driver.id, driver.name, "license",
                  "Driver's License", cred.license_expiry_date, today)
        )
        candidates.append(
            _item("driver", driver.id, driver.name, "medical_card",
                  "Medical Card", cred.medical_card_expiry_date, today)
        )
        for record in driver.training:
            candidates.append(
                _item("driver", driver.id, driver.name, "training",
                      record.training_type, record.next_due, today)
            )
        for doc in driver.documents:
            candidates.append(
                _item("driver", driver.id, driver.name, "document",
                      doc.document_type, doc.expiry_date, today)
            )
    for vehicle in vehicles:
        for doc in vehicle.documents:
            candidates.append(
                _item("vehicle", vehicle.id, vehicle.name, "document",
                      doc.document_type, doc.expiry_date, today)
            )
    items = [c for c in candidates if c is not None]
    return sorted(items, key=lambda i: (i.days_until, i.owner_name, i.item_name))


def upcoming_expirations(
    drivers: Iterable[Driver],
    vehicles: Iterable[Vehicle],
    now: DateLike,
    horizon_days: int = UPCOMING_WINDOW_DAYS,
) -> List[ExpirationItem]:
    """Records expiring within the horizon, including everything already overdue."""
    return [
        item
        for item in collect_expirations(drivers, vehicles, now)
        if item.days_until <= horizon_days
    ]


def due_reminders(
    drivers: Iterable[Driver], vehicles: Iterable[Vehicle], now: DateLike
) -> List[Reminder]:
    """Reminders whose offset from expiry matches today exactly."""
    return [
        Reminder(item)
        for item in collect_expirations(drivers, vehicles, now)
        if item.days_until in REMINDER_OFFSETS
    ]
