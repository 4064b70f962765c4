"""Driver compliance checklist and aggregate score."""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .dates import DateLike
from .driver import Driver
from .expiry import DEFAULT_WARNING_WINDOW_DAYS, classify
from .status import ExpiryStatus


@dataclass
class ComplianceItem:
    """One line of a driver's compliance checklist."""

    name: str
    kind: str  # profile, license, medical_card, training
    status: ExpiryStatus
    due_date: Optional[str] = None

    @property
    def is_compliant(self) -> bool:
        return self.status.is_compliant

    @property
    def needs_attention(self) -> bool:
        return self.status in (
            ExpiryStatus.EXPIRED,
            ExpiryStatus.MISSING,
            ExpiryStatus.EXPIRING_SOON,
        )


@dataclass
class ComplianceSummary:
    """Checklist items for one driver with the derived score."""

    driver: Driver
    items: List[ComplianceItem] = field(default_factory=list)

    @property
    def score(self) -> int:
        return compliance_score(item.status for item in self.items)

    @property
    def band(self) -> str:
        return score_band(self.score)

    @property
    def needs_attention(self) -> List[ComplianceItem]:
        return [item for item in self.items if item.needs_attention]

    def count(self, status: ExpiryStatus) -> int:
        return sum(1 for item in self.items if item.status == status)

    @property
    def counts(self) -> Dict[str, int]:
        return {status.label: self.count(status) for status in ExpiryStatus}


def compliance_score(statuses: Iterable[ExpiryStatus]) -> int:
    """
    Percentage of compliant checklist items, rounded half-up.

    An empty checklist has nothing out of compliance and scores 100.
    """
    statuses = list(statuses)
    if not statuses:
        return 100
    compliant = sum(1 for s in statuses if s.is_compliant)
    return int(math.floor(compliant / len(statuses) * 100 + 0.5))


def score_band(score: int) -> str:
    """Qualitative band for a compliance score."""
    if score >= 80:
        return "excellent"
    if score >= 60:
        return "good"
    return "needs_attention"


def training_status(
    driver: Driver,
    training_type: str,
    now: DateLike,
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS,
) -> ComplianceItem:
    """
    Status of one required training type.

    Never completed counts as missing. Completed training with no next-due
    date is one-time training and stays valid.
    """
    record = driver.get_training(training_type)
    if record is None or not record.last_completed:
        status = ExpiryStatus.MISSING
    elif record.next_due:
        status = classify(record.next_due, now, warning_window_days)
    else:
        status = ExpiryStatus.VALID
    return ComplianceItem(
        name=training_type,
        kind="training",
        status=status,
        due_date=record.next_due if record else None,
    )


def driver_checklist(
    driver: Driver,
    now: DateLike,
    required_training: Iterable[str] = (),
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS,
) -> ComplianceSummary:
    """Build the compliance checklist for a driver as of now."""
    cred = driver.credential
    items = [
        ComplianceItem(
            name="Profile Information",
            kind="profile",
            status=ExpiryStatus.VALID if driver.profile_complete else ExpiryStatus.MISSING,
        )
    ]

    # A license without a number on file isn't usable regardless of its date
    if cred.license_number and cred.license_expiry_date:
        license_status = classify(cred.license_expiry_date, now, warning_window_days)
    else:
        license_status = ExpiryStatus.MISSING
    items.append(
        ComplianceItem(
            name="Driver's License",
            kind="license",
            status=license_status,
            due_date=cred.license_expiry_date,
        )
    )
    items.append(
        ComplianceItem(
            name="Medical Card",
            kind="medical_card",
            status=classify(cred.medical_card_expiry_date, now, warning_window_days),
            due_date=cred.medical_card_expiry_date,
        )
    )

    for training_type in required_training:
        items.append(training_status(driver, training_type, now, warning_window_days))

    return ComplianceSummary(driver=driver, items=items)
