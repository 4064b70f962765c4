"""Expiry classification for licenses, medical cards, training and documents."""

from typing import Optional

from .dates import DateLike, parse_date, require_date
from .errors import ValidationError
from .status import ExpiryStatus, ExpirationTier

DEFAULT_WARNING_WINDOW_DAYS = 30
UPCOMING_WINDOW_DAYS = 90


def _check_window(warning_window_days: int) -> int:
    if isinstance(warning_window_days, bool) or not isinstance(warning_window_days, int):
        raise ValidationError(
            f"Warning window must be a whole number of days, got {warning_window_days!r}"
        )
    if warning_window_days < 0:
        raise ValidationError(
            f"Warning window must not be negative, got {warning_window_days}"
        )
    return warning_window_days


def days_until(target_date: DateLike, now: DateLike) -> int:
    """Days from now until the target date (negative once it has passed)."""
    return (require_date(target_date, "target date") - require_date(now, "now")).days


def classify(
    target_date: Optional[DateLike],
    now: DateLike,
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS,
) -> ExpiryStatus:
    """
    Classify a time-bound record against the current date.

    - MISSING: no target date on file
    - EXPIRED: target date strictly before now
    - EXPIRING_SOON: now <= target <= now + window (both ends inclusive)
    - VALID: target date beyond the window
    """
    window = _check_window(warning_window_days)
    today = require_date(now, "now")
    target = parse_date(target_date)
    if target is None:
        return ExpiryStatus.MISSING
    remaining = (target - today).days
    if remaining < 0:
        return ExpiryStatus.EXPIRED
    if remaining <= window:
        return ExpiryStatus.EXPIRING_SOON
    return ExpiryStatus.VALID


def expiration_tier(remaining_days: int) -> ExpirationTier:
    """Bucket a days-until-expiry count into the dashboard tiers."""
    if remaining_days < 0:
        return ExpirationTier.OVERDUE
    if remaining_days <= 30:
        return ExpirationTier.EXPIRING_30
    if remaining_days <= 60:
        return ExpirationTier.EXPIRING_60
    return ExpirationTier.EXPIRING_90
