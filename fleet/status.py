"""Status enums for compliance and maintenance urgency levels."""

from enum import Enum


class ExpiryStatus(Enum):
    """Compliance status of a time-bound record. Lower value = more urgent."""

    EXPIRED = 1
    MISSING = 2  # No date on file
    EXPIRING_SOON = 3
    VALID = 4

    @property
    def is_compliant(self) -> bool:
        """Expiring-soon records are still valid today."""
        return self in (ExpiryStatus.VALID, ExpiryStatus.EXPIRING_SOON)

    @property
    def label(self) -> str:
        return self.name.lower()


class DueStatus(Enum):
    """PM schedule status categories. Lower value = more urgent."""

    OVERDUE = 1
    DUE_SOON = 2
    ON_TRACK = 3
    PAUSED = 4  # Schedule toggled off
    UNSCHEDULED = 5  # No next-due value could be computed
    UNKNOWN = 6  # Can't evaluate (missing current reading)

    @property
    def label(self) -> str:
        return self.name.lower()


class ExpirationTier(Enum):
    """Buckets used by the expiration dashboard."""

    OVERDUE = 1
    EXPIRING_30 = 2
    EXPIRING_60 = 3
    EXPIRING_90 = 4

    @property
    def label(self) -> str:
        return self.name.lower()
