"""Exception classes for fleet compliance tracking."""


class FleetError(Exception):
    """Base exception class for fleet compliance tracking."""


class ValidationError(FleetError, ValueError):
    """Raised when an input value is malformed or out of range."""


class RecordNotFoundError(FleetError, LookupError):
    """Raised when a driver, vehicle, template or schedule does not exist."""
