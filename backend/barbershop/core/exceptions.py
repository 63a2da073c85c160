"""
Custom exceptions for the application.

Calendar conflicts inside the scheduling engine are reported as data
(empty slot lists, skipped counts); these exceptions cover the
application service boundary only.
"""


class SchedulingError(Exception):
    """Base class for booking errors raised by the application service."""

    pass


class ResourceNotFoundError(SchedulingError):
    """
    Raised when a referenced appointment, service or professional does not
    exist.
    """

    def __init__(self, resource: str, resource_id=None):
        self.resource = resource
        self.resource_id = resource_id
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} {resource_id} not found"
        super().__init__(message)


class SlotUnavailableError(SchedulingError):
    """Raised when the chosen start time is not a free slot for the booking."""

    pass


class InvalidStatusTransitionError(SchedulingError):
    """Raised when an appointment status change is not allowed."""

    pass


class ResourceInUseError(SchedulingError):
    """Raised when a catalog entry cannot be removed while pending
    appointments still depend on it."""

    pass
