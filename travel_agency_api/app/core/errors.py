"""
Error kinds raised by the service layer.

Services never build HTTP responses.  They raise one of the exceptions
below and the handlers registered in ``main.py`` translate the
``ErrorKind`` into a status code.

Usage::

    from travel_agency_api.app.core.errors import NotFoundError

    raise NotFoundError(f"Client with ID {client_id} not found")
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Categories of failure an operation can report."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class TravelAgencyError(Exception):
    """Base exception for all service errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


class ValidationError(TravelAgencyError):
    """A required field is missing or a business rule rejected the request."""

    kind = ErrorKind.VALIDATION


class NotFoundError(TravelAgencyError):
    """A referenced client, trip or registration does not exist."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(TravelAgencyError):
    """The request collides with existing data."""

    kind = ErrorKind.CONFLICT


class InternalError(TravelAgencyError):
    """Unexpected datastore or runtime failure."""

    kind = ErrorKind.INTERNAL
