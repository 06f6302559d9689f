"""
Error taxonomy for the booking API.

Every error carries a short human-readable message and the HTTP status the
API layer answers with. They are raised where detected and never retried.
"""

from fastapi import status


class BraidrError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    kind: str = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BraidrError, ValueError):
    """Malformed or past-dated input.

    Also a ``ValueError`` so pydantic validators can raise it directly.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    kind = "validation_error"


class NotFoundError(BraidrError):
    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"


class NotAvailableError(BraidrError):
    """The stylist has switched off bookings."""

    status_code = status.HTTP_400_BAD_REQUEST
    kind = "not_available"


class ConflictError(BraidrError):
    """The requested interval overlaps an existing booking."""

    status_code = status.HTTP_409_CONFLICT
    kind = "conflict"


class InvalidTransitionError(BraidrError):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "invalid_transition"


class ForbiddenError(BraidrError):
    """The actor is not a party to the booking."""

    status_code = status.HTTP_403_FORBIDDEN
    kind = "forbidden"
