"""Domain error taxonomy shared by use cases and the API layer"""

from typing import Optional


class DomainError(Exception):
    """Base class for errors that map onto a client-visible response."""

    status_code: int = 500

    def __init__(self, message: str, constraint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.constraint = constraint


class Unauthenticated(DomainError):
    status_code = 401


class Forbidden(DomainError):
    status_code = 403


class NotFound(DomainError):
    status_code = 404


class InvalidInput(DomainError, ValueError):
    status_code = 400


class PayloadTooLarge(InvalidInput):
    """Oversize upload; reported with the other upload validation errors as 400"""


class Conflict(DomainError):
    status_code = 409


class Unavailable(DomainError):
    status_code = 503
