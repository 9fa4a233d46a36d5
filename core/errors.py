"""
Service-layer exception taxonomy.

Raised by the matching pipeline, the profile workflow and the storage
repositories. The web layer maps each class to an HTTP status code in
web/backend/exceptions.py.
"""

from typing import Optional


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class ValidationError(ServiceException):
    """Raised when caller-supplied input has an invalid shape. Never retried."""
    pass


class NotFound(ServiceException):
    """Raised when a position or profile does not exist."""
    pass


class RetrievalError(ServiceException):
    """
    Raised when the storage layer fails while reading or writing.

    Transient: the core never retries, it surfaces the error so an outer
    layer can decide.
    """

    retryable = True

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.details = details or message


class SequencingConflict(ServiceException):
    """Raised when two allocations race for the same employee code."""
    pass


class EmployeeCodeExhausted(SequencingConflict):
    """Raised when the fixed-width employee code sequence has no values left."""
    pass


class AssignmentException(ServiceException):
    """Raised when a candidate cannot be assigned to a position."""
    pass
