"""Exceptions for the student service.

Each exception carries the message shown to API clients.
"""


class StudentServiceError(Exception):
    """Base exception for student service errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StudentServiceError):
    """Client input violates a documented constraint."""


class ConflictError(StudentServiceError):
    """Client input conflicts with data already stored."""


class DuplicateEmailError(ConflictError):
    """Another student already uses this email."""

    def __init__(self, message: str = "Email already exists") -> None:
        super().__init__(message)


class StorageError(StudentServiceError):
    """The store failed; the underlying cause is chained, not exposed."""
