"""Student service - validation and persistence mapping for the roster API."""

from roster.service.exceptions import (
    ConflictError,
    DuplicateEmailError,
    StorageError,
    StudentServiceError,
    ValidationError,
)
from roster.service.models import StudentPayload
from roster.service.service import StudentService

__all__ = [
    "ConflictError",
    "DuplicateEmailError",
    "StorageError",
    "StudentPayload",
    "StudentService",
    "StudentServiceError",
    "ValidationError",
]
