"""REST API for Roster."""

from roster.api.app import create_app, register_exception_handlers
from roster.api.models import (
    DeleteResponse,
    ErrorResponse,
    StudentPayload,
    StudentResponse,
)

__all__ = [
    "DeleteResponse",
    "ErrorResponse",
    "StudentPayload",
    "StudentResponse",
    "create_app",
    "register_exception_handlers",
]
