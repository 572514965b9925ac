"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from roster.service.models import StudentPayload

__all__ = [
    "DeleteResponse",
    "ErrorResponse",
    "HealthResponse",
    "StudentPayload",
    "StudentResponse",
    "student_to_response",
]


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str
    error: str | None = None


class StudentResponse(BaseModel):
    """Response model for a student."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str | None
    last_name: str | None
    email: str | None
    age: int | None
    course: str | None
    year_level: int | None
    gpa: float | None
    enrollment_status: str
    created_at: datetime


def student_to_response(student: Any) -> StudentResponse:
    """Convert a Student model to StudentResponse."""
    return StudentResponse.model_validate(student)


class DeleteResponse(BaseModel):
    """Response model for a delete."""

    message: str
    affected_rows: int


class HealthResponse(BaseModel):
    status: str
    version: str
