"""Student CRUD endpoints."""

from fastapi import APIRouter, status

from roster.api.dependencies import StudentServiceDep
from roster.api.models import (
    DeleteResponse,
    ErrorResponse,
    StudentPayload,
    StudentResponse,
    student_to_response,
)

router = APIRouter(
    prefix="/students",
    tags=["students"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)


@router.get("", response_model=list[StudentResponse])
def list_students(service: StudentServiceDep) -> list[StudentResponse]:
    """List all students."""
    return [student_to_response(s) for s in service.list_students()]


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(payload: StudentPayload, service: StudentServiceDep) -> StudentResponse:
    """Create a new student."""
    return student_to_response(service.create_student(payload))


@router.put("/{student_id}", response_model=StudentResponse | None)
def update_student(
    student_id: str, payload: StudentPayload, service: StudentServiceDep
) -> StudentResponse | None:
    """Replace a student (omitted fields are cleared)."""
    updated = service.update_student(student_id, payload)
    return student_to_response(updated) if updated is not None else None


@router.patch("/{student_id}", response_model=StudentResponse | None)
def patch_student(
    student_id: str, payload: StudentPayload, service: StudentServiceDep
) -> StudentResponse | None:
    """Update a student (partial update)."""
    updated = service.patch_student(student_id, payload)
    return student_to_response(updated) if updated is not None else None


@router.delete("/{student_id}", response_model=DeleteResponse)
def delete_student(student_id: str, service: StudentServiceDep) -> DeleteResponse:
    """Delete a student."""
    affected = service.delete_student(student_id)
    message = "Student deleted successfully" if affected else "No student found with the given ID"
    return DeleteResponse(message=message, affected_rows=affected)
