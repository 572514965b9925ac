"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from roster.service import StudentService


def get_student_service(request: Request) -> StudentService:
    """Dependency that provides the StudentService built at startup."""
    service = getattr(request.app.state, "student_service", None)
    if service is None:
        raise RuntimeError("StudentService not initialized. Is the app lifespan running?")
    return service


# Type alias for dependency injection
StudentServiceDep = Annotated[StudentService, Depends(get_student_service)]
