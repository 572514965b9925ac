"""Student store - persistent storage for student records."""

from roster.store.database import Database
from roster.store.exceptions import StoreError
from roster.store.models import MUTABLE_FIELDS, EnrollmentStatus, Student
from roster.store.store import StudentStore

__all__ = [
    "MUTABLE_FIELDS",
    "Database",
    "EnrollmentStatus",
    "StoreError",
    "Student",
    "StudentStore",
]
