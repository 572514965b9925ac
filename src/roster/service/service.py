"""StudentService - validation and persistence mapping for student records."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from roster.service.exceptions import DuplicateEmailError, StorageError, ValidationError
from roster.service.validation import (
    check_domains,
    full_record,
    parse_student_id,
    validate_new_student,
)
from roster.store import StoreError

if TYPE_CHECKING:
    from roster.service.models import StudentPayload
    from roster.store import Student, StudentStore

logger = logging.getLogger(__name__)

LIST_FAILED = "Error getting students"
CREATE_FAILED = "Error creating student"
UPDATE_FAILED = "Error updating student"
DELETE_FAILED = "Error deleting student"


class StudentService:
    """Request-level operations on student records.

    The service is stateless apart from the store it was built with. Each
    operation validates its input before touching the store and turns store
    failures into a StorageError carrying a generic message.

    Email uniqueness on create is a read followed by an insert, two separate
    round-trips, so two concurrent creates with the same email can both pass.
    """

    def __init__(self, store: StudentStore) -> None:
        """Initialize the service.

        Args:
            store: StudentStore the operations read from and write to.
        """
        self.store = store

    def list_students(self) -> list[Student]:
        """Return every stored student."""
        try:
            return self.store.list_students()
        except StoreError as e:
            logger.exception("Listing students failed")
            raise StorageError(LIST_FAILED) from e

    def create_student(self, payload: StudentPayload) -> Student:
        """Validate and insert a new student.

        Args:
            payload: Fields sent by the client.

        Returns:
            The stored record, read back by its generated ID.

        Raises:
            ValidationError: If a field rule fails.
            DuplicateEmailError: If the email is already used.
            StorageError: If the store fails.
        """
        try:
            values = validate_new_student(payload)
        except ValidationError as e:
            logger.debug("Rejected new student: %s", e.message)
            raise

        try:
            if self.store.email_exists(values["email"]):
                logger.debug("Rejected new student: duplicate email")
                raise DuplicateEmailError()

            values["created_at"] = _now()
            student_id = self.store.insert_student(values)
            student = self.store.get_student(student_id)
        except StoreError as e:
            logger.exception("Creating student failed")
            raise StorageError(CREATE_FAILED) from e

        logger.info("Created student %s", student_id)
        if student is None:
            raise StorageError(CREATE_FAILED)
        return student

    def update_student(self, student_id: str | int, payload: StudentPayload) -> Student | None:
        """Replace every mutable field of a student.

        Fields missing from the payload are written as null, and a missing
        enrollment_status as Active. The stored record is not checked for
        existence first.

        Args:
            student_id: ID from the request path.
            payload: Fields sent by the client.

        Returns:
            The record as read back after the write, or None when no student
            has this ID.

        Raises:
            ValidationError: If year_level, gpa or enrollment_status is invalid.
            StorageError: If the store fails.
        """
        return self._write(student_id, check_domains(full_record(payload)))

    def patch_student(self, student_id: str | int, payload: StudentPayload) -> Student | None:
        """Write only the fields present in the payload.

        Returns:
            The record as read back after the write, or None when no student
            has this ID.

        Raises:
            ValidationError: If a provided year_level, gpa or enrollment_status is invalid.
            StorageError: If the store fails.
        """
        return self._write(student_id, check_domains(payload.provided()))

    def delete_student(self, student_id: str | int) -> int:
        """Delete a student.

        Args:
            student_id: ID from the request path.

        Returns:
            Number of rows removed (0 when no student has this ID).

        Raises:
            ValidationError: If the ID is not a number.
            StorageError: If the store fails.
        """
        parsed = parse_student_id(student_id)
        if parsed is None:
            logger.debug("No student can have ID %s", student_id)
            return 0

        try:
            affected = self.store.delete_student(parsed)
        except StoreError as e:
            logger.exception("Deleting student %s failed", parsed)
            raise StorageError(DELETE_FAILED) from e

        logger.info("Deleted student %s (rows affected: %d)", parsed, affected)
        return affected

    def _write(self, student_id: str | int, values: dict) -> Student | None:
        try:
            parsed = parse_student_id(student_id)
        except ValidationError:
            # A non-numeric ID matches no row.
            return None
        if parsed is None:
            return None

        try:
            affected = self.store.update_student(parsed, values)
            student = self.store.get_student(parsed)
        except StoreError as e:
            logger.exception("Updating student %s failed", parsed)
            raise StorageError(UPDATE_FAILED) from e

        logger.info("Updated student %s (rows affected: %d)", parsed, affected)
        return student


def _now() -> datetime:
    """Current UTC time at second precision, naive for portable DATETIME columns."""
    return datetime.now(UTC).replace(microsecond=0, tzinfo=None)
