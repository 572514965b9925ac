"""StudentStore - persistence operations for student records."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from roster.store.database import DEFAULT_DATABASE_URL, Database
from roster.store.exceptions import StoreError
from roster.store.models import MUTABLE_FIELDS, Student


class StudentStore:
    """Persistence API for the students table.

    Every method is a single round-trip on its own session, so two calls are
    never part of the same transaction.
    """

    def __init__(self, database_url: str = DEFAULT_DATABASE_URL) -> None:
        """Initialize the store.

        Creates database and tables if they don't exist.

        Args:
            database_url: SQLAlchemy URL of the database holding the students table
        """
        self._db = Database(database_url)
        try:
            self._db.create_tables()
        except (SQLAlchemyError, OSError) as e:
            self._db.close()
            raise StoreError(f"Could not initialize students table: {e}") from e

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def list_students(self) -> list[Student]:
        """List all students.

        Returns:
            All students, ordered by id
        """
        session = self._db.get_session()
        try:
            result = session.execute(select(Student).order_by(Student.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StoreError("Failed to list students") from e
        finally:
            session.close()

    def get_student(self, student_id: int) -> Student | None:
        """Get student by ID.

        Args:
            student_id: The student's ID

        Returns:
            The Student, or None if no row has this ID
        """
        session = self._db.get_session()
        try:
            return session.get(Student, student_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read student {student_id}") from e
        finally:
            session.close()

    def email_exists(self, email: str) -> bool:
        """Check whether any student already uses this email."""
        session = self._db.get_session()
        try:
            stmt = select(Student.id).where(Student.email == email).limit(1)
            return session.execute(stmt).first() is not None
        except SQLAlchemyError as e:
            raise StoreError("Failed to check email") from e
        finally:
            session.close()

    def insert_student(self, values: dict[str, Any]) -> int:
        """Insert a new student row.

        Args:
            values: Column values; keys must be mutable fields or created_at

        Returns:
            The ID generated for the new row
        """
        _check_columns(values, allow_created_at=True)
        session = self._db.get_session()
        try:
            student = Student(**values)
            session.add(student)
            session.commit()
            return student.id
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError("Failed to insert student") from e
        finally:
            session.close()

    def update_student(self, student_id: int, values: dict[str, Any]) -> int:
        """Overwrite the given columns of one student.

        Columns not in ``values`` are left untouched. There is no existence
        check: an unknown ID simply matches no row.

        Args:
            student_id: The student's ID
            values: Column values to write

        Returns:
            Number of rows affected (0 or 1)
        """
        _check_columns(values, allow_created_at=False)
        if not values:
            return 0

        session = self._db.get_session()
        try:
            stmt = update(Student).where(Student.id == student_id).values(**values)
            result = session.execute(stmt)
            session.commit()
            return result.rowcount
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Failed to update student {student_id}") from e
        finally:
            session.close()

    def delete_student(self, student_id: int) -> int:
        """Delete a student.

        Args:
            student_id: The student's ID

        Returns:
            Number of rows deleted (0 or 1)
        """
        session = self._db.get_session()
        try:
            result = session.execute(delete(Student).where(Student.id == student_id))
            session.commit()
            return result.rowcount
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Failed to delete student {student_id}") from e
        finally:
            session.close()


def _check_columns(values: dict[str, Any], *, allow_created_at: bool) -> None:
    allowed = set(MUTABLE_FIELDS)
    if allow_created_at:
        allowed.add("created_at")
    unknown = sorted(set(values) - allowed)
    if unknown:
        raise ValueError(f"Unknown or read-only student columns: {', '.join(unknown)}")
