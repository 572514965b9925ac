"""SQLAlchemy models for the student store."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from enum import StrEnum

from sqlalchemy import DateTime, Float, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class EnrollmentStatus(StrEnum):
    """Enrollment status enum."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Student(Base):
    """Student model - one row per enrolled or former student."""

    __tablename__ = "students"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted max row again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    course: Mapped[str | None] = mapped_column(String(255), nullable=True)
    year_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gpa: Mapped[float | None] = mapped_column(Float, nullable=True)
    enrollment_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EnrollmentStatus.ACTIVE.value
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id!r}, email={self.email!r}, status={self.enrollment_status!r})>"


# Columns a client may write; id and created_at are owned by the store.
MUTABLE_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "email",
    "age",
    "course",
    "year_level",
    "gpa",
    "enrollment_status",
)
