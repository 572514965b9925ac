"""Input model for student operations."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StudentPayload(BaseModel):
    """Partial student record as sent by a client.

    Every field is optional. ``model_fields_set`` tells which keys were sent,
    which merge updates rely on. year_level and gpa are kept exactly as sent
    (a JSON ``true`` stays a bool) and are coerced by the field rules.
    """

    model_config = ConfigDict(extra="ignore")

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    age: int | None = None
    course: str | None = None
    year_level: Any = Field(default=None, description="Number or numeric string in [1, 4]")
    gpa: Any = Field(default=None, description="Number or numeric string in [0, 4]")
    enrollment_status: str | None = None

    def provided(self) -> dict[str, Any]:
        """Return only the fields the client sent, including explicit nulls."""
        return {name: getattr(self, name) for name in self.model_fields_set}
