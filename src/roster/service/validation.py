"""Field validation for student payloads.

Rules run in a fixed order and stop at the first failure, so a client always
sees exactly one message.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from roster.service.exceptions import ValidationError
from roster.service.models import StudentPayload
from roster.store.models import EnrollmentStatus

if TYPE_CHECKING:
    from collections.abc import Mapping

REQUIRED_MESSAGE = "first_name, last_name, and email are required"
YEAR_LEVEL_MESSAGE = "year_level must be a number between 1 and 4"
GPA_MESSAGE = "gpa must be a number between 0 and 4"
STATUS_MESSAGE = "enrollment_status must be 'Active' or 'Inactive'"
INVALID_ID_MESSAGE = "Invalid student ID"

REQUIRED_FIELDS = ("first_name", "last_name", "email")
DOMAIN_FIELDS = ("year_level", "gpa", "enrollment_status")

YEAR_LEVEL_RANGE = (1, 4)
GPA_RANGE = (0.0, 4.0)
# Signed 64-bit, the widest integer primary key any backend stores.
ID_RANGE = (-(2**63), 2**63 - 1)

DEFAULT_STATUS = EnrollmentStatus.ACTIVE.value

# Plain decimal notation with an optional exponent. No underscores, no
# hex, no inf/nan spellings.
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_decimal(text: str) -> Decimal | None:
    text = text.strip()
    if not NUMBER_PATTERN.fullmatch(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        # Exponent beyond what decimal can represent.
        return None


def to_number(value: Any) -> float | None:
    """Coerce a JSON value to a finite number.

    Numbers pass through and numeric strings are parsed. Booleans, blank
    strings, NaN and infinities are not numbers.

    Returns:
        The number as a float, or None if the value is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        parsed = _parse_decimal(value)
        if parsed is None:
            return None
        number = float(parsed)
    else:
        return None
    return number if math.isfinite(number) else None


def check_year_level(value: Any) -> int | None:
    """Validate year_level, returning it as an int (None stays None)."""
    if value is None:
        return None
    number = to_number(value)
    low, high = YEAR_LEVEL_RANGE
    if number is None or not number.is_integer() or not low <= number <= high:
        raise ValidationError(YEAR_LEVEL_MESSAGE)
    return int(number)


def check_gpa(value: Any) -> float | None:
    """Validate gpa, returning it as a float (None stays None)."""
    if value is None:
        return None
    number = to_number(value)
    low, high = GPA_RANGE
    if number is None or not low <= number <= high:
        raise ValidationError(GPA_MESSAGE)
    return number


def check_enrollment_status(value: Any) -> str:
    """Validate enrollment_status, defaulting a missing value to Active."""
    if value is None:
        return DEFAULT_STATUS
    if not isinstance(value, str) or value not in {s.value for s in EnrollmentStatus}:
        raise ValidationError(STATUS_MESSAGE)
    return value


def check_required(values: Mapping[str, Any]) -> None:
    """Require a non-empty first_name, last_name and email."""
    if not all(values.get(name) for name in REQUIRED_FIELDS):
        raise ValidationError(REQUIRED_MESSAGE)


def check_domains(values: dict[str, Any]) -> dict[str, Any]:
    """Apply the year_level, gpa and enrollment_status rules to the keys present.

    Args:
        values: Column values keyed by field name.

    Returns:
        A copy of ``values`` with the checked fields coerced.

    Raises:
        ValidationError: On the first rule that fails.
    """
    checked = dict(values)
    if "year_level" in checked:
        checked["year_level"] = check_year_level(checked["year_level"])
    if "gpa" in checked:
        checked["gpa"] = check_gpa(checked["gpa"])
    if "enrollment_status" in checked:
        checked["enrollment_status"] = check_enrollment_status(checked["enrollment_status"])
    return checked


def validate_new_student(payload: StudentPayload) -> dict[str, Any]:
    """Validate a create payload.

    Returns:
        Column values for every mutable field, ready to insert.

    Raises:
        ValidationError: If a required field is missing or a domain rule fails.
    """
    record = full_record(payload)
    check_required(record)
    return check_domains(record)


def check_raw_body(body: Mapping[str, Any], *, creating: bool) -> None:
    """Run the field rules on a request body the payload model could not parse.

    A body with a badly typed field (``age: "x"``) still reports the first
    failing rule, so rule messages win over type errors.

    Args:
        body: The decoded JSON object.
        creating: Whether the required-fields rule applies.

    Raises:
        ValidationError: On the first rule that fails.
    """
    if creating:
        check_required(body)
    check_domains({name: body[name] for name in DOMAIN_FIELDS if name in body})


def full_record(payload: StudentPayload) -> dict[str, Any]:
    """Every mutable field of the payload, absent ones as None."""
    return {
        "first_name": payload.first_name,
        "last_name": payload.last_name,
        "email": payload.email,
        "age": payload.age,
        "course": payload.course,
        "year_level": payload.year_level,
        "gpa": payload.gpa,
        "enrollment_status": payload.enrollment_status,
    }


def parse_student_id(value: str | int) -> int | None:
    """Parse a student ID taken from a URL path.

    Any number is accepted, in decimal or exponent notation (``"1e2"`` is
    100). A number that no row can have, such as ``"1.5"`` or one beyond the
    64-bit range, parses to None.

    Returns:
        The ID as an int, or None when no student can match it.

    Raises:
        ValidationError: If the value is not a number.
    """
    if isinstance(value, bool):
        raise ValidationError(INVALID_ID_MESSAGE)
    if isinstance(value, int):
        number = Decimal(value)
    else:
        number = _parse_decimal(str(value))
        if number is None:
            raise ValidationError(INVALID_ID_MESSAGE)

    low, high = ID_RANGE
    if not low <= number <= high or number != number.to_integral_value():
        return None
    return int(number)
