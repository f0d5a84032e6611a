"""
Deterministic record rules.

Constants shared by the codecs live here next to the validator, so the
domain limits are stated once.
"""

from __future__ import annotations

from .errors import ValidationError
from .models import Record

TEXT_ENCODING = "utf-8"
DELIMITER = ","
LINE_SEPARATOR = "\n"
EXPECTED_COLUMNS = 3

MIN_AGE = 0
MAX_AGE = 120

BINARY_MAGIC = b"RB"


def validate_record(record: Record) -> None:
    """
    Check a record against the domain rules.

    Rules are checked in order and the first failure is reported:
    - name must be non-blank
    - age must lie in [MIN_AGE, MAX_AGE]
    - email must contain "@" (nothing stricter)

    Raises:
        ValidationError
    """
    if record.name is None or not record.name.strip():
        raise ValidationError("Name is empty")

    if record.age < MIN_AGE or record.age > MAX_AGE:
        raise ValidationError(f"Invalid age: {record.age}")

    if record.email is None or "@" not in record.email:
        raise ValidationError(f"Invalid email: {record.email}")


def is_valid(record: Record) -> bool:
    try:
        validate_record(record)
    except ValidationError:
        return False
    return True
