"""
Common validation helpers for clinic entities and request DTOs.

Every helper raises InvalidDataError carrying the offending field name,
so callers get consistent diagnostics regardless of where validation runs.
"""

import logging
import re
from typing import Any, Optional

from clinic.core.exceptions import InvalidDataError

logger = logging.getLogger(__name__)

MIN_AGE = 0
MAX_AGE = 150
PHONE_LENGTH = 10
EMAIL_REGEX = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+$")


def _fail(field_name: str, message: str) -> None:
    logger.warning(f"Validation error: {field_name}: {message}")
    raise InvalidDataError(field_name, message)


def validate_not_empty(value: Optional[str], field_name: str) -> None:
    """Validate that a required string field is present and not blank."""
    if value is None or not str(value).strip():
        _fail(field_name, f"{field_name} cannot be null or empty")


def validate_age(age: Any) -> None:
    if not isinstance(age, int) or isinstance(age, bool):
        _fail("age", "Age must be an integer")
    if age < MIN_AGE or age > MAX_AGE:
        _fail("age", f"Age must be between {MIN_AGE} and {MAX_AGE}")


def validate_non_negative(value: Any, field_name: str) -> None:
    """Validate a numeric amount or rate: must be a finite number >= 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        _fail(field_name, f"{field_name} must be a number")
    if value != value or value in (float("inf"), float("-inf")):
        _fail(field_name, f"{field_name} must be finite")
    if value < 0:
        _fail(field_name, f"{field_name} must be non-negative")


def validate_phone(phone: Optional[str]) -> None:
    if phone is None or not re.fullmatch(rf"\d{{{PHONE_LENGTH}}}", phone):
        _fail("phone", f"Phone must be exactly {PHONE_LENGTH} digits")


def validate_email(email: Optional[str]) -> None:
    if email is None or not EMAIL_REGEX.match(email):
        _fail("email", "Invalid email format")
