# backend/barbershop/services/slots/validator.py
"""
Structural and semantic checks for a submitted schedule.

Every check runs independently and errors accumulate.
Start/end ordering is deliberately not checked: an inverted
schedule is accepted and simply produces no slots.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

TIME_RE = re.compile(r"[0-9]{1,2}:[0-9]{2}")
DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

MIN_SLOT_MINUTES = 5
MAX_SLOT_MINUTES = 120


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


def _is_integer(value: Any) -> bool:
    # JSON numbers like 30.0 count as integers; booleans do not
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _matches(pattern: re.Pattern, value: Any) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def validate_schedule(candidate: Any) -> ValidationResult:
    """Validate a camelCase schedule payload. Never raises."""
    if not isinstance(candidate, Mapping):
        candidate = {}

    errors: list[str] = []

    open_days = candidate.get("openDays")
    if not _is_array(open_days):
        errors.append("openDays must be an array")
    else:
        for day in open_days:
            if not _is_integer(day) or not 0 <= day <= 6:
                errors.append(f"openDays contains invalid day: {day} (must be 0-6)")

    for key in ("startTime", "endTime"):
        if not _matches(TIME_RE, candidate.get(key)):
            errors.append(f"{key} must be in HH:mm format")

    slot_minutes = candidate.get("slotMinutes")
    if not _is_integer(slot_minutes) or not MIN_SLOT_MINUTES <= slot_minutes <= MAX_SLOT_MINUTES:
        errors.append(
            f"slotMinutes must be an integer between {MIN_SLOT_MINUTES} and {MAX_SLOT_MINUTES}"
        )

    ranges = candidate.get("vacationRanges")
    if ranges is not None:
        if not _is_array(ranges):
            errors.append("vacationRanges must be an array")
        else:
            for vacation in ranges:
                errors.extend(_validate_vacation_range(vacation))

    return ValidationResult(valid=not errors, errors=errors)


def _validate_vacation_range(vacation: Any) -> list[str]:
    if not isinstance(vacation, Mapping):
        vacation = {}

    errors = []
    start, end = vacation.get("start"), vacation.get("end")

    if not _matches(DATE_RE, start):
        errors.append("vacation range start must be in YYYY-MM-DD format")
    if not _matches(DATE_RE, end):
        errors.append("vacation range end must be in YYYY-MM-DD format")

    if isinstance(start, str) and isinstance(end, str) and start and end and start > end:
        errors.append(f"vacation range invalid: start {start} is after end {end}")

    return errors
