# backend/barbershop/services/slots/__init__.py
"""
Slot engine: pure schedule/slot computation, no I/O.

validator    — schedule payload checks
calculator   — slot grid from start/end/step
availability — grid filtered by vacation, weekday, bookings, "now"
"""

from .config import (
    ScheduleConfig,
    VacationRange,
    get_default_schedule,
    normalize_time,
    is_date_in_vacation,
    parse_date,
)
from .validator import ValidationResult, validate_schedule
from .calculator import build_slot_times
from .availability import get_available_slots, is_open_on

__all__ = [
    "ScheduleConfig",
    "VacationRange",
    "get_default_schedule",
    "normalize_time",
    "is_date_in_vacation",
    "parse_date",
    "ValidationResult",
    "validate_schedule",
    "build_slot_times",
    "get_available_slots",
    "is_open_on",
]
