# backend/barbershop/services/slots/availability.py
"""
Bookable slots for a single date.

Pure: the schedule, the booked times and the current wall-clock
time are all passed in by the caller.

Gates, in order:
1. Vacation range covers the date → no slots
2. Weekday not in open_days → no slots
3. Slot grid minus booked times
4. Today only: drop slots not strictly after the current minute
"""

from datetime import date, datetime
from typing import Iterable

from .config import ScheduleConfig, day_of_week, is_date_in_vacation, time_str_to_minutes
from .calculator import build_slot_times


def is_open_on(target_date: date, config: ScheduleConfig) -> bool:
    """Date is a working day and not inside a vacation range."""
    if is_date_in_vacation(target_date.isoformat(), config.vacation_ranges):
        return False
    return day_of_week(target_date) in config.open_days


def get_available_slots(
    target_date: date,
    config: ScheduleConfig,
    booked_times: Iterable[str],
    now: datetime,
) -> list[str]:
    """
    Calculate available slot times for target_date.

    Args:
        target_date: Date being queried
        config: Schedule in effect
        booked_times: Canonical "HH:MM" times already reserved on target_date
        now: Current local time; only used when target_date is today

    Returns:
        Ascending list of "HH:MM". Empty list = no availability.
    """
    if not is_open_on(target_date, config):
        return []

    booked = set(booked_times)
    slots = [t for t in build_slot_times(config) if t not in booked]

    if target_date == now.date():
        now_min = now.hour * 60 + now.minute
        slots = [t for t in slots if time_str_to_minutes(t) > now_min]

    return slots
