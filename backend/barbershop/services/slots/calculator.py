# backend/barbershop/services/slots/calculator.py
"""
Slot grid generation.

Slots start at start_time and step by slot_minutes while strictly
before end_time: the half-open interval [start, end).
No wraparound past midnight: end <= start gives an empty grid.
"""

from .config import ScheduleConfig, time_str_to_minutes, minutes_to_time_str


def build_slot_times(config: ScheduleConfig) -> list[str]:
    """
    Full list of slot start times for one open day.

    Returns:
        Ascending list of "HH:MM" strings. Empty list = no slots.
    """
    start_min = time_str_to_minutes(config.start_time)
    end_min = time_str_to_minutes(config.end_time)
    step = config.slot_minutes

    if step <= 0:
        return []

    slots: list[str] = []
    t = start_min
    while t < end_min:
        slots.append(minutes_to_time_str(t))
        t += step

    return slots
