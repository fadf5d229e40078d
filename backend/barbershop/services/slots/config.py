# backend/barbershop/services/slots/config.py
"""
Schedule configuration shape and time-of-day helpers.

All times are "HH:MM" strings in a single implicit local zone.
All dates are "YYYY-MM-DD" strings, which compare correctly as text.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping


DEFAULT_OPEN_DAYS = (1, 2, 3, 4, 5, 6)  # Monday through Saturday
DEFAULT_START_TIME = "12:00"
DEFAULT_END_TIME = "21:00"
DEFAULT_SLOT_MINUTES = 30

ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True)
class VacationRange:
    """Inclusive closed-date interval."""
    start: str
    end: str

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class ScheduleConfig:
    """
    Weekly schedule plus vacation exceptions.

    Attributes:
        open_days: Weekdays the shop is open, 0 = Sunday .. 6 = Saturday
        start_time: First slot start, "HH:MM"
        end_time: Closing time (never itself a slot start), "HH:MM"
        slot_minutes: Slot granularity, 5..120
        vacation_ranges: Closed-date ranges, inclusive at both ends
    """
    open_days: tuple[int, ...] = DEFAULT_OPEN_DAYS
    start_time: str = DEFAULT_START_TIME
    end_time: str = DEFAULT_END_TIME
    slot_minutes: int = DEFAULT_SLOT_MINUTES
    vacation_ranges: tuple[VacationRange, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ScheduleConfig":
        """Build from a camelCase payload that already passed validate_schedule()."""
        ranges = payload.get("vacationRanges") or []
        return cls(
            open_days=tuple(int(day) for day in payload["openDays"]),
            start_time=payload["startTime"],
            end_time=payload["endTime"],
            slot_minutes=int(payload["slotMinutes"]),
            vacation_ranges=tuple(
                VacationRange(start=r["start"], end=r["end"]) for r in ranges
            ),
        )

    def to_payload(self) -> dict:
        """camelCase dict, the shape used by the API and the cache."""
        return {
            "openDays": list(self.open_days),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "slotMinutes": self.slot_minutes,
            "vacationRanges": [r.to_dict() for r in self.vacation_ranges],
        }


def get_default_schedule() -> ScheduleConfig:
    """Built-in schedule served until an admin stores one."""
    return ScheduleConfig()


# ── Time helpers ─────────────────────────────────────────────────────────


def time_str_to_minutes(time_str: str) -> int:
    """Convert "H:MM" / "HH:MM" to minutes since midnight."""
    hour, minute = time_str.split(":")[:2]
    return int(hour) * 60 + int(minute)


def minutes_to_time_str(minutes: int) -> str:
    """Convert minutes since midnight to zero-padded "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time(raw: str) -> str:
    """
    Canonicalize a submitted time: "9:00" -> "09:00", "12:5" -> "12:05".

    Returns "" when the hour or the minute part is missing or not
    numeric, so such input never matches a slot.
    """
    parts = str(raw).strip().split(":")
    try:
        hour = int(parts[0])
    except ValueError:
        return ""

    minute_part = parts[1].strip() if len(parts) > 1 else ""
    if not (minute_part.isascii() and minute_part.isdigit()):
        return ""
    minute = int(minute_part)

    return f"{hour:02d}:{minute:02d}"


def is_date_in_vacation(date_str: str, vacation_ranges) -> bool:
    """
    True if date_str lies inside any range, both ends inclusive.

    Ranges may be VacationRange objects or {"start", "end"} mappings;
    malformed entries never match.
    """
    if not vacation_ranges:
        return False

    for vacation in vacation_ranges:
        if isinstance(vacation, Mapping):
            start, end = vacation.get("start"), vacation.get("end")
        else:
            start = getattr(vacation, "start", None)
            end = getattr(vacation, "end", None)

        if not isinstance(start, str) or not isinstance(end, str):
            continue
        if start <= date_str <= end:
            return True

    return False


def day_of_week(target_date: date) -> int:
    """0 = Sunday .. 6 = Saturday."""
    return target_date.isoweekday() % 7


def parse_date(date_str: str) -> date | None:
    """Parse strict "YYYY-MM-DD"; None for anything else, including impossible dates."""
    if not isinstance(date_str, str) or not ISO_DATE_RE.fullmatch(date_str):
        return None
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        return None
