# backend/barbershop/services/booking.py
"""
Booking creation and slot reservation.

Reservation is optimistic-then-atomic:
1. Pre-check for an existing row (fast path, not a guarantee)
2. Insert under the bookings(date, time) unique constraint

Only step 2 decides the winner when two requests race for the same slot.
"""

import logging
from typing import Any, Mapping

from redis import Redis
from sqlalchemy.orm import Session

from ..exceptions import (
    BookingValidationError,
    ConflictError,
    SlotConflictError,
    SlotUnavailableError,
)
from ..models import Bookings
from ..repository import BookingRepository
from .schedule_store import ScheduleStore
from .slots import ScheduleConfig, build_slot_times, is_date_in_vacation, normalize_time, parse_date
from .slots.config import day_of_week

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "date", "time")


def reserve(
    db: Session,
    date_str: str,
    time_str: str,
    name: str,
    email: str,
    precheck: bool = True,
) -> Bookings:
    """
    Atomically reserve (date, time).

    Returns:
        The committed booking.

    Raises:
        SlotUnavailableError: time cannot be parsed
        SlotConflictError: slot already taken, by the pre-check or by the constraint
    """
    canonical = normalize_time(time_str)
    if not canonical:
        raise SlotUnavailableError("Selected time is outside opening hours")

    if precheck and BookingRepository.find(db, date_str, canonical):
        logger.info(f"Slot taken (pre-check): {date_str} {canonical}")
        raise SlotConflictError()

    try:
        booking = BookingRepository.insert(db, date_str, canonical, name, email)
    except ConflictError:
        logger.info(f"Slot taken (constraint): {date_str} {canonical}")
        raise SlotConflictError() from None

    logger.info(f"Booking reserved: id={booking.id} {date_str} {canonical}")
    return booking


def check_slot_bookable(config: ScheduleConfig, date_str: str, canonical_time: str) -> None:
    """
    Revalidate a requested slot against the schedule in effect.

    Raises:
        BookingValidationError: date is not a valid YYYY-MM-DD calendar date
        SlotUnavailableError: vacation, closed weekday, or time off the grid
    """
    target_date = parse_date(date_str)
    if target_date is None:
        raise BookingValidationError("Invalid date format. Use YYYY-MM-DD", errors=["date"])

    if is_date_in_vacation(date_str, config.vacation_ranges):
        raise SlotUnavailableError("Selected date is not available (vacation period)")

    if day_of_week(target_date) not in config.open_days:
        raise SlotUnavailableError("Selected date is not available (closed day)")

    if canonical_time not in build_slot_times(config):
        raise SlotUnavailableError("Selected time is outside opening hours")


def create_booking(
    db: Session,
    payload: Mapping[str, Any],
    redis: Redis | None = None,
) -> Bookings:
    """
    Full booking flow: field checks, schedule checks, reservation.

    Notification is not sent here; the caller dispatches it after commit.
    """
    missing = [f for f in REQUIRED_FIELDS if not _clean(payload.get(f))]
    if missing:
        raise BookingValidationError(
            "Missing required fields: name, email, date, and time are required",
            errors=missing,
        )

    name = _clean(payload["name"])
    email = _clean(payload["email"])
    date_str = _clean(payload["date"])
    canonical = normalize_time(_clean(payload["time"]))

    config = ScheduleStore(db, redis).get()
    check_slot_bookable(config, date_str, canonical)

    return reserve(db, date_str, canonical, name, email)


def booking_notification_payload(booking: Bookings) -> dict:
    return {
        "name": booking.name,
        "email": booking.email,
        "date": booking.date,
        "time": booking.time,
    }


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
