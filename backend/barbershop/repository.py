"""Database operations for bookings and the schedule log"""

import json
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .exceptions import ConflictError
from .models import Bookings, Schedule
from .services.slots.config import ScheduleConfig, VacationRange

logger = logging.getLogger(__name__)


class BookingRepository:
    """Repository for booking rows; (date, time) is unique at the table level"""

    @staticmethod
    def find(db: Session, date_str: str, time_str: str) -> Optional[Bookings]:
        return (
            db.query(Bookings)
            .filter(Bookings.date == date_str, Bookings.time == time_str)
            .first()
        )

    @staticmethod
    def booked_times(db: Session, date_str: str) -> set[str]:
        """Canonical times already taken on a date"""
        rows = db.query(Bookings.time).filter(Bookings.date == date_str).all()
        return {row.time for row in rows}

    @staticmethod
    def insert(db: Session, date_str: str, time_str: str, name: str, email: str) -> Bookings:
        """
        Insert and commit a booking.
        Raises ConflictError if the (date, time) pair is already stored.
        """
        booking = Bookings(date=date_str, time=time_str, name=name, email=email)
        db.add(booking)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ConflictError(f"{date_str} {time_str} already booked") from e
        db.refresh(booking)
        return booking


class ScheduleRepository:
    """Append-only schedule log; the row with the highest id is current"""

    @staticmethod
    def latest(db: Session) -> Optional[tuple[int, ScheduleConfig]]:
        """(row id, schedule) of the newest entry"""
        row = db.query(Schedule).order_by(Schedule.id.desc()).first()
        if row is None:
            return None
        return row.id, _row_to_config(row)

    @staticmethod
    def append(db: Session, config: ScheduleConfig) -> tuple[int, ScheduleConfig]:
        row = Schedule(
            open_days=json.dumps(list(config.open_days)),
            start_time=config.start_time,
            end_time=config.end_time,
            slot_minutes=config.slot_minutes,
            vacation_ranges=json.dumps([r.to_dict() for r in config.vacation_ranges]),
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info(f"Schedule stored: id={row.id}")
        return row.id, _row_to_config(row)


def _row_to_config(row: Schedule) -> ScheduleConfig:
    ranges = json.loads(row.vacation_ranges) if row.vacation_ranges else []
    return ScheduleConfig(
        open_days=tuple(json.loads(row.open_days)),
        start_time=row.start_time,
        end_time=row.end_time,
        slot_minutes=row.slot_minutes,
        vacation_ranges=tuple(VacationRange(start=r["start"], end=r["end"]) for r in ranges or []),
    )
