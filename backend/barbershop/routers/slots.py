# backend/barbershop/routers/slots.py
"""
Slots API endpoints.

GET /api/slots?date=YYYY-MM-DD - bookable times for one day
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..exceptions import BookingValidationError
from ..redis_client import get_redis
from ..repository import BookingRepository
from ..schemas.slots import SlotsResponse
from ..services.schedule_store import ScheduleStore
from ..services.slots import get_available_slots, parse_date


router = APIRouter(prefix="/api/slots", tags=["slots"])


@router.get("", response_model=SlotsResponse)
def get_slots(
    date: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    redis: Optional[Redis] = Depends(get_redis),
):
    """Closed and vacation days answer with an empty list, not an error."""
    if not date:
        raise BookingValidationError(
            "Date parameter is required (format: YYYY-MM-DD)", errors=["date"]
        )

    target_date = parse_date(date)
    if target_date is None:
        raise BookingValidationError("Invalid date format. Use YYYY-MM-DD", errors=["date"])

    config = ScheduleStore(db, redis).get()
    booked = BookingRepository.booked_times(db, target_date.isoformat())

    available = get_available_slots(target_date, config, booked, datetime.now())
    return SlotsResponse(available=available)
