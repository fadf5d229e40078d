# backend/barbershop/routers/bookings.py
# Bookings are immutable: no PATCH, no DELETE

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..redis_client import get_redis
from ..schemas.bookings import BookingAck, BookingCreate
from ..services.booking import booking_notification_payload, create_booking
from ..services.notifications import notify_new_booking

router = APIRouter(prefix="/api/booking", tags=["bookings"])


@router.post("", response_model=BookingAck)
def post_booking(
    data: BookingCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: Optional[Redis] = Depends(get_redis),
):
    booking = create_booking(db, data.model_dump(), redis)

    # Runs after the response is sent; its failures are only logged
    background_tasks.add_task(notify_new_booking, booking_notification_payload(booking))

    return BookingAck(ok=True)
