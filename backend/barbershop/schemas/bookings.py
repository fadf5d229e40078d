# backend/barbershop/schemas/bookings.py

from typing import Optional
from pydantic import BaseModel


class BookingCreate(BaseModel):
    # Presence is checked by the booking service so all missing fields are reported together
    name: Optional[str] = None
    email: Optional[str] = None
    date: Optional[str] = None  # YYYY-MM-DD
    time: Optional[str] = None  # H:MM or HH:MM

    model_config = {"from_attributes": True}


class BookingAck(BaseModel):
    ok: bool = True
