# backend/barbershop/schemas/slots.py
"""
Pydantic schemas for slots API.
"""

from pydantic import BaseModel, Field


class SlotsResponse(BaseModel):
    """Bookable start times for one date; empty list = closed, vacation, or fully booked."""
    available: list[str] = Field(description='Ascending canonical "HH:MM" times')

    model_config = {"from_attributes": True}
