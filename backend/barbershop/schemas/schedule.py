# backend/barbershop/schemas/schedule.py
"""
Pydantic schemas for the schedule API.

Wire format is camelCase (openDays, startTime, ...).
Writes are validated by services.slots.validate_schedule, not here,
so that every field error is reported at once.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class VacationRangeRead(BaseModel):
    start: str
    end: str

    model_config = {"from_attributes": True}


class ScheduleRead(BaseModel):
    """Current schedule configuration."""
    open_days: list[int]
    start_time: str
    end_time: str
    slot_minutes: int
    vacation_ranges: list[VacationRangeRead] = []

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class ValidationErrorResponse(BaseModel):
    message: str
    errors: list[str] = []
