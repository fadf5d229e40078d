# backend/barbershop/routers/schedule.py
# GET = public, PUT = admin (full replace, no PATCH)

from typing import Any, Mapping, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from redis import Redis
from sqlalchemy.orm import Session

from ..auth import admin_secret_from_request, verify_admin_secret
from ..database import get_db
from ..redis_client import get_redis
from ..schemas.schedule import ScheduleRead, ValidationErrorResponse
from ..services.schedule_store import ScheduleStore

router = APIRouter(prefix="/api/config", tags=["schedule"])


@router.get("", response_model=ScheduleRead, response_model_by_alias=True)
def get_schedule(
    db: Session = Depends(get_db),
    redis: Optional[Redis] = Depends(get_redis),
):
    return ScheduleStore(db, redis).get().to_payload()


@router.put(
    "",
    response_model=ScheduleRead,
    response_model_by_alias=True,
    responses={400: {"model": ValidationErrorResponse}, 403: {"model": ValidationErrorResponse}},
)
def replace_schedule(
    payload: Any = Body(...),
    query_secret: Optional[str] = Depends(admin_secret_from_request),
    db: Session = Depends(get_db),
    redis: Optional[Redis] = Depends(get_redis),
):
    # Any JSON value is accepted here; non-objects fail schedule validation
    if not isinstance(payload, Mapping):
        verify_admin_secret(query_secret)
        return ScheduleStore(db, redis).replace(payload).to_payload()

    verify_admin_secret(payload.get("adminSecret") or query_secret)

    vacation_ranges = payload.get("vacationRanges")
    candidate = {
        "openDays": payload.get("openDays"),
        "startTime": payload.get("startTime"),
        "endTime": payload.get("endTime"),
        "slotMinutes": payload.get("slotMinutes"),
        "vacationRanges": [] if vacation_ranges is None else vacation_ranges,
    }
    return ScheduleStore(db, redis).replace(candidate).to_payload()


@router.patch("")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )
