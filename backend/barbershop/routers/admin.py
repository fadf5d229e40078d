# backend/barbershop/routers/admin.py

from typing import Optional

from fastapi import APIRouter, Depends

from ..auth import admin_secret_from_request, verify_admin_secret

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/verify")
def verify_admin(provided: Optional[str] = Depends(admin_secret_from_request)):
    """Lets the admin UI check its key before showing the schedule editor."""
    verify_admin_secret(provided)
    return {"ok": True}
