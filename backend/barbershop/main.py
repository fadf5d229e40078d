# backend/barbershop/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .database import init_db
from .exceptions import BookingError
from .routers import admin, bookings, schedule, slots

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Barbershop Booking API", lifespan=lifespan)

    app.include_router(schedule.router)
    app.include_router(slots.router)
    app.include_router(bookings.router)
    app.include_router(admin.router)

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        fields = [
            ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            for error in exc.errors()
        ]
        logger.info(f"Invalid request body for {request.url.path}: {fields}")
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request body", "errors": [f for f in fields if f]},
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        # Details stay in the server log
        logger.exception(f"Storage failure on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Database connection failed"})

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
