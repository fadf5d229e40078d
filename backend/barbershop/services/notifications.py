"""
backend/barbershop/services/notifications.py

Best-effort notification dispatch after a booking is committed.

Channels:
- email — owner's inbox via SMTP (blocking, run in a worker thread)
- chat  — Telegram, or WhatsApp via Twilio

Each channel fails independently. Failures are logged and never
reach the booking response: the booking is already durable.
"""

import asyncio
import logging

from .chat_notify import send_chat_notification
from .email_notify import send_booking_email

logger = logging.getLogger(__name__)


async def notify_new_booking(booking: dict) -> None:
    """
    Dispatched as a FastAPI background task once the booking is stored.

    booking: {"name", "email", "date", "time"} with canonical "HH:MM" time.
    """
    results = await asyncio.gather(
        asyncio.to_thread(send_booking_email, booking),
        send_chat_notification(booking),
        return_exceptions=True,
    )

    for channel, result in zip(("email", "chat"), results):
        if isinstance(result, BaseException):
            logger.error(
                f"Failed to send {channel} notification for "
                f"{booking.get('date')} {booking.get('time')}: {result}",
                exc_info=result,
            )
