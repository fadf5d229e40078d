"""
Chat notifications for new bookings.

Channel choice:
- Telegram Bot API when TELEGRAM_BOT_TOKEN + TELEGRAM_CHAT_ID are set
- otherwise WhatsApp via Twilio when all TWILIO_* + WHATSAPP_NUMBER are set
- otherwise skipped
"""

import logging
from typing import Optional

import httpx

from ..config import settings
from .formatters import format_chat_message

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"
TWILIO_API_URL = "https://api.twilio.com/2010-04-01"


class ChatNotifyError(Exception):
    """Chat provider rejected the message."""


async def send_chat_notification(
    booking: dict,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[str]:
    """
    Send the booking alert via the first configured channel.

    Returns:
        "telegram", "whatsapp", or None when nothing is configured.
    """
    message = format_chat_message(booking)

    if settings.telegram_bot_token and settings.telegram_chat_id:
        channel = "telegram"
    elif (
        settings.whatsapp_number
        and settings.twilio_account_sid
        and settings.twilio_auth_token
        and settings.twilio_whatsapp_number
    ):
        channel = "whatsapp"
    else:
        logger.info("Notification skipped: no Telegram or WhatsApp credentials configured")
        return None

    own_client = client is None
    if own_client:
        client = httpx.AsyncClient(timeout=settings.notify_timeout_seconds)

    try:
        if channel == "telegram":
            await send_telegram_message(
                client, settings.telegram_bot_token, settings.telegram_chat_id, message
            )
        else:
            await send_twilio_whatsapp(
                client,
                settings.twilio_account_sid,
                settings.twilio_auth_token,
                settings.twilio_whatsapp_number,
                settings.whatsapp_number,
                message,
            )
    finally:
        if own_client:
            await client.aclose()

    return channel


async def send_telegram_message(
    client: httpx.AsyncClient,
    bot_token: str,
    chat_id: str,
    text: str,
) -> None:
    resp = await client.post(
        f"{TELEGRAM_API_URL}/bot{bot_token}/sendMessage",
        json={"chat_id": chat_id, "text": text, "parse_mode": "HTML"},
    )
    if resp.status_code != 200:
        raise ChatNotifyError(f"Telegram API error: {_error_text(resp, 'description')}")
    logger.info("Telegram notification sent")


async def send_twilio_whatsapp(
    client: httpx.AsyncClient,
    account_sid: str,
    auth_token: str,
    from_number: str,
    to_number: str,
    text: str,
) -> None:
    resp = await client.post(
        f"{TWILIO_API_URL}/Accounts/{account_sid}/Messages.json",
        auth=(account_sid, auth_token),
        data={
            "From": f"whatsapp:{from_number}",
            "To": f"whatsapp:{to_number}",
            "Body": text,
        },
    )
    if resp.status_code not in (200, 201):
        raise ChatNotifyError(f"Twilio API error: {_error_text(resp, 'message')}")
    logger.info("WhatsApp notification sent via Twilio")


def _error_text(resp: httpx.Response, key: str) -> str:
    try:
        return resp.json().get(key) or resp.reason_phrase
    except (ValueError, AttributeError):
        return resp.reason_phrase
