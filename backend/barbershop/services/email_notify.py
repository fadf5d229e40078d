"""
Send new-booking notifications to the shop owner by email via SMTP.
Set SMTP_USER and SMTP_PASS in .env (for Gmail use an App Password).
The owner's address is SMTP_USER; replies go straight to the customer.
"""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from ..config import settings
from .formatters import format_email_bodies

logger = logging.getLogger(__name__)


def send_booking_email(booking: dict) -> bool:
    """
    Email the owner about a new booking.
    Returns True if sent, False if SMTP is not configured.
    SMTP errors propagate; the notification dispatcher absorbs them.
    """
    user = (settings.smtp_user or "").strip()
    password = (settings.smtp_pass or "").strip()
    if not user or not password:
        logger.warning("SMTP not configured. Booking saved but no email sent.")
        return False

    from_addr = (settings.smtp_from or "").strip() or user
    text, html = format_email_bodies(booking)

    msg = MIMEMultipart("alternative")
    msg["Subject"] = f"New Booking: {booking['name']} on {booking['date']}"
    msg["From"] = from_addr
    msg["To"] = user
    msg["Reply-To"] = booking["email"]
    msg.attach(MIMEText(text, "plain"))
    msg.attach(MIMEText(html, "html"))

    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.notify_timeout_seconds) as server:
        server.starttls()
        server.login(user, password)
        server.sendmail(from_addr, [user], msg.as_string())

    logger.info(f"Booking email sent for {booking['date']} {booking['time']}")
    return True
