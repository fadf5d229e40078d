"""
Message formatting for booking notifications.

HTML parse_mode for Telegram; plain text and HTML bodies for email.
"""

from datetime import date
from html import escape


def format_time_12h(time_str: str) -> str:
    """'14:30' -> '2:30 PM', '00:15' -> '12:15 AM'."""
    hour, minute = (int(part) for part in time_str.split(":")[:2])
    period = "PM" if hour >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {period}"


def format_date_long(date_str: str) -> str:
    """'2024-01-15' -> 'Monday, January 15, 2024'. Unparseable input is returned as is."""
    try:
        d = date.fromisoformat(date_str)
    except ValueError:
        return date_str
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def format_chat_message(booking: dict) -> str:
    """Telegram / WhatsApp text for a new booking."""
    return (
        "🔔 New Booking Alert\n\n"
        f"📅 Date: {format_date_long(booking['date'])}\n"
        f"⏰ Time: {format_time_12h(booking['time'])}\n"
        f"👤 Name: {escape(booking['name'])}\n"
        f"📧 Email: {escape(booking['email'])}\n\n"
        "Please confirm with the customer."
    )


def format_email_bodies(booking: dict) -> tuple[str, str]:
    """(plain text, html) bodies for the owner's notification email."""
    name = booking["name"]
    email = booking["email"]
    date_str = booking["date"]
    time12 = format_time_12h(booking["time"])

    text = (
        "New booking received:\n\n"
        f"Customer Name: {name}\n"
        f"Customer Email: {email}\n"
        f"Date: {date_str}\n"
        f"Time: {time12}\n\n"
        "Reply to this email to contact the customer directly."
    )
    html = (
        "<h2>New Booking Received</h2>"
        f"<p><strong>Customer Name:</strong> {escape(name)}</p>"
        f"<p><strong>Customer Email:</strong> {escape(email)}</p>"
        f"<p><strong>Date:</strong> {escape(date_str)}</p>"
        f"<p><strong>Time:</strong> {time12}</p>"
        "<p><em>Reply to this email to contact the customer directly.</em></p>"
    )
    return text, html
