"""Human readable renderings of a delivery date for orders and e-mails."""

from __future__ import annotations

import html
from datetime import date

from .models import weekday_index

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def day_name(day: date) -> str:
    return DAY_NAMES[weekday_index(day)]


def format_short_date(day: date) -> str:
    """June 5, 2024"""
    return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def format_long_date(day: date) -> str:
    """Wednesday, June 5, 2024"""
    return f"{day_name(day)}, {format_short_date(day)}"


def render_admin_line(day: date) -> str:
    return f"<p><strong>Delivery Date:</strong> {html.escape(format_long_date(day))}</p>"


def render_email_block(day: date, plain_text: bool = False) -> str:
    if plain_text:
        return f"\nDelivery Date: {format_long_date(day)}\n"
    return render_admin_line(day)


def render_thankyou_line(day: date) -> str:
    return f"<p><strong>Your selected delivery date:</strong> {html.escape(format_long_date(day))}</p>"
