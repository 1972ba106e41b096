"""
Display formatting for prices and dates.

Prices are shown in Pakistani Rupees with no decimals ("Rs. 2,499"), dates in
the long or short month form used across the storefront and e-mails.
"""
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional, Union

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

CURRENCY_PREFIX = "Rs."

DateLike = Union[str, date, datetime]


def format_price(price) -> str:
    """
    Format a number as a rupee amount rounded to whole rupees.

    format_price(2499) -> "Rs. 2,499"
    format_price(999.99) -> "Rs. 1,000"
    """
    try:
        amount = Decimal(str(price)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        amount = Decimal("0")
    return f"{CURRENCY_PREFIX} {int(amount):,}"


def _coerce_datetime(value: DateLike) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        parsed = parse_datetime(text)
    except ValueError:
        parsed = None
    if parsed is not None:
        return parsed
    try:
        day = parse_date(text)
    except ValueError:
        day = None
    if day is not None:
        return datetime(day.year, day.month, day.day)
    return None


def format_date(value: DateLike, short: bool = False) -> str:
    """
    Format a date string or object.

    format_date("2024-01-15") -> "January 15, 2024"
    format_date("2024-01-15", short=True) -> "Jan 15, 2024"
    """
    moment = _coerce_datetime(value)
    if moment is None:
        return "Invalid Date"

    month = moment.strftime("%b" if short else "%B")
    return f"{month} {moment.day}, {moment.year}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''} ago"


def format_relative_time(value: DateLike, now: Optional[datetime] = None) -> str:
    """Relative wording such as "just now" or "3 days ago"."""
    moment = _coerce_datetime(value)
    if moment is None:
        return "Invalid Date"

    now = now or timezone.now()
    if timezone.is_aware(now) and timezone.is_naive(moment):
        moment = timezone.make_aware(moment, dt_timezone.utc)
    elif timezone.is_naive(now) and timezone.is_aware(moment):
        now = timezone.make_aware(now, dt_timezone.utc)

    seconds = int((now - moment).total_seconds())
    if seconds < 60:
        return "just now"

    minutes = seconds // 60
    if minutes < 60:
        return _plural(minutes, "minute")

    hours = minutes // 60
    if hours < 24:
        return _plural(hours, "hour")

    days = hours // 24
    if days < 30:
        return _plural(days, "day")

    months = days // 30
    if months < 12:
        return _plural(months, "month")

    return _plural(months // 12, "year")
