"""
Booking price calculation.

A month is a flat 30 days. Any remainder of the elapsed duration, however
small, counts as a further month.
"""

from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal

BILLING_MONTH = timedelta(days=30)
CENT = Decimal("0.01")


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def billable_months(start_date: datetime, end_date: datetime) -> int:
    """
    Number of 30-day months covering ``start_date``..``end_date``.

    Raises:
        ValueError: if end_date is not after start_date
    """
    duration = as_utc(end_date) - as_utc(start_date)
    if duration <= timedelta(0):
        raise ValueError("end_date must be after start_date")
    months, remainder = divmod(duration, BILLING_MONTH)
    if remainder:
        months += 1
    return months


def calculate_total_price(price_per_month: Decimal, start_date: datetime, end_date: datetime) -> Decimal:
    """
    ``price_per_month * billable_months(start_date, end_date)``, to the cent.

    Example:
        >>> calculate_total_price(Decimal("300000"), datetime(2024, 1, 1), datetime(2024, 2, 1))
        Decimal('600000.00')
    """
    months = billable_months(start_date, end_date)
    return (Decimal(price_per_month) * months).quantize(CENT, rounding=ROUND_HALF_UP)
