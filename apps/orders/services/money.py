"""
Money helpers.

Every amount in the ledger is a ``Decimal`` with two decimal places. After
each arithmetic step the value is rounded half-up (away from zero) to the
nearest cent, so totals computed here match the values persisted on order
lines exactly.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.utils import timezone

CENT = Decimal('0.01')
MINOR_UNITS_PER_UNIT = 100
CURRENCY_SYMBOL = '₫'


def round_money(value) -> Decimal:
    """
    Round a monetary value to 2 decimal places, half-up.

    Floats are converted through ``str`` so ``0.1`` becomes ``Decimal('0.1')``
    instead of its binary expansion.

    Example:
        >>> round_money(Decimal('10000') / 3)
        Decimal('3333.33')
        >>> round_money('1.005')
        Decimal('1.01')
    """
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(amount) -> int:
    """Convert a ledger amount to the gateway's integer minor units (x100)."""
    return int(round_money(amount) * MINOR_UNITS_PER_UNIT)


def from_minor_units(value) -> Decimal:
    """
    Convert a gateway minor-unit amount back to a ledger amount.

    Raises:
        ValueError: If the value is missing or not numeric.
    """
    if value is None or str(value).strip() == '':
        raise ValueError('Amount is missing')
    try:
        minor = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Amount '{value}' is not a number")
    if not minor.is_finite():
        raise ValueError(f"Amount '{value}' is not a number")
    return round_money(minor / MINOR_UNITS_PER_UNIT)


def format_currency(amount) -> str:
    """
    Format an amount for display in the local currency.

    Whole-unit granularity with ``.`` as thousands separator, e.g.
    ``Decimal('130000.00')`` -> ``'130.000 ₫'``.
    """
    whole = round_money(amount).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    sign = '-' if whole < 0 else ''
    grouped = f"{abs(int(whole)):,}".replace(',', '.')
    return f"{sign}{grouped} {CURRENCY_SYMBOL}"


def format_date(value) -> str:
    """Format a date or datetime as ``dd/mm/yyyy`` (datetimes in local time)."""
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        value = value.date()
    if not isinstance(value, date):
        raise TypeError(f"Expected date or datetime, got {type(value).__name__}")
    return value.strftime('%d/%m/%Y')
