"""
services/cost_model.py
----------------------
Pure functions that turn an (amount, frequency) pair into per-period costs
and compute next payment dates.

Month and year arithmetic use ``dateutil.relativedelta``, which clamps to
the last day of the target month: Jan 31 + 1 month is Feb 28 (or Feb 29 in
a leap year), and Feb 29 + 1 year is Feb 28.
"""

import math
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from models.cost import CostBreakdown, Frequency
from models.errors import InvalidAmount, InvalidDate

_PERIODS_PER_YEAR = {
    Frequency.WEEKLY: 52,
    Frequency.MONTHLY: 12,
    Frequency.YEARLY: 1,
}

_STEP = {
    Frequency.WEEKLY: timedelta(days=7),
    Frequency.MONTHLY: relativedelta(months=1),
    Frequency.YEARLY: relativedelta(years=1),
}

# ISO is what users type; DD/MM/YYYY is what the table displays.
_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y")


def annualize(amount: float, frequency: Frequency) -> float:
    """Yearly equivalent of an amount paid once per ``frequency``."""
    return amount * _PERIODS_PER_YEAR[Frequency.parse(frequency)]


def costs(amount: float, frequency: Frequency) -> CostBreakdown:
    """
    Express a recurring amount as daily, weekly, monthly and yearly cost.

    The yearly figure is the basis for the other three. No rounding is
    applied here.
    """
    yearly = annualize(amount, frequency)
    return CostBreakdown(
        daily=yearly / 365,
        weekly=yearly / 52,
        monthly=yearly / 12,
        yearly=yearly,
    )


def next_payment(last_payment, frequency: Frequency) -> date:
    """
    Date of the payment following ``last_payment``.

    Args:
        last_payment: A ``date`` or a string accepted by :func:`parse_date`.
        frequency: Payment frequency.

    Raises:
        InvalidDate: If ``last_payment`` cannot be parsed.
    """
    return parse_date(last_payment) + _STEP[Frequency.parse(frequency)]


def parse_date(value) -> date:
    """
    Parse a payment date.

    Accepts ``date`` objects (datetimes are truncated), ISO ``YYYY-MM-DD``
    and display ``DD/MM/YYYY`` strings.

    Raises:
        InvalidDate: For anything else, including impossible dates like 2023-02-29.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    raise InvalidDate(value)


def validate_amount(value) -> float:
    """
    Coerce an amount to float and check it is finite and non-negative.

    Raises:
        InvalidAmount: If the value is not a number, negative, NaN or infinite.
    """
    if isinstance(value, bool):
        raise InvalidAmount(value)
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise InvalidAmount(value) from None
    if not math.isfinite(amount) or amount < 0:
        raise InvalidAmount(value)
    return amount
