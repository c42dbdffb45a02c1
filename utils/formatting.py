"""
utils/formatting.py
-------------------
Display helpers shared by the services. Rounding happens here and
nowhere else.
"""

from datetime import date

from config import CURRENCY_SYMBOL


def format_date(d: date) -> str:
    """Format a date as DD/MM/YYYY."""
    return d.strftime("%d/%m/%Y")


def format_money(value: float) -> str:
    """Format an amount with the configured currency symbol and two decimals."""
    return f"{CURRENCY_SYMBOL}{value:,.2f}"
