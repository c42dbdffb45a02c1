"""
models/entry.py
---------------
Domain model for a recurring expense entry.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from models.cost import CostBreakdown, Frequency
from services.cost_model import costs, next_payment


@dataclass
class Entry:
    """
    One recurring expense (subscription, rent, insurance, ...).

    Attributes:
        name: Friendly name of the expense (e.g. 'Netflix', 'Rent').
        account: Account or card the expense is paid from.
        amount: Amount paid each period.
        frequency: How often the amount is paid.
        last_payment: Date of the most recent payment.
        id: Identifier within the user's collection (None until stored).

    The next payment date is always derived from ``last_payment`` and
    ``frequency``; see :attr:`next_payment`.
    """
    name: str
    account: str
    amount: float
    frequency: Frequency
    last_payment: date
    id: Optional[int] = None

    @property
    def next_payment(self) -> date:
        return next_payment(self.last_payment, self.frequency)

    @property
    def costs(self) -> CostBreakdown:
        return costs(self.amount, self.frequency)
