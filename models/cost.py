"""
models/cost.py
--------------
Value types for the cost model: payment frequency, per-period cost
breakdown and the points of the accumulated-cost series.
"""

from dataclasses import dataclass, field
from enum import Enum


class Frequency(str, Enum):
    """How often a recurring expense is paid."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value) -> "Frequency":
        """
        Convert user input or a stored value to a Frequency.

        Raises:
            ValueError: If the value is not one of weekly/monthly/yearly.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown frequency {value!r} (choose from: {choices})") from None


@dataclass(frozen=True)
class CostBreakdown:
    """
    The same recurring cost expressed over four periods.

    Attributes:
        daily: Yearly cost / 365.
        weekly: Yearly cost / 52.
        monthly: Yearly cost / 12.
        yearly: Annualized amount.
    """
    daily: float
    weekly: float
    monthly: float
    yearly: float

    @classmethod
    def zero(cls) -> "CostBreakdown":
        return cls(0.0, 0.0, 0.0, 0.0)

    def __add__(self, other: "CostBreakdown") -> "CostBreakdown":
        if not isinstance(other, CostBreakdown):
            return NotImplemented
        return CostBreakdown(
            daily=self.daily + other.daily,
            weekly=self.weekly + other.weekly,
            monthly=self.monthly + other.monthly,
            yearly=self.yearly + other.yearly,
        )

    def period(self, name: str) -> float:
        """Look up a period by name ('daily', 'weekly', 'monthly', 'yearly')."""
        return getattr(self, name)


@dataclass
class MonthPoint:
    """
    One month of the accumulated-cost series.

    Attributes:
        month: Short month label ('Jan' ... 'Dec').
        by_name: Cumulative spend per entry name up to and including this month.
        total: Cumulative spend across all entries.
    """
    month: str
    by_name: dict[str, float] = field(default_factory=dict)
    total: float = 0.0
