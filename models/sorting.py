"""
models/sorting.py
-----------------
Sort state of the expense table.
"""

from dataclasses import dataclass

ASC = "asc"
DESC = "desc"

# Column keys accepted by /sort, in table order.
TEXT_COLUMNS = ("name", "account", "frequency")
DATE_COLUMNS = ("last_payment", "next_payment")
COST_COLUMNS = ("daily", "weekly", "monthly", "yearly")
SORT_COLUMNS = ("name", "account", "last_payment", "next_payment",
                "frequency", "amount") + COST_COLUMNS


@dataclass(frozen=True)
class SortState:
    """Which column the table is sorted by, and in which direction."""
    key: str = "name"
    direction: str = ASC

    @property
    def ascending(self) -> bool:
        return self.direction == ASC
