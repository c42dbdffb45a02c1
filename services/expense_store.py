"""
services/expense_store.py
-------------------------
In-memory owner of one user's entries and display preference.
Every create/edit/delete goes through here; pure computations
(cost model, aggregator) only ever receive the entries.
"""

from typing import Iterable, Optional

from models.cost import Frequency
from models.entry import Entry
from models.errors import EntryNotFound
from models.sorting import DATE_COLUMNS, SortState
from services.aggregator import sort_entries
from services.cost_model import parse_date, validate_amount
from utils.logger import get_logger

logger = get_logger(__name__)

EDITABLE_FIELDS = ("name", "account", "amount", "frequency", "last_payment")


class ExpenseStore:
    """
    A user's entry collection plus the show-dates flag.

    Args:
        entries: Previously persisted entries, in insertion order.
        show_dates: Whether the table shows the payment date columns.
        unreadable: Stored items that could not be decoded. They are kept
            as-is so saving the store does not lose them.
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None, show_dates: bool = True,
                 unreadable: Optional[Iterable] = None):
        self._entries: list[Entry] = list(entries or [])
        self.show_dates = show_dates
        self.unreadable: list = list(unreadable or [])

    @property
    def entries(self) -> list[Entry]:
        """A copy of the entries in insertion order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _next_id(self) -> int:
        # ids of unreadable items stay taken
        taken = [e.id or 0 for e in self._entries] + [_raw_id(item) for item in self.unreadable]
        return max(taken, default=0) + 1

    # ── CREATE ────────────────────────────────────────────

    def add(self, name: str, account: str, amount, frequency, last_payment) -> Entry:
        """
        Validate the fields and append a new entry with a fresh identifier.

        Raises:
            InvalidAmount: Negative or non-finite amount.
            InvalidDate: Unparseable last payment date.
            ValueError: Unknown frequency or empty name.
        """
        entry = Entry(
            name=_clean_name(name),
            account=(account or "").strip(),
            amount=validate_amount(amount),
            frequency=Frequency.parse(frequency),
            last_payment=parse_date(last_payment),
            id=self._next_id(),
        )
        self._entries.append(entry)
        logger.info(f"Added entry '{entry.name}' #{entry.id}")
        return entry

    # ── READ ──────────────────────────────────────────────

    def get(self, entry_id: int) -> Entry:
        """Look up an entry by identifier, raising EntryNotFound if absent."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        raise EntryNotFound(entry_id)

    def sorted(self, state: SortState) -> list[Entry]:
        """Entries in table order for the given sort state."""
        return sort_entries(self._entries, state)

    # ── UPDATE ────────────────────────────────────────────

    def edit(self, entry_id: int, field: str, value) -> Entry:
        """
        Change one field of an entry in place.

        The next payment date follows automatically when last_payment or
        frequency changes. The entry is left untouched if the value is rejected.

        Raises:
            EntryNotFound: Unknown identifier.
            ValueError: Unknown field, empty name, or a rejected value
                (InvalidAmount and InvalidDate are ValueErrors too).
        """
        entry = self.get(entry_id)
        if field == "name":
            entry.name = _clean_name(value)
        elif field == "account":
            entry.account = str(value).strip()
        elif field == "amount":
            entry.amount = validate_amount(value)
        elif field == "frequency":
            entry.frequency = Frequency.parse(value)
        elif field == "last_payment":
            entry.last_payment = parse_date(value)
        else:
            raise ValueError(f"Field {field!r} cannot be edited (choose from: {', '.join(EDITABLE_FIELDS)})")
        logger.info(f"Edited {field} of entry #{entry_id}")
        return entry

    def set_show_dates(self, show: bool, sort_state: SortState) -> SortState:
        """
        Toggle the date columns. Returns the sort state to use afterwards:
        hiding the dates while sorted by a date column falls back to name/asc.
        """
        self.show_dates = show
        if not show and sort_state.key in DATE_COLUMNS:
            return SortState()
        return sort_state

    # ── DELETE ────────────────────────────────────────────

    def delete(self, entry_id: int) -> Entry:
        """Remove an entry, raising EntryNotFound if absent."""
        entry = self.get(entry_id)
        self._entries.remove(entry)
        logger.info(f"Deleted entry '{entry.name}' #{entry_id}")
        return entry


def _raw_id(item) -> int:
    try:
        return int(item["id"])
    except (KeyError, TypeError, ValueError):
        return 0


def _clean_name(value) -> str:
    name = str(value or "").strip()
    if not name:
        raise ValueError("Name must not be empty")
    return name
