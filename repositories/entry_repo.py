"""
repositories/entry_repo.py
--------------------------
Reads and writes a user's entries and show-dates flag as JSON through
the key-value storage. Items that cannot be decoded are skipped on read and
written back untouched on save, so they are never lost.
"""

import json
from typing import Iterable, Optional

from config import EXPENSES_BACKUP_KEY, EXPENSES_KEY, SHOW_DATES_KEY
from models.cost import Frequency
from models.entry import Entry
from repositories.storage_repo import StorageRepository
from services.cost_model import parse_date, validate_amount
from services.expense_store import ExpenseStore
from utils.formatting import format_date
from utils.logger import get_logger

logger = get_logger(__name__)


class EntryRepository:
    """Persists ExpenseStore contents under the 'expenses' and 'showDates' keys."""

    def __init__(self, storage: Optional[StorageRepository] = None):
        self.storage = storage or StorageRepository()

    # ── READ ──────────────────────────────────────────────

    def _decode(self, user_id: int) -> tuple[list[Entry], list]:
        """
        Decode the stored entry array item by item.

        Returns:
            The readable entries and the raw items that could not be read.
            Both are empty when nothing is stored or the stored text is not
            a JSON array.
        """
        raw = self.storage.get_item(user_id, EXPENSES_KEY)
        if raw is None:
            return [], []
        items = _parse_array(raw)
        if items is None:
            logger.warning(f"Ignoring unreadable '{EXPENSES_KEY}' for user {user_id}")
            return [], []

        entries, unreadable = [], []
        for item in items:
            try:
                entries.append(self._item_to_entry(item))
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping unreadable expense for user {user_id}: {e}")
                unreadable.append(item)
        return entries, unreadable

    def load_entries(self, user_id: int) -> list[Entry]:
        """Readable stored entries; items that fail to decode are skipped."""
        return self._decode(user_id)[0]

    def load_show_dates(self, user_id: int) -> bool:
        """Stored show-dates flag; True when absent or unreadable."""
        raw = self.storage.get_item(user_id, SHOW_DATES_KEY)
        if raw is None:
            return True
        try:
            value = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding unreadable '{SHOW_DATES_KEY}' for user {user_id}: {e}")
            return True
        if not isinstance(value, bool):
            logger.warning(f"Ignoring non-boolean '{SHOW_DATES_KEY}' for user {user_id}: {raw}")
            return True
        return value

    def load_store(self, user_id: int) -> ExpenseStore:
        """Build an ExpenseStore from everything stored for the user."""
        entries, unreadable = self._decode(user_id)
        return ExpenseStore(entries, self.load_show_dates(user_id), unreadable=unreadable)

    # ── WRITE ─────────────────────────────────────────────

    def save_entries(self, user_id: int, entries: list[Entry], unreadable: Iterable = ()) -> None:
        """
        Write the entry array back.

        Items that could not be decoded are written back unchanged after the
        entries. If the stored text is not a JSON array at all, it is copied
        under EXPENSES_BACKUP_KEY before being replaced.
        """
        current = self.storage.get_item(user_id, EXPENSES_KEY)
        if current is not None and _parse_array(current) is None:
            self.storage.set_item(user_id, EXPENSES_BACKUP_KEY, current)
            logger.warning(f"Backed up unreadable '{EXPENSES_KEY}' for user {user_id} to '{EXPENSES_BACKUP_KEY}'")

        payload = json.dumps([self._entry_to_item(e) for e in entries] + list(unreadable))
        self.storage.set_item(user_id, EXPENSES_KEY, payload)

    def save_show_dates(self, user_id: int, show: bool) -> None:
        self.storage.set_item(user_id, SHOW_DATES_KEY, json.dumps(bool(show)))

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _entry_to_item(entry: Entry) -> dict:
        """Convert an Entry to the stored JSON object (nextPayment kept for readers of the old layout)."""
        return {
            "id": entry.id,
            "name": entry.name,
            "account": entry.account,
            "lastPayment": entry.last_payment.isoformat(),
            "frequency": entry.frequency.value,
            "amount": entry.amount,
            "nextPayment": format_date(entry.next_payment),
        }

    @staticmethod
    def _item_to_entry(item: dict) -> Entry:
        """Convert a stored JSON object to an Entry. The stored nextPayment is ignored."""
        return Entry(
            id=int(item["id"]),
            name=str(item["name"]),
            account=str(item.get("account", "")),
            amount=validate_amount(item.get("amount", 0)),
            frequency=Frequency.parse(item["frequency"]),
            last_payment=parse_date(item["lastPayment"]),
        )


def _parse_array(raw: str) -> Optional[list]:
    """The decoded JSON array, or None if ``raw`` is not one."""
    try:
        items = json.loads(raw)
    except ValueError:
        return None
    return items if isinstance(items, list) else None
