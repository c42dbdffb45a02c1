"""
services/tracker_service.py
---------------------------
Business logic behind the bot commands: load the user's store, apply the
operation, save, and build the reply text.
"""

from typing import Optional

from models.entry import Entry
from models.errors import TrackerError
from models.sorting import ASC, SortState
from repositories.entry_repo import EntryRepository
from services.aggregator import totals
from services.expense_store import ExpenseStore
from utils.formatting import format_date, format_money
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMN_LABELS = {
    "name": "name",
    "account": "account",
    "last_payment": "last payment",
    "next_payment": "next payment",
    "frequency": "frequency",
    "amount": "amount",
    "daily": "daily cost",
    "weekly": "weekly cost",
    "monthly": "monthly cost",
    "yearly": "yearly cost",
}


class TrackerService:
    """
    Handles every entry operation for a single user at a time.

    Workflow:
        1. Load the user's ExpenseStore from the repository.
        2. Apply the change (validation happens in the store).
        3. Persist the store.
        4. Return a user-friendly response.
    """

    def __init__(self, repo: Optional[EntryRepository] = None):
        self.repo = repo or EntryRepository()

    def load_store(self, user_id: int) -> ExpenseStore:
        return self.repo.load_store(user_id)

    def add_entry(self, user_id: int, name: str, account: str, amount, frequency, last_payment) -> dict:
        """
        Create an entry from the /add fields.

        Returns:
            Dict with 'success' and 'message' keys.
        """
        store = self.repo.load_store(user_id)
        try:
            entry = store.add(name, account, amount, frequency, last_payment)
        except (TrackerError, ValueError) as e:
            logger.warning(f"Rejected new entry for user {user_id}: {e}")
            return {"success": False, "message": f"⚠️ {e}"}

        self.repo.save_entries(user_id, store.entries, store.unreadable)
        msg = (
            f"✅ Added expense #{entry.id}:\n"
            f"  📌 {entry.name} ({entry.account or '-'})\n"
            f"  💵 {format_money(entry.amount)} {entry.frequency.value}\n"
            f"  📅 Next payment: {format_date(entry.next_payment)}\n"
            f"  📆 Monthly cost: {format_money(entry.costs.monthly)}"
        )
        return {"success": True, "message": msg}

    def edit_entry(self, user_id: int, entry_id: int, field: str, value) -> dict:
        """Change one field of an entry and report the new state."""
        store = self.repo.load_store(user_id)
        try:
            entry = store.edit(entry_id, field, value)
        except (TrackerError, ValueError) as e:
            logger.warning(f"Rejected edit of #{entry_id} for user {user_id}: {e}")
            return {"success": False, "message": f"⚠️ {e}"}

        self.repo.save_entries(user_id, store.entries, store.unreadable)
        return {"success": True, "message": "✏️ Updated:\n" + self._format_row(entry, store.show_dates)}

    def delete_entry(self, user_id: int, entry_id: int) -> str:
        store = self.repo.load_store(user_id)
        try:
            entry = store.delete(entry_id)
        except TrackerError as e:
            return f"⚠️ {e}."
        self.repo.save_entries(user_id, store.entries, store.unreadable)
        return f"🗑️ Deleted expense #{entry_id} ({entry.name})."

    def list_entries(self, user_id: int, sort_state: SortState) -> str:
        """Render the expense table in the given order."""
        store = self.repo.load_store(user_id)
        notice = ""
        if store.unreadable:
            notice = f"\n\n⚠️ {len(store.unreadable)} stored expense(s) could not be read and are not shown."
        if not len(store):
            return "📭 No expenses yet. Add one with /add." + notice

        arrow = "↑" if sort_state.direction == ASC else "↓"
        lines = [f"📋 Expenses, sorted by {_COLUMN_LABELS.get(sort_state.key, sort_state.key)} {arrow}\n"]
        for entry in store.sorted(sort_state):
            lines.append(self._format_row(entry, store.show_dates))
        lines.append("")
        lines.append(self._format_totals(totals(store.entries)))
        return "\n".join(lines) + notice

    def get_totals(self, user_id: int) -> str:
        store = self.repo.load_store(user_id)
        return self._format_totals(totals(store.entries))

    def set_show_dates(self, user_id: int, show: bool, sort_state: SortState) -> tuple[str, SortState]:
        """
        Persist the show-dates preference.

        Returns:
            The reply and the sort state to keep using.
        """
        store = self.repo.load_store(user_id)
        new_state = store.set_show_dates(show, sort_state)
        self.repo.save_show_dates(user_id, store.show_dates)
        logger.info(f"User {user_id} set show dates to {show}")
        msg = "📅 Payment dates are now shown." if show else "🙈 Payment dates are now hidden."
        if new_state != sort_state:
            msg += "\nSorting reset to name ↑."
        return msg, new_state

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _format_row(entry: Entry, show_dates: bool) -> str:
        c = entry.costs
        row = (
            f"#{entry.id} {entry.name} · {entry.account or '-'}\n"
            f"   {format_money(entry.amount)} {entry.frequency.value}"
        )
        if show_dates:
            row += (
                f" · last {format_date(entry.last_payment)}"
                f" · next {format_date(entry.next_payment)}"
            )
        row += (
            f"\n   day {format_money(c.daily)} · week {format_money(c.weekly)}"
            f" · month {format_money(c.monthly)} · year {format_money(c.yearly)}"
        )
        return row

    @staticmethod
    def _format_totals(total) -> str:
        return (
            "💰 Total cost:\n"
            f"  Daily:   {format_money(total.daily)}\n"
            f"  Weekly:  {format_money(total.weekly)}\n"
            f"  Monthly: {format_money(total.monthly)}\n"
            f"  Yearly:  {format_money(total.yearly)}"
        )
