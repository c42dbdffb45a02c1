"""
handlers/entry_handler.py
--------------------------
Handles the expense table commands: add, list, sort, edit, delete,
totals and the show-dates setting. Delegates all logic to TrackerService.

The current sort order lives in ``context.user_data`` and is not persisted.
"""

from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from models.sorting import SortState
from security.rate_limiter import rate_limited
from services.aggregator import toggle_sort
from services.tracker_service import TrackerService
from utils.logger import get_logger

logger = get_logger(__name__)
tracker_service = TrackerService()

SORT_KEY = "sort_state"

_SORT_ALIASES = {
    "name": "name",
    "account": "account",
    "last": "last_payment", "last_payment": "last_payment", "lastpayment": "last_payment",
    "next": "next_payment", "next_payment": "next_payment", "nextpayment": "next_payment",
    "frequency": "frequency", "freq": "frequency",
    "amount": "amount",
    "daily": "daily", "day": "daily",
    "weekly": "weekly", "week": "weekly",
    "monthly": "monthly", "month": "monthly",
    "yearly": "yearly", "year": "yearly",
}

_FIELD_ALIASES = {
    "name": "name",
    "account": "account",
    "amount": "amount",
    "frequency": "frequency", "freq": "frequency",
    "last": "last_payment", "last_payment": "last_payment", "lastpayment": "last_payment",
    "date": "last_payment",
}

_ON_OFF = {"on": True, "yes": True, "true": True, "off": False, "no": False, "false": False}


def get_sort_state(context: ContextTypes.DEFAULT_TYPE) -> SortState:
    return context.user_data.get(SORT_KEY, SortState())


def parse_add_args(text: str) -> dict | None:
    """
    Split the /add arguments:
      name | account | amount | frequency [| last payment]
    Example:
      Netflix | Visa | 15.99 | monthly | 2024-05-01

    Values are returned as typed; validation happens in the store.
    Returns None if fewer than four parts are given.
    """
    parts = [p.strip() for p in text.split("|")]
    if len(parts) < 4:
        return None

    last_payment = parts[4] if len(parts) >= 5 and parts[4] else date.today()
    return {
        "name": parts[0],
        "account": parts[1],
        "amount": parts[2].replace(",", "."),
        "frequency": parts[3],
        "last_payment": last_payment,
    }


@rate_limited
async def add_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /add - create a new expense.

    Examples:
        /add Netflix | Visa | 15.99 | monthly | 2024-05-01
        /add Rent | Checking | 800 | monthly
    """
    user = update.effective_user

    parsed = parse_add_args(" ".join(context.args)) if context.args else None
    if parsed is None:
        await update.message.reply_text(
            "📝 *Add an expense*\n\n"
            "`/add name | account | amount | frequency | last payment`\n\n"
            "*Examples:*\n"
            "• `/add Netflix | Visa | 15.99 | monthly | 2024-05-01`\n"
            "• `/add Insurance | Checking | 600 | yearly`\n\n"
            "*Frequency:* weekly, monthly, yearly",
            parse_mode="Markdown",
        )
        return

    result = tracker_service.add_entry(user_id=user.id, **parsed)
    await update.message.reply_text(result["message"])


@rate_limited
async def list_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /list - show the expense table in the current sort order."""
    user = update.effective_user
    msg = tracker_service.list_entries(user.id, get_sort_state(context))
    await update.message.reply_text(msg)


@rate_limited
async def sort_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /sort <column> - sort the table, reversing on a repeated column.
    Usage: /sort monthly
    """
    user = update.effective_user

    key = _SORT_ALIASES.get(context.args[0].lower()) if context.args else None
    if key is None:
        await update.message.reply_text(
            "⚠️ Usage: /sort <column>\n"
            "Columns: name, account, last, next, frequency, amount, daily, weekly, monthly, yearly"
        )
        return

    store = tracker_service.load_store(user.id)
    if not store.show_dates and key in ("last_payment", "next_payment"):
        await update.message.reply_text("⚠️ Payment dates are hidden. Turn them on with /show_dates on.")
        return

    state = toggle_sort(get_sort_state(context), key)
    context.user_data[SORT_KEY] = state
    await update.message.reply_text(tracker_service.list_entries(user.id, state))


@rate_limited
async def edit_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /edit <id> <field> <value> - change one field of an expense.

    Examples:
        /edit 3 amount 17.99
        /edit 3 frequency yearly
        /edit 3 last 2024-06-01
        /edit 3 name Netflix Premium
    """
    user = update.effective_user

    if not context.args or len(context.args) < 3:
        await update.message.reply_text(
            "⚠️ Usage: /edit <id> <field> <value>\n"
            "Fields: name, account, amount, frequency, last\n"
            "Example: /edit 3 amount 17.99"
        )
        return

    try:
        entry_id = int(context.args[0])
    except ValueError:
        await update.message.reply_text("⚠️ The expense id must be a whole number.")
        return

    field = _FIELD_ALIASES.get(context.args[1].lower())
    if field is None:
        await update.message.reply_text("⚠️ Fields: name, account, amount, frequency, last")
        return

    value = " ".join(context.args[2:])
    if field == "amount":
        value = value.replace(",", ".")
    result = tracker_service.edit_entry(user.id, entry_id, field, value)
    await update.message.reply_text(result["message"])


@rate_limited
async def delete_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /delete <id> - delete an expense.
    Usage: /delete 3
    """
    user = update.effective_user

    if not context.args:
        await update.message.reply_text("⚠️ Usage: /delete <id>\nExample: /delete 3")
        return

    try:
        entry_id = int(context.args[0])
    except ValueError:
        await update.message.reply_text("⚠️ The expense id must be a whole number.")
        return

    msg = tracker_service.delete_entry(user.id, entry_id)
    await update.message.reply_text(msg)


@rate_limited
async def totals_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /totals - show the summed daily/weekly/monthly/yearly cost."""
    user = update.effective_user
    await update.message.reply_text(tracker_service.get_totals(user.id))


@rate_limited
async def show_dates_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /show_dates on|off - show or hide the payment date columns.
    Usage: /show_dates off
    """
    user = update.effective_user

    show = _ON_OFF.get(context.args[0].lower()) if context.args else None
    if show is None:
        await update.message.reply_text("⚠️ Usage: /show_dates on|off")
        return

    msg, state = tracker_service.set_show_dates(user.id, show, get_sort_state(context))
    context.user_data[SORT_KEY] = state
    await update.message.reply_text(msg)
