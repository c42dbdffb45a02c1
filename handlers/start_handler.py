"""
handlers/start_handler.py
--------------------------
Handles /start and /help commands.
"""

from telegram import Update
from telegram.ext import ContextTypes

from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """
🤖 *Expense Tracker*
Keep track of your recurring expenses 💵

*➕ Add an expense:*
`/add name | account | amount | frequency | last payment`
• `/add Netflix | Visa | 15.99 | monthly | 2024-05-01`
• `/add Groceries | Debit | 80 | weekly | 28/04/2024`
Frequency: weekly, monthly, yearly. The date defaults to today.

*🔧 Commands:*
/list - show the expense table
/sort <column> - sort by a column (repeat to reverse)
/edit <id> <field> <value> - change one field
/delete <id> - delete an expense
/totals - daily, weekly, monthly and yearly cost
/chart\\_pie - distribution of yearly cost
/chart\\_line - accumulated cost over the year
/show\\_dates on|off - show or hide payment dates
/export\\_csv - download the table as CSV
/export\\_excel - download the table as Excel

*Columns:* name, account, last, next, frequency, amount, daily, weekly, monthly, yearly
*Fields:* name, account, amount, frequency, last
"""


@rate_limited
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start - greet the user."""
    user = update.effective_user
    logger.info(f"User {user.id} ({user.first_name}) started the bot.")

    await update.message.reply_text(
        f"Hi {user.first_name}! 👋\n"
        f"I keep track of your recurring expenses and what they cost per day, week, month and year.\n\n"
        f"Type /help to see every command."
    )


@rate_limited
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode="Markdown")
