"""
handlers/chart_handler.py
--------------------------
Handles chart commands.
Delegates to ChartService and sends the images to the user.
"""

from telegram import Update
from telegram.ext import ContextTypes

from security.rate_limiter import rate_limited
from services.chart_service import ChartService
from utils.logger import get_logger

logger = get_logger(__name__)
chart_service = ChartService()


@rate_limited
async def chart_pie_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /chart_pie - send the yearly cost distribution."""
    user = update.effective_user

    buf = chart_service.generate_distribution_pie(user.id)
    if buf:
        await update.message.reply_photo(photo=buf, caption="🥧 Expense distribution (yearly cost)")
    else:
        await update.message.reply_text("📭 Nothing to chart yet. Add an expense with /add.")


@rate_limited
async def chart_line_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /chart_line - send the accumulated cost over the year."""
    user = update.effective_user

    buf = chart_service.generate_accumulation_line(user.id)
    if buf:
        await update.message.reply_photo(photo=buf, caption="📈 Accumulated cost over the year")
    else:
        await update.message.reply_text("📭 Nothing to chart yet. Add an expense with /add.")
