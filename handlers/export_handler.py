"""
handlers/export_handler.py
---------------------------
Handles data export commands (CSV, Excel).
Delegates to ExportService; rows follow the user's current sort order.
"""

from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from handlers.entry_handler import get_sort_state
from security.rate_limiter import rate_limited
from services.export_service import ExportService
from utils.logger import get_logger

logger = get_logger(__name__)
export_service = ExportService()


@rate_limited
async def export_csv_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /export_csv - send the expense table as CSV."""
    user = update.effective_user

    try:
        buffer = export_service.export_csv(user.id, get_sort_state(context))
        await update.message.reply_document(
            document=buffer,
            filename=f"expenses_{date.today().isoformat()}.csv",
            caption="📄 Expenses - CSV",
        )
    except Exception as e:
        logger.error(f"CSV export failed for user {user.id}: {e}")
        await update.message.reply_text("❌ Export failed. Please try again.")


@rate_limited
async def export_excel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /export_excel - send the expense table, totals and monthly series as Excel."""
    user = update.effective_user

    try:
        buffer = export_service.export_excel(user.id, get_sort_state(context))
        await update.message.reply_document(
            document=buffer,
            filename=f"expenses_{date.today().isoformat()}.xlsx",
            caption="📊 Expenses - Excel",
        )
    except Exception as e:
        logger.error(f"Excel export failed for user {user.id}: {e}")
        await update.message.reply_text("❌ Export failed. Please try again.")
