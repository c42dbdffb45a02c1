"""
main.py
-------
Entry point for the expense tracker Telegram bot.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Configure and start the Telegram bot with all handlers.
"""

from telegram import BotCommand
from telegram.ext import Application, CommandHandler

from config import TELEGRAM_BOT_TOKEN
from db.connection import init_pool, close_pool
from db.init_db import create_tables
from handlers.start_handler import start_command, help_command
from handlers.entry_handler import (
    add_command,
    list_command,
    sort_command,
    edit_command,
    delete_command,
    totals_command,
    show_dates_command,
)
from handlers.chart_handler import chart_pie_command, chart_line_command
from handlers.export_handler import export_csv_command, export_excel_command
from utils.logger import get_logger

logger = get_logger(__name__)

COMMANDS = [
    ("start", start_command, "🚀 Start the bot"),
    ("help", help_command, "📖 Show help"),
    ("add", add_command, "➕ Add an expense"),
    ("list", list_command, "📋 Show the expense table"),
    ("sort", sort_command, "↕️ Sort the table"),
    ("edit", edit_command, "✏️ Edit an expense"),
    ("delete", delete_command, "🗑️ Delete an expense"),
    ("totals", totals_command, "💰 Total cost per period"),
    ("chart_pie", chart_pie_command, "🥧 Cost distribution chart"),
    ("chart_line", chart_line_command, "📈 Accumulated cost chart"),
    ("show_dates", show_dates_command, "📅 Show or hide payment dates"),
    ("export_csv", export_csv_command, "📄 Export CSV"),
    ("export_excel", export_excel_command, "📊 Export Excel"),
]


async def set_bot_commands(application: Application) -> None:
    """Register the bot commands menu in Telegram on startup."""
    await application.bot.set_my_commands(
        [BotCommand(name, description) for name, _, description in COMMANDS]
    )
    logger.info("Bot commands menu registered successfully.")


def build_application(token: str = TELEGRAM_BOT_TOKEN) -> Application:
    """Create the Telegram application with every command handler attached."""
    app = Application.builder().token(token).post_init(set_bot_commands).build()
    for name, callback, _ in COMMANDS:
        app.add_handler(CommandHandler(name, callback))
    return app


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()

    # ── 2. Build the Telegram application ─────────────────
    logger.info("Starting Telegram bot...")
    app = build_application()

    # ── 3. Start polling ──────────────────────────────────
    logger.info("Expense tracker is running! Press Ctrl+C to stop.")
    try:
        app.run_polling(drop_pending_updates=True, allowed_updates=["message"])
    finally:
        # ── 4. Cleanup on shutdown ────────────────────────
        close_pool()
        logger.info("Expense tracker stopped.")


if __name__ == "__main__":
    main()
