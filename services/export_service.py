"""
services/export_service.py
---------------------------
Exports the expense table, including the derived cost columns,
as CSV or Excel.
"""

import io
from typing import Optional

import pandas as pd

from models.sorting import SortState
from repositories.entry_repo import EntryRepository
from services.aggregator import monthly_series, sort_entries, totals
from utils.logger import get_logger

logger = get_logger(__name__)

COLUMNS = [
    "ID", "Name", "Account", "Last Payment", "Next Payment", "Frequency",
    "Amount", "Daily Cost", "Weekly Cost", "Monthly Cost", "Yearly Cost",
]


class ExportService:
    """Builds downloadable reports of a user's expenses."""

    def __init__(self, repo: Optional[EntryRepository] = None):
        self.repo = repo or EntryRepository()

    def build_table(self, user_id: int, sort_state: Optional[SortState] = None) -> pd.DataFrame:
        """
        One row per entry, in table order, with costs rounded to cents.
        """
        entries = sort_entries(self.repo.load_entries(user_id), sort_state or SortState())
        rows = []
        for e in entries:
            c = e.costs
            rows.append({
                "ID": e.id,
                "Name": e.name,
                "Account": e.account,
                "Last Payment": e.last_payment.isoformat(),
                "Next Payment": e.next_payment.isoformat(),
                "Frequency": e.frequency.value,
                "Amount": round(e.amount, 2),
                "Daily Cost": round(c.daily, 2),
                "Weekly Cost": round(c.weekly, 2),
                "Monthly Cost": round(c.monthly, 2),
                "Yearly Cost": round(c.yearly, 2),
            })
        return pd.DataFrame(rows, columns=COLUMNS)

    def export_csv(self, user_id: int, sort_state: Optional[SortState] = None) -> io.BytesIO:
        """
        Export the expense table as CSV.

        Returns:
            A BytesIO buffer containing the CSV data.
        """
        df = self.build_table(user_id, sort_state)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} expenses as CSV for user {user_id}")
        return buffer

    def export_excel(self, user_id: int, sort_state: Optional[SortState] = None) -> io.BytesIO:
        """
        Export the expense table as Excel, with a totals sheet and the
        accumulated monthly series on a third sheet.

        Returns:
            A BytesIO buffer containing the .xlsx data.
        """
        df = self.build_table(user_id, sort_state)
        entries = self.repo.load_entries(user_id)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Expenses", index=False)

            total = totals(entries)
            summary = pd.DataFrame({
                "Period": ["Daily", "Weekly", "Monthly", "Yearly"],
                "Total": [round(v, 2) for v in (total.daily, total.weekly, total.monthly, total.yearly)],
            })
            summary.to_excel(writer, sheet_name="Totals", index=False)

            if entries:
                accumulated = pd.DataFrame([
                    {
                        "Month": p.month,
                        **{f"Expense: {name}": value for name, value in p.by_name.items()},
                        "Total": p.total,
                    }
                    for p in monthly_series(entries)
                ]).round(2)
                accumulated.to_excel(writer, sheet_name="Accumulated", index=False)

        buffer.seek(0)
        logger.info(f"Exported {len(df)} expenses as Excel for user {user_id}")
        return buffer
