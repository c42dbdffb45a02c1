"""Tests for ExportService."""

from datetime import date

import pandas as pd
import pytest

from models.cost import Frequency
from models.sorting import DESC, SortState
from services.export_service import COLUMNS, ExportService


@pytest.fixture
def service(repo, make_entry):
    repo.save_entries(1, [
        make_entry(id=1, name="Netflix", amount=15.99, last_payment=date(2024, 1, 31)),
        make_entry(id=2, name="Groceries", account="Debit", amount=80, frequency=Frequency.WEEKLY),
    ])
    return ExportService(repo=repo)


class TestExportService:
    """Tests for the table, CSV and Excel exports."""

    def test_table_columns_and_values(self, service):
        df = service.build_table(1)

        assert list(df.columns) == COLUMNS
        assert list(df["Name"]) == ["Groceries", "Netflix"]
        netflix = df[df["ID"] == 1].iloc[0]
        assert netflix["Next Payment"] == "2024-02-29"
        assert netflix["Yearly Cost"] == 191.88
        assert netflix["Daily Cost"] == 0.53

    def test_table_follows_sort_state(self, service):
        df = service.build_table(1, SortState("yearly", DESC))
        assert list(df["ID"]) == [2, 1]

    def test_empty_table(self, repo):
        df = ExportService(repo=repo).build_table(99)
        assert df.empty
        assert list(df.columns) == COLUMNS

    def test_csv(self, service):
        buf = service.export_csv(1)
        df = pd.read_csv(buf, encoding="utf-8-sig")

        assert list(df.columns) == COLUMNS
        assert len(df) == 2

    def test_excel_sheets(self, service):
        buf = service.export_excel(1)
        sheets = pd.read_excel(buf, sheet_name=None)

        assert set(sheets) == {"Expenses", "Totals", "Accumulated"}
        totals = sheets["Totals"].set_index("Period")["Total"]
        assert totals["Yearly"] == pytest.approx(4351.88)
        accumulated = sheets["Accumulated"]
        assert list(accumulated["Month"])[0] == "Jan"
        assert accumulated["Total"].iloc[-1] == pytest.approx(4351.88)

    def test_excel_entry_named_like_a_column(self, repo, make_entry):
        repo.save_entries(1, [
            make_entry(id=1, name="Total", amount=10),
            make_entry(id=2, name="Month", amount=20),
        ])

        buf = ExportService(repo=repo).export_excel(1)
        accumulated = pd.read_excel(buf, sheet_name="Accumulated")

        assert list(accumulated.columns) == ["Month", "Expense: Total", "Expense: Month", "Total"]
        assert list(accumulated["Month"])[-1] == "Dec"
        assert accumulated["Expense: Total"].iloc[-1] == pytest.approx(120)
        assert accumulated["Total"].iloc[-1] == pytest.approx(360)

    def test_excel_without_entries(self, repo):
        sheets = pd.read_excel(ExportService(repo=repo).export_excel(99), sheet_name=None)
        assert set(sheets) == {"Expenses", "Totals"}
