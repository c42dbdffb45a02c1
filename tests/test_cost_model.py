"""Tests for the cost model."""

import math
from datetime import date, datetime

import pytest

from models.cost import CostBreakdown, Frequency
from models.errors import InvalidAmount, InvalidDate
from services.cost_model import annualize, costs, next_payment, parse_date, validate_amount


class TestAnnualize:
    """Tests for annualize() and costs()."""

    @pytest.mark.parametrize("frequency,factor", [
        (Frequency.WEEKLY, 52),
        (Frequency.MONTHLY, 12),
        (Frequency.YEARLY, 1),
    ])
    def test_yearly_matches_annualized_amount(self, frequency, factor):
        """The yearly cost is the amount times the periods per year."""
        assert annualize(37.5, frequency) == 37.5 * factor
        assert costs(37.5, frequency).yearly == 37.5 * factor

    @pytest.mark.parametrize("frequency", list(Frequency))
    def test_zero_amount_is_all_zero(self, frequency):
        """A zero amount costs nothing in every period."""
        assert costs(0, frequency) == CostBreakdown.zero()

    def test_periods_derive_from_yearly(self):
        """Daily, weekly and monthly are plain divisions of the yearly figure."""
        result = costs(100, Frequency.MONTHLY)

        assert result.yearly == 1200
        assert result.monthly == 1200 / 12
        assert result.weekly == 1200 / 52
        assert result.daily == 1200 / 365

    def test_no_rounding(self):
        """Costs keep full float precision."""
        result = costs(10, Frequency.YEARLY)
        assert result.daily == 10 / 365
        assert round(result.daily, 2) != result.daily

    def test_accepts_frequency_strings(self):
        """Stored string values work as frequencies."""
        assert costs(5, "weekly").yearly == 260

    def test_unknown_frequency(self):
        """Daily is not a supported frequency."""
        with pytest.raises(ValueError):
            annualize(5, "daily")


class TestNextPayment:
    """Tests for next_payment() and its clamp-to-month-end policy."""

    def test_weekly_adds_seven_days(self):
        assert next_payment(date(2024, 5, 1), Frequency.WEEKLY) == date(2024, 5, 8)

    def test_weekly_crosses_year(self):
        assert next_payment(date(2024, 12, 28), Frequency.WEEKLY) == date(2025, 1, 4)

    @pytest.mark.parametrize("last,expected", [
        (date(2024, 1, 31), date(2024, 2, 29)),   # 31 -> leap February (29)
        (date(2023, 1, 31), date(2023, 2, 28)),   # 31 -> February (28)
        (date(2024, 3, 31), date(2024, 4, 30)),   # 31 -> 30
        (date(2024, 4, 30), date(2024, 5, 30)),   # 30 -> 31, no change
        (date(2024, 2, 29), date(2024, 3, 29)),   # 29 -> 31
        (date(2023, 2, 28), date(2023, 3, 28)),   # 28 -> 31
        (date(2024, 8, 31), date(2024, 9, 30)),
        (date(2024, 12, 31), date(2025, 1, 31)),  # year rollover
        (date(2024, 5, 15), date(2024, 6, 15)),
    ])
    def test_monthly_clamps_to_month_end(self, last, expected):
        """Adding a month never skips into the following month."""
        assert next_payment(last, Frequency.MONTHLY) == expected

    def test_yearly_from_leap_day(self):
        """Feb 29 + 1 year is Feb 28 of the next year."""
        assert next_payment(date(2024, 2, 29), Frequency.YEARLY) == date(2025, 2, 28)

    def test_yearly_regular(self):
        assert next_payment(date(2023, 3, 1), Frequency.YEARLY) == date(2024, 3, 1)

    def test_accepts_iso_string(self):
        assert next_payment("2024-01-31", "monthly") == date(2024, 2, 29)

    def test_invalid_date_raises(self):
        """Unparseable dates raise InvalidDate instead of producing garbage."""
        with pytest.raises(InvalidDate):
            next_payment("not a date", Frequency.MONTHLY)


class TestParseDate:
    """Tests for parse_date()."""

    def test_iso(self):
        assert parse_date("2024-05-01") == date(2024, 5, 1)

    def test_display_format(self):
        assert parse_date("31/01/2024") == date(2024, 1, 31)

    def test_strips_whitespace(self):
        assert parse_date("  2024-05-01 ") == date(2024, 5, 1)

    def test_date_passthrough(self):
        assert parse_date(date(2024, 5, 1)) == date(2024, 5, 1)

    def test_datetime_truncated(self):
        assert parse_date(datetime(2024, 5, 1, 13, 45)) == date(2024, 5, 1)

    @pytest.mark.parametrize("value", ["", "2023-02-29", "2024-13-01", "32/01/2024", "yesterday", None, 20240501])
    def test_rejects(self, value):
        with pytest.raises(InvalidDate) as exc:
            parse_date(value)
        assert exc.value.value == value


class TestValidateAmount:
    """Tests for validate_amount()."""

    @pytest.mark.parametrize("value,expected", [(0, 0.0), (15, 15.0), ("15.5", 15.5), (" 7 ", 7.0)])
    def test_accepts(self, value, expected):
        assert validate_amount(value) == expected

    @pytest.mark.parametrize("value", [-1, "-0.01", math.nan, math.inf, "inf", "abc", None, True])
    def test_rejects(self, value):
        with pytest.raises(InvalidAmount):
            validate_amount(value)

    def test_errors_are_value_errors(self):
        """Callers can catch the domain errors as ValueError."""
        with pytest.raises(ValueError):
            validate_amount(-5)
