from datetime import date, datetime

from aquabill.constants import LATE_FEE_TIERS, MONTHS, STATUS_STYLES, billing_period, format_month


class TestMonths:
    def test_all_twelve_months(self):
        assert len(MONTHS) == 12

    def test_january(self):
        assert MONTHS["01"] == "January"


class TestStatusStyles:
    def test_all_statuses(self):
        assert set(STATUS_STYLES) == {"Paid", "Unpaid", "Due Soon", "Overdue"}


class TestLateFeeTiers:
    def test_checked_from_longest(self):
        days = [d for d, _ in LATE_FEE_TIERS]
        assert days == sorted(days, reverse=True)


class TestFormatMonth:
    def test_standard(self):
        assert format_month("2024-03") == "March 2024"

    def test_empty_string(self):
        assert format_month("") == ""

    def test_none(self):
        assert format_month(None) == ""

    def test_no_dash(self):
        assert format_month("202403") == "202403"

    def test_unknown_month(self):
        assert format_month("2024-99") == "99 2024"


class TestBillingPeriod:
    def test_date(self):
        assert billing_period(date(2024, 1, 15)) == "2024-01"

    def test_datetime(self):
        assert billing_period(datetime(2023, 12, 31, 23, 59)) == "2023-12"

    def test_none(self):
        assert billing_period(None) is None
