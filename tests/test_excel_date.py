"""
Tests for day-first spreadsheet date parsing.
"""

from datetime import date, datetime

import pytest

from cfslib.excel_date import EXCEL_EPOCH, parse_excel_dmy_date


class TestStrings:

    def test_dd_mm_yyyy(self):
        parsed = parse_excel_dmy_date("04/02/2026")
        assert parsed.date == date(2026, 2, 4)
        assert parsed.display == "04/02/2026"
        assert parsed.iso == "2026-02-04"

    def test_short_day_month_and_separators(self):
        assert parse_excel_dmy_date("4/2/2026").date == date(2026, 2, 4)
        assert parse_excel_dmy_date("04-02-2026").date == date(2026, 2, 4)
        assert parse_excel_dmy_date(" 04.02.2026 ").date == date(2026, 2, 4)

    def test_month_first_is_rejected(self):
        assert parse_excel_dmy_date("10/18/2025") is None

    def test_impossible_day(self):
        assert parse_excel_dmy_date("31/02/2026") is None

    @pytest.mark.parametrize("raw", ["", "2026-02-04", "tomorrow", "04/02/26"])
    def test_other_text(self, raw):
        assert parse_excel_dmy_date(raw) is None


class TestCellValues:

    def test_excel_serial(self):
        serial = (date(2026, 2, 4) - EXCEL_EPOCH).days
        assert parse_excel_dmy_date(serial).date == date(2026, 2, 4)
        assert parse_excel_dmy_date(float(serial)).date == date(2026, 2, 4)

    def test_datetime_and_date(self):
        assert parse_excel_dmy_date(datetime(2026, 2, 4, 13, 30)).date == date(2026, 2, 4)
        assert parse_excel_dmy_date(date(2026, 2, 4)).display == "04/02/2026"

    @pytest.mark.parametrize("value", [None, True, False, 0, -5, 10**8, float("nan"), [1]])
    def test_rejected(self, value):
        assert parse_excel_dmy_date(value) is None
