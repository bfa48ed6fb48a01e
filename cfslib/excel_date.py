"""
Day-first dates as they arrive from spreadsheet cells.

Cells may hold a real date (openpyxl gives datetime), an Excel serial number
(1900 date system) or text typed as DD/MM/YYYY.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

EXCEL_EPOCH = date(1899, 12, 30)
# 9999-12-31
MAX_EXCEL_SERIAL = 2958465

_RE_DMY = re.compile(r"^(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{4})$")


@dataclass(frozen=True)
class ExcelDate:
    date: date

    @property
    def display(self):
        return self.date.strftime("%d/%m/%Y")

    @property
    def iso(self):
        return self.date.isoformat()


def parse_excel_dmy_date(value):
    """Parse a cell value into an ExcelDate, or None when it is not a valid date."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return ExcelDate(value.date())
    if isinstance(value, date):
        return ExcelDate(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        serial = int(value)
        if serial < 1 or serial > MAX_EXCEL_SERIAL:
            return None
        return ExcelDate(EXCEL_EPOCH + timedelta(days=serial))
    if isinstance(value, str):
        m = _RE_DMY.match(value.strip())
        if not m:
            return None
        day, month, year = (int(g) for g in m.groups())
        try:
            return ExcelDate(date(year, month, day))
        except ValueError:
            return None
    return None
