"""
Pytest Configuration and Shared Fixtures
"""
import io
import os
import sys

import openpyxl
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cfslib.excel_workbook_parser import ParsedRow
from cfslib.hbl_import_template import HBL_IMPORT_TEMPLATE


# ============================================================
# CONTAINER NUMBERS
# ============================================================

@pytest.fixture
def valid_container_numbers():
    """Real container numbers with correct check digits"""
    return [
        "MSCU6639870",
        "CSQU3054383",
        "TEMU9876540",
        "CMAU1234564",
        "HLBU5555557",
        "HLBU2941860",
        "MSKU9070323",
    ]


# ============================================================
# HBL IMPORT SHEET
# ============================================================

@pytest.fixture
def hbl_header_rows():
    """Header block of a well-formed HBL import sheet"""
    return [
        ["Mã Đại lý:", "DL01"],
        ["Số Master Bill:", "MBL001"],
        ["Số Seal:", "SEAL001"],
        ["Tên Tàu:", "Vessel"],
        ["Số chuyến:", "V001"],
        ["Ngày cập:", "04/02/2026"],
        ["Số cont:", "HLBU2941860"],
        ["Kích cỡ:", "40HQ"],
    ]


@pytest.fixture
def make_hbl_row():
    """Factory for parsed HBL data rows"""
    def _create(row_number, **overrides):
        data = {col.key: "" for col in HBL_IMPORT_TEMPLATE.columns}
        data.update(overrides)
        return ParsedRow(row_number=row_number, raw=[], data=data)
    return _create


@pytest.fixture
def make_workbook_bytes():
    """Factory building an in-memory .xlsx from lists of rows per sheet"""
    def _create(sheets):
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        for name, rows in sheets.items():
            ws = wb.create_sheet(title=name)
            for row in rows:
                ws.append(row)
        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
    return _create


@pytest.fixture
def hbl_sheet_rows(hbl_header_rows):
    """Full HBL sheet: 8 header rows, 2 house bills, totals row"""
    return hbl_header_rows + [
        ["HLBU2941860", "HB001", 1, "N/M", "Consignee A", "GC", "Shoes", 10, "CTN", 500, 2.5, None, None],
        ["HLBU 294186 0", 3265, 2, "N/M", "Consignee B", "DG", "Paint", 5, "DRM", 200, 1.0, "3/1263", None],
        ["TOTAL", None, None, None, None, None, None, 15, None, 700, 3.5, None, None],
    ]


# ============================================================
# PYTEST CONFIGURATION
# ============================================================

def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "integration: marks tests that read/write real workbook files"
    )
