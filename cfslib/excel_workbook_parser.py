"""
Reads import workbooks into header rows + keyed data rows.

Row numbers are 1-based sheet rows so validation errors can point the user at
the exact cell. Empty cells read as "" and fully empty rows are dropped.
"""

import io
import os
import logging
from dataclasses import dataclass, field

import openpyxl

logger = logging.getLogger("cfs.excel_workbook_parser")

MB_IN_BYTES = 1024 * 1024


class WorkbookParseError(ValueError):
    """The workbook cannot be read or the requested sheet does not exist."""


@dataclass
class ParsedRow:
    row_number: int
    raw: list
    data: dict


@dataclass
class ParsedWorkbook:
    rows: list
    sheet_name: str
    sheet_names: list
    header_rows: list = field(default_factory=list)
    data_rows: list = field(default_factory=list)


def check_import_file(filename, size_bytes, template):
    """Returns an error message for a file the template does not accept, else None."""
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in template.allowed_extensions:
        return f"Invalid file format. Allowed: {', '.join(template.allowed_extensions)}"
    if size_bytes > template.max_file_size_mb * MB_IN_BYTES:
        return f"File size exceeds {template.max_file_size_mb}MB"
    return None


def _is_blank(cell):
    return cell is None or cell == ""


def read_sheet_rows(file_bytes, sheet_name=None):
    """All rows of one sheet as lists, None cells replaced by "".

    Returns:
        (rows, sheet_name, sheet_names)
    """
    try:
        wb = openpyxl.load_workbook(
            io.BytesIO(file_bytes), read_only=True, data_only=True,
        )
    except Exception as e:
        logger.warning(f"Unreadable workbook: {e}")
        raise WorkbookParseError(f"Cannot read workbook: {e}") from e

    try:
        sheet_names = list(wb.sheetnames)
        selected = sheet_name or (sheet_names[0] if sheet_names else None)
        if selected not in sheet_names:
            raise WorkbookParseError(f"Sheet not found: {selected}")
        ws = wb[selected]
        rows = [
            ["" if c is None else c for c in row]
            for row in ws.iter_rows(min_row=1, min_col=1, values_only=True)
        ]
    finally:
        wb.close()

    return rows, selected, sheet_names


def parse_workbook(file_bytes, template, sheet_name=None):
    """
    Split a sheet into the template's header block and keyed data rows.

    Args:
        file_bytes: bytes of an .xlsx workbook
        template: ExcelTemplate
        sheet_name: str or None (first sheet when omitted)

    Returns:
        ParsedWorkbook
    """
    aoa, selected, sheet_names = read_sheet_rows(file_bytes, sheet_name)

    header_rows = aoa[:template.header_rows]
    data_rows = aoa[template.data_start_row - 1:]

    rows = []
    for i, raw in enumerate(data_rows[:template.max_rows]):
        if all(_is_blank(c) for c in raw):
            continue
        data = {
            col.key: raw[col.col_index] if col.col_index < len(raw) else ""
            for col in template.columns
        }
        rows.append(ParsedRow(
            row_number=template.data_start_row + i, raw=raw, data=data,
        ))

    logger.info(
        f"Parsed sheet '{selected}' with template '{template.name}': "
        f"{len(rows)} data rows"
    )
    return ParsedWorkbook(
        rows=rows,
        sheet_name=selected,
        sheet_names=sheet_names,
        header_rows=header_rows,
        data_rows=data_rows,
    )
