#!/usr/bin/env python3
"""
HBL Import Checker
==================
Validates an HBL import workbook offline, before uploading it.

Usage:
    python check_hbl_import.py hbl.xlsx
    python check_hbl_import.py hbl.xlsx --sheet "Sheet2"
"""

import os
import sys
import argparse

from cfslib.excel_workbook_parser import WorkbookParseError, check_import_file, parse_workbook
from cfslib.hbl_import_template import HBL_IMPORT_TEMPLATE
from cfslib.hbl_import_validator import validate_hbl_import


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate an HBL import workbook")
    parser.add_argument("path", help="Path to the .xlsx file")
    parser.add_argument("--sheet", default=None, help="Sheet name (default: first sheet)")
    args = parser.parse_args(argv)

    if not os.path.isfile(args.path):
        print(f"File not found: {args.path}")
        return 2

    problem = check_import_file(args.path, os.path.getsize(args.path), HBL_IMPORT_TEMPLATE)
    if problem:
        print(problem)
        return 2

    with open(args.path, "rb") as f:
        file_bytes = f.read()

    try:
        parsed = parse_workbook(file_bytes, HBL_IMPORT_TEMPLATE, args.sheet)
    except WorkbookParseError as e:
        print(e)
        return 2

    errors = validate_hbl_import(parsed.rows, parsed.header_rows)
    if not errors:
        print(f"OK: {len(parsed.rows)} rows in sheet '{parsed.sheet_name}'")
        return 0

    for err in errors:
        print(f"{err.col_letter}{err.row_number}: {err.message} (value: {err.value!r})")
    print(f"{len(errors)} error(s)")
    return 1


if __name__ == "__main__":
    sys.exit(main())
