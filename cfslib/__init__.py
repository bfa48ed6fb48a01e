"""
CFS Library - Container Freight Station tools
==============================================

Modules:
- container_number: ISO 6346 normalization, check digit, validation
- container_schema: container picker form field (pydantic)
- excel_date: DD/MM/YYYY and Excel serial dates from cells
- hbl_import_template: spreadsheet import templates and header labels
- excel_workbook_parser: openpyxl reader for import workbooks
- hbl_import_validator: HBL import sheet validation

Usage:
    from cfslib import is_valid, normalize
    from cfslib.hbl_import_validator import validate_hbl_import
"""

from .container_number import (
    LETTER_VALUES,
    ContainerNumber,
    ContainerNumberError,
    compute_check_digit,
    complete_container_number,
    find_container_numbers,
    format_container_number,
    is_valid,
    normalize,
    parse_container_number,
    validate_container_number,
)

__version__ = "1.0.0"
