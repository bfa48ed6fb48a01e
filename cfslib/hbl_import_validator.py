"""
HBL Import Validator
====================
Checks a parsed HBL import sheet before it is submitted to the backend.

Header block:
  - container number present and valid (ISO 6346)
  - forwarder code, MBL, seal, vessel, voyage, ETA, container size present
  - ETA is DD/MM/YYYY text or a real Excel date

Data rows (totals row at the end is skipped):
  - container number present, valid, and the same as the header container
  - house bill and consignee present
  - IMDG present when package type is DG

Problems are returned as CellValidationError entries, never raised.
"""

import re
import logging
from dataclasses import dataclass
from typing import Any

from openpyxl.utils import get_column_letter

from .container_number import is_valid, normalize
from .excel_date import parse_excel_dmy_date
from .hbl_import_template import HBL_IMPORT_TEMPLATE, resolve_header_labels

logger = logging.getLogger("cfs.hbl_import_validator")

_RE_SPACES = re.compile(r"\s+")


@dataclass
class CellValidationError:
    row_number: int                # 1-based sheet row
    col_index: int                 # 0-based column
    col_letter: str
    message: str
    value: Any = None


@dataclass
class HeaderValue:
    value: Any
    row_number: int
    col_index: int


def column_index_to_letter(index):
    """0 -> "A", 25 -> "Z", 26 -> "AA"."""
    return get_column_letter(index + 1)


def normalize_header_label(value):
    return _RE_SPACES.sub(" ", value.strip().lower()).removesuffix(":")


def get_cell_display(value):
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value).strip()


def _required_text(value):
    display = get_cell_display(value)
    return display or None


def find_header_value(header_rows, label):
    """Find `label` in the header block and return the cell to its right, or None."""
    target = normalize_header_label(label)
    for row_index, row in enumerate(header_rows):
        cells = row if isinstance(row, (list, tuple)) else []
        for col_index, cell in enumerate(cells):
            if not isinstance(cell, str):
                continue
            if normalize_header_label(cell) == target:
                value = cells[col_index + 1] if col_index + 1 < len(cells) else None
                return HeaderValue(value, row_index + 1, col_index + 1)
    return None


class HblImportValidator:
    """Validates HBL import rows against the header block.

    Args:
        mapping: backend import mapping ({"header": {...}}) or None
        template: ExcelTemplate, defaults to HBL_IMPORT_TEMPLATE
    """

    def __init__(self, mapping=None, template=HBL_IMPORT_TEMPLATE):
        self.labels = resolve_header_labels(mapping)
        self.template = template

    def validate(self, rows, header_rows):
        """
        Args:
            rows: list of ParsedRow
            header_rows: list of raw header rows (list of cell values)

        Returns:
            list of CellValidationError
        """
        errors = []
        labels = self.labels
        start_row = self.template.data_start_row
        imdg_col = self.template.column("imdg")
        imdg_col_index = imdg_col.col_index if imdg_col else 11

        def push_header_error(label, message, value=None):
            found = find_header_value(header_rows, label)
            col_index = found.col_index if found else 0
            errors.append(CellValidationError(
                row_number=found.row_number if found else 1,
                col_index=col_index,
                col_letter=column_index_to_letter(col_index),
                message=message,
                value=value,
            ))

        def push_cell_error(row_number, col_index, message, value):
            errors.append(CellValidationError(
                row_number=row_number,
                col_index=col_index,
                col_letter=column_index_to_letter(col_index),
                message=message,
                value=value,
            ))

        # ── Header container ──
        header_container = find_header_value(header_rows, labels["containerNumber"])
        header_container_raw = header_container.value if header_container else None
        header_container_text = get_cell_display(header_container_raw)
        header_container_normalized = (
            normalize(header_container_text) if header_container_text else ""
        )

        if not header_container_text:
            push_header_error(
                labels["containerNumber"], "Container number is required",
                header_container_raw,
            )
        elif not is_valid(header_container_text):
            push_header_error(
                labels["containerNumber"], "Container number is invalid (ISO 6346)",
                header_container_raw,
            )

        # ── Other header fields ──
        required_header_fields = [
            (labels["forwarderCode"], "Forwarder code is required", None),
            (labels["mbl"], "MBL number is required", None),
            (labels["sealNumber"], "Seal number is required", None),
            (labels["vesselName"], "Vessel name is required", None),
            (labels["voyageNumber"], "Voyage number is required", None),
            (labels["arrivalDate"], "ETA date is required", "date"),
            (labels["containerSize"], "Container size is required", None),
        ]
        for label, message, field_type in required_header_fields:
            found = find_header_value(header_rows, label)
            raw_value = found.value if found else None
            if not get_cell_display(raw_value):
                push_header_error(label, message, raw_value)
                continue
            if field_type == "date" and parse_excel_dmy_date(raw_value) is None:
                push_header_error(
                    label,
                    "ETA date is invalid. Use DD/MM/YYYY (or select a valid Excel date)",
                    raw_value,
                )

        # ── Data rows ──
        data_rows = [
            r for index, r in enumerate(rows)
            if r.row_number >= start_row and not self._is_tail_row(index, len(rows))
        ]

        if not errors and not data_rows:
            push_cell_error(start_row, 0, "At least one HBL row is required", None)

        for r in data_rows:
            container = r.data.get("containerNumber")
            container_text = _required_text(container)
            if not container_text:
                push_cell_error(r.row_number, 0, "Container number is required", container)
            elif not is_valid(container_text):
                push_cell_error(
                    r.row_number, 0, "Container number is invalid (ISO 6346)", container,
                )
            elif header_container_normalized and (
                normalize(container_text) != header_container_normalized
            ):
                push_cell_error(
                    r.row_number, 0, "Container number must match header", container,
                )

            hbl_code = r.data.get("hblCode")
            if not _required_text(hbl_code):
                push_cell_error(r.row_number, 1, "House bill is required", hbl_code)

            consignee = r.data.get("consignee")
            if not _required_text(consignee):
                push_cell_error(r.row_number, 4, "Consignee is required", consignee)

            package_type = get_cell_display(r.data.get("packageType")).upper()
            if package_type == "DG" and not get_cell_display(r.data.get("imdg")):
                push_cell_error(
                    r.row_number, imdg_col_index,
                    "IMDG is required when package type is DG", r.data.get("imdg"),
                )

        if errors:
            logger.info(
                f"HBL import: {len(errors)} validation errors in {len(data_rows)} rows"
            )
        return errors

    def _is_tail_row(self, index, total):
        skip = max(self.template.skip_end_rows or 0, 0)
        return skip > 0 and index >= total - skip


def validate_hbl_import(rows, header_rows, mapping=None):
    """Validate with the default HBL template."""
    return HblImportValidator(mapping).validate(rows, header_rows)
