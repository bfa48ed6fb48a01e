"""
Spreadsheet import templates.

The HBL import sheet has a label/value header block (forwarder, MBL, seal,
vessel, voyage, ETA, container number, size) followed by one row per house
bill. The last row of the sheet is a totals row and is never validated.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger("cfs.hbl_import_template")


@dataclass(frozen=True)
class ImportColumn:
    key: str
    label: str
    col_index: int                 # 0-based


@dataclass(frozen=True)
class ExcelTemplate:
    name: str
    columns: tuple
    data_start_row: int            # 1-based sheet row of the first data row
    header_row_count: Optional[int] = None   # None = every row above data_start_row
    skip_end_rows: int = 0
    max_rows: int = 1000
    allowed_extensions: tuple = (".xlsx", ".xlsm")
    max_file_size_mb: int = 10

    @property
    def header_rows(self):
        if self.header_row_count is not None:
            return self.header_row_count
        return max(self.data_start_row - 1, 0)

    def column(self, key):
        for col in self.columns:
            if col.key == key:
                return col
        return None


def _env_int(name, default):
    """Positive int from env var `name`; unset, empty or bad values give `default`."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring {name}={raw!r}: must be positive, using {default}")
        return default
    return value


# Override via env vars for large consolidations
MAX_IMPORT_ROWS = _env_int("CFS_IMPORT_MAX_ROWS", 1000)
MAX_IMPORT_FILE_SIZE_MB = _env_int("CFS_IMPORT_MAX_FILE_SIZE_MB", 10)


HBL_IMPORT_TEMPLATE = ExcelTemplate(
    name="hbl-import",
    columns=(
        ImportColumn("containerNumber", "Số cont", 0),
        ImportColumn("hblCode", "House Bill", 1),
        ImportColumn("sequence", "STT", 2),
        ImportColumn("shipmarks", "Shipmarks", 3),
        ImportColumn("consignee", "Consignee", 4),
        ImportColumn("packageType", "Loại hàng", 5),
        ImportColumn("cargoDescription", "Mô tả hàng", 6),
        ImportColumn("packageCount", "Số kiện", 7),
        ImportColumn("packageUnit", "Đơn vị", 8),
        ImportColumn("cargoWeight", "Trọng lượng (KGS)", 9),
        ImportColumn("volume", "Thể tích (CBM)", 10),
        ImportColumn("imdg", "IMDG", 11),
        ImportColumn("note", "Ghi chú", 12),
    ),
    data_start_row=9,
    skip_end_rows=1,
    max_rows=MAX_IMPORT_ROWS,
    max_file_size_mb=MAX_IMPORT_FILE_SIZE_MB,
)


# Header block labels, overridable per forwarder by the backend mapping
DEFAULT_HEADER_LABELS = {
    "forwarderCode": "Mã Đại lý:",
    "mbl": "Số Master Bill:",
    "sealNumber": "Số Seal:",
    "vesselName": "Tên Tàu:",
    "voyageNumber": "Số chuyến:",
    "arrivalDate": "Ngày cập:",
    "containerNumber": "Số cont:",
    "containerSize": "Kích cỡ:",
}


def resolve_header_labels(mapping=None):
    """Merge a backend import mapping ({"header": {...}}) over the default labels."""
    labels = dict(DEFAULT_HEADER_LABELS)
    header = (mapping or {}).get("header") or {}
    for key in DEFAULT_HEADER_LABELS:
        # Empty labels keep the default; "" would match any blank cell
        if header.get(key):
            labels[key] = header[key]
    return labels
