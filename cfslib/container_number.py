"""
Container Number: ISO 6346 validation and normalization
==========================================================
Validates freight container identifiers (owner code + category + serial +
check digit) the way they are typed into forms and spreadsheet imports.

Container number: 11 characters = XXXU NNNNNN C
  Characters 1-3: Owner code (registered with BIC)
  Character 4: Equipment category (U=freight, J=detachable, Z=trailer)
  Characters 5-10: Serial number (6 digits)
  Character 11: Check digit

Used by: container_schema.py (form fields), hbl_import_validator.py
(bulk HBL spreadsheet imports).
"""

import re
import logging
from dataclasses import dataclass
from types import MappingProxyType

logger = logging.getLogger("cfs.container_number")


# ═══════════════════════════════════════════════════════════
#  BIC / ISO 6346 TABLES
# ═══════════════════════════════════════════════════════════

# Letter values start at 10 and skip multiples of 11
LETTER_VALUES = MappingProxyType({
    "A": 10, "B": 12, "C": 13, "D": 14, "E": 15,
    "F": 16, "G": 17, "H": 18, "I": 19, "J": 20,
    "K": 21, "L": 23, "M": 24, "N": 25, "O": 26,
    "P": 27, "Q": 28, "R": 29, "S": 30, "T": 31,
    "U": 32, "V": 34, "W": 35, "X": 36, "Y": 37, "Z": 38,
})

EQUIPMENT_CATEGORIES = MappingProxyType({
    "U": "Freight container",
    "J": "Detachable freight container-related equipment",
    "Z": "Trailer and chassis",
})

ERROR_MESSAGES = MappingProxyType({
    "required": "Container number is required",
    "format": "Invalid ISO 6346 format",
    "check_digit": "Invalid ISO 6346 check digit",
})

_RE_WHITESPACE = re.compile(r"\s+")
_RE_PREFIX = re.compile(r"[A-Z]{4}[0-9]{6}")
_RE_CONTAINER = re.compile(r"[A-Z]{4}[0-9]{6}[0-9]")
# Free text: 4 letters + 7 digits, optionally in display form "MSCU 663987 0"
_RE_CONTAINER_IN_TEXT = re.compile(
    r"\b([A-Z]{4}) ?([0-9]{6}) ?([0-9])\b", re.IGNORECASE | re.ASCII
)


class ContainerNumberError(ValueError):
    """Raised when a container number fails validation.

    `code` is one of "required", "format", "check_digit".
    """

    def __init__(self, code, value=None):
        super().__init__(ERROR_MESSAGES[code])
        self.code = code
        self.value = value

    @property
    def message(self):
        return ERROR_MESSAGES[self.code]


@dataclass(frozen=True)
class ContainerNumber:
    """A validated container number."""
    owner_code: str
    category_identifier: str
    serial_number: str
    check_digit: str

    @property
    def full(self):
        return f"{self.owner_code}{self.category_identifier}{self.serial_number}{self.check_digit}"

    @property
    def formatted(self):
        return f"{self.owner_code}{self.category_identifier} {self.serial_number} {self.check_digit}"

    @property
    def category_description(self):
        return EQUIPMENT_CATEGORIES.get(self.category_identifier)

    def __str__(self):
        return self.full


# ═══════════════════════════════════════════════════════════
#  CORE FUNCTIONS
# ═══════════════════════════════════════════════════════════

def normalize(raw):
    """Uppercase and drop all whitespace, including internal spaces.

    Other characters pass through untouched so they still fail the format
    check later. Non-string input normalizes to "".
    """
    if not isinstance(raw, str):
        return ""
    return _RE_WHITESPACE.sub("", raw).upper()


def _check_digit_for(prefix):
    total = 0
    for i, ch in enumerate(prefix):
        value = LETTER_VALUES[ch] if ch in LETTER_VALUES else int(ch)
        total += value * (2 ** i)
    check = total % 11
    return 0 if check == 10 else check


def compute_check_digit(owner_serial):
    """Compute the check digit for a 10-character owner code + serial.

    Args:
        owner_serial: str, e.g. "MSCU663987" (spaces and case are ignored)

    Returns:
        int 0-9

    Raises:
        ValueError: prefix is not 4 letters followed by 6 digits
    """
    prefix = normalize(owner_serial)
    if not _RE_PREFIX.fullmatch(prefix):
        raise ValueError(
            f"expected 4 letters + 6 digits, got {owner_serial!r}"
        )
    return _check_digit_for(prefix)


def complete_container_number(owner_serial):
    """Append the computed check digit: "MSCU663987" -> "MSCU6639870"."""
    prefix = normalize(owner_serial)
    return f"{prefix}{compute_check_digit(prefix)}"


def is_valid(raw):
    """True iff `raw` normalizes to a container number with a correct check digit."""
    clean = normalize(raw)
    if not _RE_CONTAINER.fullmatch(clean):
        return False
    return _check_digit_for(clean[:10]) == int(clean[10])


def parse_container_number(raw):
    """Normalize, validate and split a container number.

    Raises:
        ContainerNumberError: code "required", "format" or "check_digit"
    """
    clean = normalize(raw)
    if not clean:
        raise ContainerNumberError("required", raw)
    if not _RE_CONTAINER.fullmatch(clean):
        logger.debug(f"Rejected container number {raw!r}: bad format")
        raise ContainerNumberError("format", raw)
    if _check_digit_for(clean[:10]) != int(clean[10]):
        logger.debug(f"Rejected container number {raw!r}: bad check digit")
        raise ContainerNumberError("check_digit", raw)
    return ContainerNumber(
        owner_code=clean[:3],
        category_identifier=clean[3],
        serial_number=clean[4:10],
        check_digit=clean[10],
    )


def validate_container_number(raw):
    """
    Validate a container number and report why it failed.
    Returns dict with: valid, normalized, code, error, owner_code, category,
    serial, check_digit, expected_check_digit.

    Does NOT look up the owner code against the BIC registry.
    """
    clean = normalize(raw)
    result = {
        "valid": False,
        "normalized": clean,
        "code": None,
        "error": None,
        "owner_code": None,
        "category": None,
        "serial": None,
        "check_digit": None,
        "expected_check_digit": None,
    }

    try:
        number = parse_container_number(raw)
    except ContainerNumberError as e:
        result["code"] = e.code
        result["error"] = e.message
        if e.code == "check_digit":
            result["owner_code"] = clean[:3]
            result["category"] = EQUIPMENT_CATEGORIES.get(clean[3], clean[3])
            result["serial"] = clean[4:10]
            result["check_digit"] = clean[10]
            result["expected_check_digit"] = str(_check_digit_for(clean[:10]))
        return result

    result.update({
        "valid": True,
        "owner_code": number.owner_code,
        "category": number.category_description or number.category_identifier,
        "serial": number.serial_number,
        "check_digit": number.check_digit,
        "expected_check_digit": number.check_digit,
    })
    return result


def format_container_number(raw):
    """Display form "XXXU NNNNNN C"; anything not 11 characters comes back unchanged."""
    clean = normalize(raw)
    if len(clean) == 11:
        return f"{clean[:4]} {clean[4:10]} {clean[10]}"
    return raw


def find_container_numbers(text):
    """All check-digit-valid container numbers in free text, sorted and de-duplicated."""
    if not text:
        return []
    found = set()
    for m in _RE_CONTAINER_IN_TEXT.finditer(text):
        num = "".join(m.groups()).upper()
        if is_valid(num):
            found.add(num)
    return sorted(found)
