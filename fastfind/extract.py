"""
fastfind/extract.py

Fixed-offset key extraction for one corpus record.

A record is an opaque text line such as "Smith6700121990XX":
    - surname key  : first character, verbatim ("S")
    - province key : first 2 chars of the digit tail ("67")
    - year key     : chars [6, 10) of the digit tail ("1990")

The digit tail starts at the first ASCII digit of the line. Fields that
cannot be extracted (no digit, tail too short) are simply absent; nothing
here ever raises on malformed input.
"""

from typing import Optional, Tuple

FIELDS = ("surname", "province", "year")

PROVINCE_SLICE = (0, 2)
YEAR_SLICE = (6, 10)


def first_ascii_digit(line: str) -> int:
    """
    Index of the first character in '0'..'9', or -1.
    ASCII only: str.isdigit() would also match e.g. Arabic-Indic digits.
    """
    for j, ch in enumerate(line):
        if "0" <= ch <= "9":
            return j
    return -1


def digit_tail(line: str) -> Optional[str]:
    j = first_ascii_digit(line)
    if j == -1:
        return None
    return line[j:]


def extract_keys(line: Optional[str]) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """
    Extract (surname, province, year) keys from a record.
    Each slot is None when the record does not carry that field.
    """
    if not line:
        return None, None, None

    surname = line[0]

    tail = digit_tail(line)
    if tail is None:
        return surname, None, None

    province = None
    lo, hi = PROVINCE_SLICE
    if len(tail) >= hi:
        province = tail[lo:hi]

    year = None
    lo, hi = YEAR_SLICE
    if len(tail) >= hi:
        year = tail[lo:hi]

    return surname, province, year
