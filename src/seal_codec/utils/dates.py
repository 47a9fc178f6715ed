"""
Date handling shared by the MRZ and the seal header.

Seal dates are the decimal integer MMDDYYYY packed into three big-endian
bytes (1957-03-25 → 03251957 → ``31 9E F5``). MRZ dates are YYMMDD and
need a two-digit-year policy to come back as calendar dates.
"""

from __future__ import annotations

from datetime import date, datetime

from seal_codec.types import FormatError, ValidationError

SEAL_DATE_LENGTH = 3


def parse_date(value: date | datetime | str, field_name: str = "date") -> date:
    """Coerce a date, datetime or ISO 'YYYY-MM-DD' string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as e:
            msg = f"{field_name} must be a calendar date in YYYY-MM-DD format, got {value!r}"
            raise ValidationError(msg) from e
    msg = f"{field_name} must be a date or a YYYY-MM-DD string, got {type(value).__name__}"
    raise ValidationError(msg)


def date_to_bytes(value: date) -> bytes:
    """Pack a date into the 3-byte seal representation."""
    if not 1 <= value.year <= 9999:
        msg = f"Year {value.year} cannot be stored in a seal date"
        raise ValidationError(msg)
    return int(f"{value.month:02d}{value.day:02d}{value.year:04d}").to_bytes(SEAL_DATE_LENGTH, "big")


def bytes_to_date(data: bytes) -> date:
    """Unpack a 3-byte seal date."""
    if len(data) != SEAL_DATE_LENGTH:
        msg = f"Seal date must be {SEAL_DATE_LENGTH} bytes, got {len(data)}"
        raise FormatError(msg)
    digits = f"{int.from_bytes(data, 'big'):08d}"
    try:
        return date(int(digits[4:]), int(digits[0:2]), int(digits[2:4]))
    except ValueError as e:
        msg = f"Seal date bytes {data.hex().upper()} do not encode a calendar date ({digits})"
        raise FormatError(msg) from e


def expand_two_digit_year(year: int, pivot: int, *, inclusive: bool = False) -> int:
    """Expand a two-digit year around a pivot.

    With ``inclusive`` False years above the pivot fall in the 1900s; with
    it True the pivot year itself does too.
    """
    in_last_century = year >= pivot if inclusive else year > pivot
    return 1900 + year if in_last_century else 2000 + year


def mrz_to_date(text: str, pivot: int, *, inclusive: bool = False, century: int | None = None) -> date:
    """Parse a YYMMDD MRZ date.

    Args:
        text: Six digits
        pivot: Two-digit-year pivot
        inclusive: Whether the pivot year itself belongs to the 1900s
        century: Force a century (e.g. 2000) instead of using the pivot

    Raises:
        FormatError: If the text is not a valid YYMMDD date
    """
    if len(text) != 6 or not text.isdigit():
        msg = f"MRZ date must be 6 digits (YYMMDD), got {text!r}"
        raise FormatError(msg)
    yy = int(text[0:2])
    year = century + yy if century is not None else expand_two_digit_year(yy, pivot, inclusive=inclusive)
    try:
        return date(year, int(text[2:4]), int(text[4:6]))
    except ValueError as e:
        msg = f"MRZ date {text!r} is not a calendar date"
        raise FormatError(msg) from e
