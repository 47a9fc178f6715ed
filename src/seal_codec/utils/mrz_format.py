"""
Machine Readable Zone field formatting according to ICAO Doc 9303.

Key features:
- Normalization of free text into the MRZ alphabet (A-Z, 0-9, '<')
- Filler padding with logged truncation
- Name and optional-data field composition
- Date and gender marker formatting for the MRZ and the visual zone
- Validators that collect every problem before reporting
"""

from __future__ import annotations

import logging
import re
import unicodedata
from datetime import date
from typing import ClassVar

from seal_codec.types import FILLER, GenderMarker, ValidationError

logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")

_MRZ_STRING_PATTERN = re.compile(r"^[A-Z0-9< ]*$", re.IGNORECASE)
_HEX_STRING_PATTERN = re.compile(r"^[0-9A-F]*$", re.IGNORECASE)
_MRZ_ALPHABET = re.compile(r"^[A-Z0-9<]*$")


class MRZFieldFormat:
    """Text normalization into the MRZ alphabet."""

    # Letters with no Unicode decomposition into A-Z
    TRANSLITERATION_MAP: ClassVar[dict[str, str]] = {
        "Æ": "AE", "æ": "AE", "Ø": "OE", "ø": "OE", "Œ": "OE", "œ": "OE",
        "ß": "SS", "ẞ": "SS", "Þ": "TH", "þ": "TH", "Ð": "D", "ð": "D",
        "Đ": "D", "đ": "D", "Ł": "L", "ł": "L", "Ħ": "H", "ħ": "H", "ı": "I",
    }

    # Removed outright; every other separator becomes the filler
    DROPPED_PUNCTUATION: ClassVar[frozenset[str]] = frozenset("'’,")

    @classmethod
    def normalize(cls, text: str) -> str:
        """
        Normalize free text into the MRZ alphabet.

        Diacritics are stripped (NFD), apostrophes and commas removed, and
        spaces, hyphens and other separators replaced by '<'.

        Args:
            text: Input text in any script that transliterates to Latin

        Returns:
            Uppercase text over A-Z, 0-9 and '<'

        Raises:
            ValidationError: If a character cannot be represented

        Example:
            >>> MRZFieldFormat.normalize("Adrian-Claude D'Eveleau")
            'ADRIAN<CLAUDE<DEVELEAU'
        """
        result = []
        for char in unicodedata.normalize("NFD", text):
            if unicodedata.combining(char):
                continue
            if char in cls.TRANSLITERATION_MAP:
                result.append(cls.TRANSLITERATION_MAP[char])
            elif char in cls.DROPPED_PUNCTUATION:
                continue
            elif char.isascii() and char.isalnum():
                result.append(char.upper())
            elif char == FILLER or char.isspace() or not char.isalnum():
                result.append(FILLER)
            else:
                msg = f"Character {char!r} cannot be represented in the MRZ"
                raise ValidationError(msg)
        return "".join(result)

    @staticmethod
    def pad(text: str, width: int) -> str:
        """Right-pad with '<' to ``width``, truncating (with a warning) when longer."""
        if len(text) > width:
            logger.warning("MRZ field %r truncated to %d characters", text, width)
            return text[:width]
        return text.ljust(width, FILLER)


def normalize_mrz_string(text: str) -> str:
    return MRZFieldFormat.normalize(text)


def pad_mrz_string(text: str, width: int) -> str:
    return MRZFieldFormat.pad(text, width)


def full_name_to_mrz(full_name: str, width: int) -> str:
    """Compose the MRZ name field.

    Only the Latin transliteration (after the last '/') is used; the
    ", " between primary and secondary identifiers becomes "<<".
    """
    latin = full_name.rsplit("/", 1)[-1].strip()
    return pad_mrz_string(normalize_mrz_string(latin.replace(", ", "<<")), width)


def mrz_to_full_name(field: str) -> str:
    """Reverse ``full_name_to_mrz`` for a parsed name field."""
    return field.rstrip(FILLER).replace("<<", ", ", 1).replace(FILLER, " ").strip()


def optional_data_to_mrz(optional_data: str, width: int) -> str:
    return pad_mrz_string(normalize_mrz_string(optional_data), width)


def mrz_to_text(field: str) -> str:
    """Turn filler back into spaces and drop trailing padding."""
    return field.replace(FILLER, " ").rstrip()


def gender_marker_to_mrz(marker: str) -> str:
    return FILLER if marker == GenderMarker.UNSPECIFIED.value else marker


def date_to_mrz(value: date) -> str:
    """Format a date as YYMMDD."""
    return value.strftime("%y%m%d")


def date_to_viz(value: date) -> str:
    """Format a date as 'DD MMM YYYY', e.g. '30 SEP 2023'."""
    return f"{value.day:02d} {MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"


def is_mrz_alphabet(text: str) -> bool:
    return bool(_MRZ_ALPHABET.match(text))


def _length_problems(text: str, minimum: int | None, maximum: int | None) -> list[str]:
    problems = []
    if minimum is not None and len(text) < minimum:
        problems.append(f"length must be at least {minimum} character{'' if minimum == 1 else 's'}")
    if maximum is not None and len(text) > maximum:
        problems.append(f"length must not be more than {maximum} character{'' if maximum == 1 else 's'}")
    return problems


def validate_mrz_string(text: str, minimum: int | None = None, maximum: int | None = None) -> list[str]:
    """Return the problems that keep ``text`` from being used in the MRZ."""
    problems = _length_problems(text, minimum, maximum)
    if not _MRZ_STRING_PATTERN.match(text):
        problems.append("must only use the characters A-Z, 0-9, ' ', or '<'")
    return problems


def validate_hex_string(text: str, minimum: int | None = None, maximum: int | None = None) -> list[str]:
    problems = _length_problems(text, minimum, maximum)
    if not _HEX_STRING_PATTERN.match(text):
        problems.append("must only use the characters 0-9 or A-F")
    return problems


def validate_identifier_code(text: str) -> list[str]:
    """Check a seal identifier: a 2-letter country code and a 2-character signer code."""
    problems = []
    if len(text) != 4:
        problems.append("full identifier code must be 4 characters long")
    if not re.fullmatch(r"[A-Z]*", text[:2], re.IGNORECASE):
        problems.append("country code (characters 1-2) must use only characters A-Z")
    if not re.fullmatch(r"[A-Z0-9]*", text[2:], re.IGNORECASE):
        problems.append("signer code (characters 3-4) must use only characters A-Z or 0-9")
    return problems


def stringify_problems(problems: list[str]) -> str:
    """Join problems into one sentence: 'A; b; and c.'"""
    if not problems:
        return ""
    parts = problems[:]
    parts[0] = parts[0][0].upper() + parts[0][1:]
    if len(parts) > 1:
        parts[-1] = "and " + parts[-1]
    return "; ".join(parts) + "."


def raise_for_problems(field_name: str, problems: list[str]) -> None:
    """Raise a ValidationError describing every problem found for a field."""
    if problems:
        msg = f"{field_name}: {stringify_problems(problems)}"
        raise ValidationError(msg, problems)
