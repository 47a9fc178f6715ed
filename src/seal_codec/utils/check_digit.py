"""
ICAO Doc 9303 check digit computation.

Character mapping:
- 0-9 → 0-9
- A-Z → 10-35
- < and space → 0

Weights repeat [7, 3, 1]; the check digit is the weighted sum modulo 10.
"""

from __future__ import annotations

import string

from seal_codec.types import ValidationError

CHECK_DIGIT_WEIGHTS = (7, 3, 1)

CHARACTER_VALUES: dict[str, int] = {"<": 0, " ": 0}
CHARACTER_VALUES.update({d: int(d) for d in string.digits})
CHARACTER_VALUES.update({c: i + 10 for i, c in enumerate(string.ascii_uppercase)})


def compute_check_digit(data: str) -> str:
    """
    Compute the check digit of an MRZ field.

    Args:
        data: Field text over A-Z, 0-9, '<' and space

    Returns:
        Single character check digit ("0"-"9")

    Raises:
        ValidationError: If the text contains any other character
    """
    total = 0
    for i, char in enumerate(data):
        value = CHARACTER_VALUES.get(char)
        if value is None:
            msg = f"Invalid character {char!r} at position {i} for check digit computation"
            raise ValidationError(msg)
        total += value * CHECK_DIGIT_WEIGHTS[i % 3]
    return str(total % 10)


def verify_check_digit(data: str, check_digit: str) -> bool:
    """Return True when ``check_digit`` matches the computed digit of ``data``."""
    return compute_check_digit(data) == check_digit
