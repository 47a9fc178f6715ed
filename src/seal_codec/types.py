"""
Core types, wire constants and the error taxonomy for the seal codec.

The codec raises synchronously and never retries: every failure surfaces
as one of the ``SealCodecError`` subclasses below, carrying a readable
message (and, for validation, the list of problems that were found).
"""

from __future__ import annotations

from enum import Enum, IntEnum

# Visible Digital Seal framing
SEAL_MAGIC = 0xDC
SIGNATURE_MARKER = 0xFF

# MRZ filler character
FILLER = "<"


class SealVersion(IntEnum):
    """Version byte carried in the second header octet."""
    V3 = 0x02
    V4 = 0x03


class GenderMarker(str, Enum):
    """Gender markers accepted in the MRZ."""
    FEMALE = "F"
    MALE = "M"
    UNSPECIFIED = "X"     # rendered as '<' in the MRZ


class SealCodecError(Exception):
    """Base exception for the seal codec."""

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


class ValidationError(SealCodecError, ValueError):
    """A field value violates its charset, length, range or policy."""

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR")
        self.problems = problems or [message]


class FormatError(SealCodecError):
    """Binary or MRZ input has an unexpected marker, version or structure."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "FORMAT_ERROR")


class LengthMismatchError(SealCodecError):
    """A declared length disagrees with the bytes actually present."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "LENGTH_MISMATCH")


class IntegrityError(SealCodecError):
    """A check digit embedded in parsed data does not match."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "INTEGRITY_ERROR")
