"""DER definite-length encoding used in the signature zone."""

from __future__ import annotations

from seal_codec.types import FormatError, LengthMismatchError, ValidationError

MAX_LENGTH_OCTETS = 4


def length_to_der(length: int) -> bytes:
    """Encode a length as a DER definite-length field.

    Lengths below 128 use the short form; longer values use ``0x80 | n``
    followed by ``n`` big-endian bytes (n at most 4).
    """
    if length < 0:
        msg = f"Length must be non-negative, got {length}"
        raise ValidationError(msg)
    if length < 0x80:
        return bytes([length])

    n = (length.bit_length() + 7) // 8
    if n > MAX_LENGTH_OCTETS:
        msg = f"Length {length} needs {n} octets; at most {MAX_LENGTH_OCTETS} are supported"
        raise ValidationError(msg)
    return bytes([0x80 | n]) + length.to_bytes(n, "big")


def der_to_length(data: bytes) -> tuple[int, int]:
    """Parse a DER length field.

    Returns:
        Tuple of (length_value, bytes_consumed)
    """
    if len(data) == 0:
        msg = "No length data available"
        raise LengthMismatchError(msg)

    first_byte = data[0]

    # Short form (length < 128)
    if first_byte & 0x80 == 0:
        return first_byte, 1

    n = first_byte & 0x7F
    if n == 0:
        msg = "Indefinite length not allowed in DER"
        raise FormatError(msg)
    if n > MAX_LENGTH_OCTETS:
        msg = f"Length field announces {n} octets; at most {MAX_LENGTH_OCTETS} are supported"
        raise FormatError(msg)
    if len(data) < 1 + n:
        msg = "Insufficient data for long form length"
        raise LengthMismatchError(msg)

    return int.from_bytes(data[1 : 1 + n], "big"), 1 + n
