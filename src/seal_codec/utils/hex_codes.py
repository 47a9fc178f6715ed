"""Hex-string feature codes stored in seal message zones."""

from __future__ import annotations

from seal_codec.types import ValidationError
from seal_codec.utils.mrz_format import raise_for_problems, validate_hex_string

MAX_HEX_CODE_LENGTH = 8


def hex_code_to_bytes(code: str, field_name: str = "Hex code") -> bytes:
    """Convert a code of up to 8 hex characters to its trimmed byte form.

    The code is left-padded to 8 characters and leading zero bytes are
    dropped; a zero value keeps a single ``00`` byte.

    Example:
        >>> hex_code_to_bytes("0A")
        b'\\n'
    """
    raise_for_problems(field_name, validate_hex_string(code, minimum=1, maximum=MAX_HEX_CODE_LENGTH))
    padded = code.rjust(MAX_HEX_CODE_LENGTH, "0")
    return bytes.fromhex(padded).lstrip(b"\x00") or b"\x00"


def bytes_to_hex_code(data: bytes) -> str:
    """Render stored feature bytes as uppercase hex, two characters per byte."""
    if len(data) > MAX_HEX_CODE_LENGTH // 2:
        msg = f"Hex code feature must be at most {MAX_HEX_CODE_LENGTH // 2} bytes, got {len(data)}"
        raise ValidationError(msg)
    return data.hex().upper()
