"""
C40 text compaction as used by Visible Digital Seals.

Three characters pack into one 16-bit word ``1600*u1 + 40*u2 + u3 + 1``
stored big-endian. A trailing pair is padded with SHIFT1 (value 0); a
single trailing character is emitted as ``0xFE`` followed by its
DataMatrix ASCII code (character code + 1).

Space and the MRZ filler '<' share C40 value 3, so decoding cannot tell
them apart. Decoding yields the filler by default, which makes strings
over the MRZ alphabet round-trip unchanged.
"""

from __future__ import annotations

import string

from seal_codec.types import FILLER, FormatError, LengthMismatchError, ValidationError

SHIFT1 = 0
UNLATCH = 0xFE

_C40_VALUES: dict[str, int] = {" ": 3, FILLER: 3}
_C40_VALUES.update({d: i + 4 for i, d in enumerate(string.digits)})
_C40_VALUES.update({c: i + 14 for i, c in enumerate(string.ascii_uppercase)})


def _value_of(char: str) -> int:
    value = _C40_VALUES.get(char)
    if value is None:
        msg = f"Character {char!r} cannot be encoded in C40"
        raise ValidationError(msg)
    return value


def _char_of(value: int, filler: str) -> str:
    if value == 3:
        return filler
    if 4 <= value <= 13:
        return string.digits[value - 4]
    if 14 <= value <= 39:
        return string.ascii_uppercase[value - 14]
    msg = f"Unsupported C40 value {value}"
    raise FormatError(msg)


def _ascii_code(char: str) -> int:
    # DataMatrix ASCII: codeword is the character code plus one
    return ord(" " if char == FILLER else char) + 1


def c40_encode(text: str) -> bytes:
    """Encode text over A-Z, 0-9, space and '<' as C40 bytes."""
    text = text.upper()
    result = bytearray()
    i = 0
    while i < len(text):
        remaining = len(text) - i
        if remaining == 1:
            _value_of(text[i])
            result.append(UNLATCH)
            result.append(_ascii_code(text[i]))
            break
        u1 = _value_of(text[i])
        u2 = _value_of(text[i + 1])
        u3 = _value_of(text[i + 2]) if remaining >= 3 else SHIFT1
        result += (1600 * u1 + 40 * u2 + u3 + 1).to_bytes(2, "big")
        i += 3
    return bytes(result)


def c40_decode(data: bytes, filler: str = FILLER) -> str:
    """Decode C40 bytes.

    Args:
        data: Encoded bytes
        filler: Character produced for C40 value 3 ('<' or ' ')

    Raises:
        FormatError: On values outside the basic C40 set
        LengthMismatchError: On a dangling byte
    """
    chars: list[str] = []
    i = 0
    while i < len(data):
        if data[i] == UNLATCH:
            if i + 1 >= len(data):
                msg = "C40 data ends inside an ASCII escape"
                raise LengthMismatchError(msg)
            char = chr(data[i + 1] - 1)
            if char == " ":
                char = filler
            elif char not in _C40_VALUES:
                msg = f"Unsupported ASCII codeword {data[i + 1]} in C40 data"
                raise FormatError(msg)
            chars.append(char)
            i += 2
            continue

        if i + 1 >= len(data):
            msg = f"C40 data has an odd trailing byte at offset {i}"
            raise LengthMismatchError(msg)
        word = int.from_bytes(data[i : i + 2], "big") - 1
        if word < 0:
            msg = f"Invalid C40 word at offset {i}"
            raise FormatError(msg)
        u1, u2, u3 = word // 1600, (word // 40) % 40, word % 40
        if SHIFT1 in (u1, u2):
            msg = f"SHIFT1 padding outside the last position of the C40 word at offset {i}"
            raise FormatError(msg)
        chars.append(_char_of(u1, filler))
        chars.append(_char_of(u2, filler))
        if u3 != SHIFT1:
            chars.append(_char_of(u3, filler))
        i += 2
    return "".join(chars)


def c40_encoded_length(text_length: int) -> int:
    """Number of bytes ``c40_encode`` produces for a text of the given length."""
    return 2 * ((text_length + 2) // 3)
