import random
import string

import pytest

from seal_codec.types import FormatError, LengthMismatchError, ValidationError
from seal_codec.utils.c40 import UNLATCH, c40_decode, c40_encode, c40_encoded_length

MRZ_ALPHABET = string.ascii_uppercase + string.digits + "<"


def test_c40_sample_vector():
    """Test the published C40 sample vector."""
    assert c40_encode("XK CD") == bytes([0xEB, 0x04, 0x66, 0xA9])


def test_c40_decode_sample_vector():
    """Test that spaces come back as the requested filler."""
    assert c40_decode(bytes([0xEB, 0x04, 0x66, 0xA9])) == "XK<CD"
    assert c40_decode(bytes([0xEB, 0x04, 0x66, 0xA9]), filler=" ") == "XK CD"


def test_c40_single_trailing_character():
    """Test that a single leftover character is escaped as DataMatrix ASCII."""
    assert c40_encode("A") == bytes([UNLATCH, ord("A") + 1])
    assert c40_encode("<") == bytes([UNLATCH, 33])
    assert c40_encode(" ") == bytes([UNLATCH, 33])
    assert c40_decode(bytes([UNLATCH, ord("7") + 1])) == "7"


def test_c40_trailing_pair_is_padded():
    """Test that a leftover pair fills one word with SHIFT1."""
    encoded = c40_encode("UT")
    assert len(encoded) == 2
    assert c40_decode(encoded) == "UT"


def test_c40_encode_uppercases():
    """Test that lower-case input is encoded as upper case."""
    assert c40_encode("utopia") == c40_encode("UTOPIA")


def test_c40_round_trip_every_length():
    """Test decode(encode(s)) == s for MRZ strings of length 0-60."""
    rng = random.Random(9303)
    for length in range(61):
        text = "".join(rng.choice(MRZ_ALPHABET) for _ in range(length))
        encoded = c40_encode(text)
        assert len(encoded) == c40_encoded_length(length)
        assert c40_decode(encoded) == text


def test_c40_encode_rejects_unsupported_characters():
    """Test characters outside the basic C40 set."""
    with pytest.raises(ValidationError):
        c40_encode("A-B")


def test_c40_decode_dangling_bytes():
    """Test truncated C40 data."""
    with pytest.raises(LengthMismatchError):
        c40_decode(bytes([0xEB]))

    with pytest.raises(LengthMismatchError):
        c40_decode(bytes([0xEB, 0x04, UNLATCH]))


def test_c40_decode_invalid_word():
    """Test words that do not decode to basic C40 values."""
    with pytest.raises(FormatError):
        c40_decode(bytes([0x00, 0x00]))

    # u1 = 1 is a shift value, not a character
    with pytest.raises(FormatError):
        c40_decode((1600 * 1 + 40 * 14 + 14 + 1).to_bytes(2, "big"))


def test_c40_decode_shift1_only_pads_the_last_position():
    """Test that SHIFT1 in the first or second position of a word is rejected."""
    with pytest.raises(FormatError):
        c40_decode((0 * 1600 + 14 * 40 + 15 + 1).to_bytes(2, "big"))

    with pytest.raises(FormatError):
        c40_decode((14 * 1600 + 0 * 40 + 15 + 1).to_bytes(2, "big"))

    assert c40_decode((14 * 1600 + 15 * 40 + 0 + 1).to_bytes(2, "big")) == "AB"
