import logging
from datetime import date

import pytest

from seal_codec.seal.digital_seal import DigitalSealV3, DigitalSealV4, check_magic_and_version, decode_seal
from seal_codec.types import FormatError, LengthMismatchError, SealVersion, ValidationError
from seal_codec.utils.c40 import c40_encode
from seal_codec.utils.dates import date_to_bytes


def _sample_v3():
    return DigitalSealV3(
        authority_code="UTO",
        identifier_code="UTSS",
        cert_reference="1A2B3",
        issue_date=date(2023, 9, 29),
        signature_date="2023-09-30",
        feature_definition=0x01,
        type_category=0x04,
        features={0x01: c40_encode("MANN<<MISTER"), 0x02: b"\x0a"},
        signature_data=bytes(range(64)),
    )


def _sample_v4():
    return DigitalSealV4(
        authority_code="D",
        identifier_code="DETS",
        cert_reference="ABCDEF0123",
        issue_date=date(2024, 2, 29),
        signature_date=date(2024, 3, 1),
        feature_definition=0x01,
        type_category=0x0A,
        features={0x01: c40_encode("P<D<<MUSTERMANN"), 0x04: bytes([30, 0, 0])},
        signature_data=bytes(range(200)),
    )


def test_v3_header_zone_layout():
    """Test the version 3 header byte layout."""
    header = _sample_v3().header_zone
    assert header[0:2] == bytes([0xDC, 0x02])
    assert header[2:4] == bytes.fromhex("D9C5")
    assert header[4:10] == c40_encode("UTSS1A2B3")
    assert header[10:13] == date_to_bytes(date(2023, 9, 29))
    assert header[13:16] == date_to_bytes(date(2023, 9, 30))
    assert header[16:18] == bytes([0x01, 0x04])
    assert len(header) == 18


def test_v4_header_zone_layout():
    """Test that version 4 prefixes the certificate reference with its length."""
    header = _sample_v4().header_zone
    assert header[0:2] == bytes([0xDC, 0x03])
    assert header[2:4] == c40_encode("D<<")
    block = c40_encode("DETS0AABCDEF0123")
    assert header[4 : 4 + len(block)] == block
    assert header[-2:] == bytes([0x01, 0x0A])


def test_message_zone_layout():
    """Test tag-length-value features in insertion order."""
    seal = DigitalSealV4(features={0x05: b"\x01\x02", 0x01: b"\xff"})
    assert seal.message_zone == bytes([0x05, 0x02, 0x01, 0x02, 0x01, 0x01, 0xFF])


def test_signature_zone_layout():
    """Test the signature marker and DER length."""
    assert DigitalSealV3().signature_zone == bytes([0xFF, 0x40]) + bytes(64)
    assert _sample_v4().signature_zone[0:3] == bytes([0xFF, 0x81, 0xC8])


@pytest.mark.parametrize("factory", [_sample_v3, _sample_v4])
@pytest.mark.parametrize("zone", ["header_zone", "message_zone", "signature_zone", "unsigned_seal", "signed_seal"])
def test_seal_zone_round_trip(factory, zone):
    """Test that parsing a composed zone reproduces the seal state."""
    original = factory()
    parsed = type(original)()

    setattr(parsed, zone, getattr(original, zone))

    assert getattr(parsed, zone) == getattr(original, zone)
    if zone == "signed_seal":
        assert parsed == original


def test_v4_single_character_cert_reference():
    """Test a certificate reference that ends on an escaped single character."""
    seal = DigitalSealV4(cert_reference="A")
    parsed = DigitalSealV4()
    parsed.header_zone = seal.header_zone
    assert parsed.cert_reference == "A"


def test_signed_seal_with_marker_byte_inside_feature():
    """Test that a 0xFF inside a feature value is not taken as the signature marker."""
    seal = DigitalSealV4(features={0x01: b"\xff\xff\xff"})
    parsed = DigitalSealV4()
    parsed.signed_seal = seal.signed_seal
    assert parsed.get_feature(0x01) == b"\xff\xff\xff"


def test_corrupted_signature_length():
    """Test a signature length that disagrees with the data."""
    seal = _sample_v3()
    data = bytearray(seal.signed_seal)
    marker = len(seal.unsigned_seal)
    data[marker + 1] = 0x41
    parsed = DigitalSealV3()
    with pytest.raises(LengthMismatchError):
        parsed.signed_seal = bytes(data)


def test_bad_signature_marker():
    """Test a signature zone without the 0xFF marker."""
    with pytest.raises(FormatError):
        DigitalSealV3().signature_zone = bytes([0xFE, 0x01, 0x00])
    with pytest.raises(FormatError):
        DigitalSealV3().signature_zone = b""


def test_truncated_message_zone():
    """Test a feature whose length runs past the end of the data."""
    with pytest.raises(LengthMismatchError):
        DigitalSealV4().message_zone = bytes([0x01, 0x05, 0x01, 0x02])
    with pytest.raises(LengthMismatchError):
        DigitalSealV4().message_zone = bytes([0x01])


def test_duplicate_feature_tag_keeps_last(caplog):
    """Test that a repeated tag keeps the last value and warns."""
    seal = DigitalSealV4()
    with caplog.at_level(logging.WARNING):
        seal.message_zone = bytes([0x01, 0x01, 0xAA, 0x02, 0x00, 0x01, 0x01, 0xBB])
    assert seal.features == {0x01: b"\xbb", 0x02: b""}
    assert "Duplicate" in caplog.text


def test_header_with_trailing_bytes():
    """Test that a header zone must be exactly one header."""
    seal = DigitalSealV3()
    with pytest.raises(LengthMismatchError):
        seal.header_zone = seal.header_zone + b"\x00"


def test_truncated_header():
    """Test a header that ends early."""
    with pytest.raises(LengthMismatchError):
        DigitalSealV3().header_zone = DigitalSealV3().header_zone[:12]


def test_failed_parse_leaves_seal_unchanged():
    """Test that zone assignment is all-or-nothing."""
    seal = _sample_v4()
    before = seal.to_dict()
    other = DigitalSealV4(authority_code="UTO", features={0x09: b"\x01"})
    corrupted = bytearray(other.signed_seal)
    corrupted[len(other.unsigned_seal) + 1] = 0x7F

    with pytest.raises(LengthMismatchError):
        seal.signed_seal = bytes(corrupted)

    assert seal.to_dict() == before


def test_version_and_magic_checks():
    """Test the magic and version bytes."""
    with pytest.raises(FormatError):
        DigitalSealV3().signed_seal = _sample_v4().signed_seal
    with pytest.raises(FormatError):
        check_magic_and_version(bytes([0xDD, 0x02]))
    with pytest.raises(FormatError):
        check_magic_and_version(bytes([0xDC, 0x04]))
    with pytest.raises(LengthMismatchError):
        check_magic_and_version(b"\xdc")
    assert check_magic_and_version(bytes([0xDC, 0x03])) == SealVersion.V4


def test_decode_seal_dispatches_on_version():
    """Test decoding seals of either version."""
    v3 = decode_seal(_sample_v3().signed_seal)
    v4 = decode_seal(_sample_v4().unsigned_seal, signed=False)
    assert isinstance(v3, DigitalSealV3)
    assert v3 == _sample_v3()
    assert isinstance(v4, DigitalSealV4)
    assert v4.features == _sample_v4().features


def test_field_validation():
    """Test rejected seal field values."""
    seal = DigitalSealV3()
    with pytest.raises(ValidationError):
        seal.type_category = 0
    with pytest.raises(ValidationError):
        seal.feature_definition = 255
    with pytest.raises(ValidationError):
        seal.cert_reference = "0000"
    with pytest.raises(ValidationError):
        seal.identifier_code = "U1SS"
    with pytest.raises(ValidationError):
        seal.authority_code = "UTOP"
    with pytest.raises(ValidationError):
        seal.set_feature(0x01, bytes(256))
    with pytest.raises(ValidationError):
        seal.set_feature(0xFF, b"\x00")
    with pytest.raises(ValidationError):
        DigitalSealV4().cert_reference = ""
    assert seal == DigitalSealV3()


def test_features_are_copied():
    """Test that the features mapping cannot be mutated from outside."""
    seal = DigitalSealV4()
    features = seal.features
    features[0x02] = b"\x01"
    assert seal.get_feature(0x02) is None
    seal.set_feature(0x02, b"\x01")
    seal.remove_feature(0x02)
    assert seal.features == {}
