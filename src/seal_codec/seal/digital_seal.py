"""
Visible Digital Seal (ICAO Doc 9303 Part 13) encoding and decoding.

A seal is three concatenated zones:

- header: magic ``DC``, version, C40 authority, C40 signer identifier and
  certificate reference, issue and signature dates, feature definition
  reference, document type category
- message: ``tag | length | value`` document features in insertion order
- signature: marker ``FF``, DER length, signature bytes

Zones are derived from the seal fields on read. Assigning a zone parses it
into a scratch copy first, so a failed parse leaves the seal untouched.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, ClassVar

from seal_codec.types import (
    FILLER,
    SEAL_MAGIC,
    SIGNATURE_MARKER,
    FormatError,
    LengthMismatchError,
    SealVersion,
    ValidationError,
)
from seal_codec.utils.c40 import c40_decode, c40_encode, c40_encoded_length
from seal_codec.utils.dates import SEAL_DATE_LENGTH, bytes_to_date, date_to_bytes, parse_date
from seal_codec.utils.der_length import der_to_length, length_to_der
from seal_codec.utils.mrz_format import (
    raise_for_problems,
    validate_hex_string,
    validate_identifier_code,
    validate_mrz_string,
)

logger = logging.getLogger(__name__)

DEFAULT_SIGNATURE_LENGTH = 64
MAX_FEATURE_LENGTH = 255
AUTHORITY_BLOCK_LENGTH = 2


class DigitalSeal:
    """Fields and zone codec shared by every seal version."""

    version: ClassVar[SealVersion]

    def __init__(
        self,
        authority_code: str = "UTO",
        identifier_code: str = "UTSS",
        cert_reference: str = "00000",
        issue_date: date | str = "2007-04-15",
        signature_date: date | str = "2007-04-15",
        feature_definition: int = 0x01,
        type_category: int = 0x01,
        features: dict[int, bytes] | None = None,
        signature_data: bytes | None = None,
    ) -> None:
        self.authority_code = authority_code
        self.identifier_code = identifier_code
        self.cert_reference = cert_reference
        self.issue_date = issue_date
        self.signature_date = signature_date
        self.feature_definition = feature_definition
        self.type_category = type_category
        self.features = features or {}
        self.signature_data = bytes(DEFAULT_SIGNATURE_LENGTH) if signature_data is None else signature_data

    # Fields

    @property
    def authority_code(self) -> str:
        """Issuing authority code (1-3 characters, ICAO 9303-3)."""
        return self._authority_code

    @authority_code.setter
    def authority_code(self, value: str) -> None:
        value = str(value).upper()
        raise_for_problems("Issuing authority (authority_code)", validate_mrz_string(value, 1, 3))
        self._authority_code = value

    @property
    def identifier_code(self) -> str:
        """Signer identifier: 2-letter country code followed by 2 alphanumerics."""
        return self._identifier_code

    @identifier_code.setter
    def identifier_code(self, value: str) -> None:
        value = str(value).upper()
        raise_for_problems("Signer identifier (identifier_code)", validate_identifier_code(value))
        self._identifier_code = value

    @property
    def cert_reference(self) -> str:
        return self._cert_reference

    @cert_reference.setter
    def cert_reference(self, value: str) -> None:
        value = str(value).upper()
        raise_for_problems("Certificate reference (cert_reference)", self._cert_reference_problems(value))
        self._cert_reference = value

    @property
    def issue_date(self) -> date:
        return self._issue_date

    @issue_date.setter
    def issue_date(self, value: date | str) -> None:
        value = parse_date(value, "Issue date (issue_date)")
        date_to_bytes(value)
        self._issue_date = value

    @property
    def signature_date(self) -> date:
        return self._signature_date

    @signature_date.setter
    def signature_date(self, value: date | str) -> None:
        value = parse_date(value, "Signature date (signature_date)")
        date_to_bytes(value)
        self._signature_date = value

    @property
    def feature_definition(self) -> int:
        """Document feature definition reference (1-254)."""
        return self._feature_definition

    @feature_definition.setter
    def feature_definition(self, value: int) -> None:
        self._feature_definition = _validate_byte_range(value, "Document feature definition reference")

    @property
    def type_category(self) -> int:
        """Document type category (1-254)."""
        return self._type_category

    @type_category.setter
    def type_category(self, value: int) -> None:
        self._type_category = _validate_byte_range(value, "Document type category")

    @property
    def features(self) -> dict[int, bytes]:
        """Copy of the document features, keyed by tag in insertion order."""
        return dict(self._features)

    @features.setter
    def features(self, value: dict[int, bytes]) -> None:
        checked: dict[int, bytes] = {}
        for tag, data in value.items():
            checked[_validate_feature_tag(tag)] = _validate_feature_value(tag, data)
        self._features = checked

    def get_feature(self, tag: int) -> bytes | None:
        return self._features.get(tag)

    def set_feature(self, tag: int, value: bytes) -> None:
        """Add or replace one document feature; replacing keeps its position."""
        self._features[_validate_feature_tag(tag)] = _validate_feature_value(tag, value)

    def remove_feature(self, tag: int) -> None:
        self._features.pop(tag, None)

    @property
    def signature_data(self) -> bytes:
        return self._signature_data

    @signature_data.setter
    def signature_data(self, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray)):
            msg = f"Signature data must be bytes, got {type(value).__name__}"
            raise ValidationError(msg)
        length_to_der(len(value))
        self._signature_data = bytes(value)

    # Zones

    @property
    def header_zone(self) -> bytes:
        output = bytearray([SEAL_MAGIC, self.version])
        output += c40_encode(self.authority_code.ljust(3, FILLER))
        output += self._encode_identifier_block()
        output += date_to_bytes(self.issue_date)
        output += date_to_bytes(self.signature_date)
        output.append(self.feature_definition)
        output.append(self.type_category)
        return bytes(output)

    @header_zone.setter
    def header_zone(self, value: bytes) -> None:
        scratch = self.copy()
        end = scratch._parse_header(bytes(value))
        if end != len(value):
            msg = f"Header zone has {len(value) - end} unexpected trailing bytes"
            raise LengthMismatchError(msg)
        self._adopt(scratch)

    @property
    def message_zone(self) -> bytes:
        output = bytearray()
        for tag, data in self._features.items():
            output.append(tag)
            output.append(len(data))
            output += data
        return bytes(output)

    @message_zone.setter
    def message_zone(self, value: bytes) -> None:
        scratch = self.copy()
        scratch._parse_message(bytes(value), 0, stop_at_marker=False)
        self._adopt(scratch)

    @property
    def signature_zone(self) -> bytes:
        return bytes([SIGNATURE_MARKER]) + length_to_der(len(self.signature_data)) + self.signature_data

    @signature_zone.setter
    def signature_zone(self, value: bytes) -> None:
        scratch = self.copy()
        scratch._parse_signature(bytes(value), 0)
        self._adopt(scratch)

    @property
    def unsigned_seal(self) -> bytes:
        return self.header_zone + self.message_zone

    @unsigned_seal.setter
    def unsigned_seal(self, value: bytes) -> None:
        scratch = self.copy()
        value = bytes(value)
        offset = scratch._parse_header(value)
        scratch._parse_message(value, offset, stop_at_marker=False)
        self._adopt(scratch)

    @property
    def signed_seal(self) -> bytes:
        return self.header_zone + self.message_zone + self.signature_zone

    @signed_seal.setter
    def signed_seal(self, value: bytes) -> None:
        scratch = self.copy()
        value = bytes(value)
        offset = scratch._parse_header(value)
        offset = scratch._parse_message(value, offset, stop_at_marker=True)
        scratch._parse_signature(value, offset)
        self._adopt(scratch)

    # Parsing helpers; each one mutates only the instance it runs on

    def _parse_header(self, data: bytes) -> int:
        """Parse a header starting at offset 0 and return the offset after it."""
        check_magic_and_version(data, self.version)
        offset = 2
        authority_block = _take(data, offset, AUTHORITY_BLOCK_LENGTH, "issuing authority")
        self.authority_code = c40_decode(authority_block).rstrip(FILLER + " ")
        offset += AUTHORITY_BLOCK_LENGTH

        identifier, cert_reference, consumed = self._decode_identifier_block(data, offset)
        self.identifier_code = identifier
        self.cert_reference = cert_reference
        offset += consumed

        self.issue_date = bytes_to_date(_take(data, offset, SEAL_DATE_LENGTH, "issue date"))
        offset += SEAL_DATE_LENGTH
        self.signature_date = bytes_to_date(_take(data, offset, SEAL_DATE_LENGTH, "signature date"))
        offset += SEAL_DATE_LENGTH
        self.feature_definition, self.type_category = _take(data, offset, 2, "feature definition and type category")
        offset += 2
        logger.debug(
            "Parsed %s seal header: authority=%s identifier=%s cert=%s",
            self.version.name, self.authority_code, self.identifier_code, self.cert_reference,
        )
        return offset

    def _parse_message(self, data: bytes, offset: int, *, stop_at_marker: bool) -> int:
        features: dict[int, bytes] = {}
        while offset < len(data):
            if stop_at_marker and data[offset] == SIGNATURE_MARKER:
                break
            if offset + 2 > len(data):
                msg = f"Document feature at offset {offset} has a tag but no length"
                raise LengthMismatchError(msg)
            tag, length = data[offset], data[offset + 1]
            feature = data[offset + 2 : offset + 2 + length]
            if len(feature) != length:
                msg = (
                    f"Length '{length}' of document feature 0x{tag:02X} does not match "
                    f"the actual length ({len(feature)})"
                )
                raise LengthMismatchError(msg)
            if tag in features:
                logger.warning("Duplicate document feature tag 0x%02X; keeping the last value", tag)
            features[_validate_feature_tag(tag)] = feature
            offset += 2 + length
        self._features = features
        logger.debug("Parsed %d document features", len(features))
        return offset

    def _parse_signature(self, data: bytes, offset: int) -> None:
        if offset >= len(data):
            msg = "Seal ends before the signature marker"
            raise FormatError(msg)
        if data[offset] != SIGNATURE_MARKER:
            msg = f"Value '{data[offset]:02X}' does not match signature marker ({SIGNATURE_MARKER:02X})"
            raise FormatError(msg)
        offset += 1
        length, consumed = der_to_length(data[offset:])
        signature = data[offset + consumed :]
        if len(signature) != length:
            msg = f"Length '{length}' of signature does not match the actual length ({len(signature)})"
            raise LengthMismatchError(msg)
        self._signature_data = signature

    # Version-specific identifier block

    def _cert_reference_problems(self, value: str) -> list[str]:
        raise NotImplementedError

    def _encode_identifier_block(self) -> bytes:
        raise NotImplementedError

    def _decode_identifier_block(self, data: bytes, offset: int) -> tuple[str, str, int]:
        raise NotImplementedError

    # Bookkeeping

    def copy(self) -> DigitalSeal:
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._features = dict(self._features)
        return clone

    def _adopt(self, other: DigitalSeal) -> None:
        self.__dict__.update(other.__dict__)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": int(self.version),
            "authority_code": self.authority_code,
            "identifier_code": self.identifier_code,
            "cert_reference": self.cert_reference,
            "issue_date": self.issue_date.isoformat(),
            "signature_date": self.signature_date.isoformat(),
            "feature_definition": self.feature_definition,
            "type_category": self.type_category,
            "features": {f"0x{tag:02X}": data.hex().upper() for tag, data in self._features.items()},
            "signature_data": self.signature_data.hex().upper(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DigitalSeal):
            return NotImplemented
        return self.version == other.version and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(authority_code={self.authority_code!r}, "
            f"identifier_code={self.identifier_code!r}, cert_reference={self.cert_reference!r}, "
            f"features={len(self._features)})"
        )


class DigitalSealV3(DigitalSeal):
    """Version 3 seal: certificate reference is exactly 5 hex characters."""

    version: ClassVar[SealVersion] = SealVersion.V3

    CERT_REFERENCE_LENGTH = 5
    IDENTIFIER_BLOCK_LENGTH = 6

    def _cert_reference_problems(self, value: str) -> list[str]:
        problems = validate_hex_string(value)
        if len(value) != self.CERT_REFERENCE_LENGTH:
            problems.insert(0, f"must be a hex string of exactly {self.CERT_REFERENCE_LENGTH} characters")
        return problems

    def _encode_identifier_block(self) -> bytes:
        return c40_encode(self.identifier_code + self.cert_reference)

    def _decode_identifier_block(self, data: bytes, offset: int) -> tuple[str, str, int]:
        text = c40_decode(_take(data, offset, self.IDENTIFIER_BLOCK_LENGTH, "signer identifier"))
        return text[:4], text[4:], self.IDENTIFIER_BLOCK_LENGTH


class DigitalSealV4(DigitalSeal):
    """Version 4 seal: certificate reference of variable length.

    The identifier block carries the reference length as two hex digits
    between the signer identifier and the reference itself.
    """

    version: ClassVar[SealVersion] = SealVersion.V4

    MAX_CERT_REFERENCE_LENGTH = 0xFF
    # identifier (4) + reference length (2) fit in two C40 words
    PREFIX_BYTES = 4

    def _cert_reference_problems(self, value: str) -> list[str]:
        return validate_hex_string(value, 1, self.MAX_CERT_REFERENCE_LENGTH)

    def _encode_identifier_block(self) -> bytes:
        return c40_encode(f"{self.identifier_code}{len(self.cert_reference):02X}{self.cert_reference}")

    def _decode_identifier_block(self, data: bytes, offset: int) -> tuple[str, str, int]:
        prefix = c40_decode(_take(data, offset, self.PREFIX_BYTES, "signer identifier"))
        try:
            cert_length = int(prefix[4:6], 16)
        except ValueError as e:
            msg = f"Certificate reference length {prefix[4:6]!r} is not a hex number"
            raise FormatError(msg) from e
        block_length = c40_encoded_length(6 + cert_length)
        text = c40_decode(_take(data, offset, block_length, "certificate reference"))
        cert_reference = text[6:]
        if len(cert_reference) != cert_length:
            msg = f"Certificate reference length {cert_length} does not match decoded reference {cert_reference!r}"
            raise LengthMismatchError(msg)
        return prefix[:4], cert_reference, block_length


SEAL_CLASSES: dict[int, type[DigitalSeal]] = {
    SealVersion.V3: DigitalSealV3,
    SealVersion.V4: DigitalSealV4,
}


def check_magic_and_version(data: bytes, version: int | None = None) -> int:
    """Validate the first two header bytes and return the version byte."""
    if len(data) < 2:
        msg = "Data is too short to be an ICAO Digital Seal"
        raise LengthMismatchError(msg)
    if data[0] != SEAL_MAGIC:
        msg = f"Value '{data[0]:02X}' is not an ICAO Digital Seal ({SEAL_MAGIC:02X})"
        raise FormatError(msg)
    if version is not None and data[1] != version:
        msg = f"Value '{data[1]:02X}' does not match the expected seal version ({version:02X})"
        raise FormatError(msg)
    if version is None and data[1] not in SEAL_CLASSES:
        msg = f"Unsupported seal version '{data[1]:02X}'"
        raise FormatError(msg)
    return data[1]


def decode_seal(data: bytes, *, signed: bool = True) -> DigitalSeal:
    """Decode a seal of either version, choosing the class from the version byte."""
    seal = SEAL_CLASSES[check_magic_and_version(data)]()
    if signed:
        seal.signed_seal = data
    else:
        seal.unsigned_seal = data
    return seal


def _take(data: bytes, offset: int, length: int, what: str) -> bytes:
    chunk = data[offset : offset + length]
    if len(chunk) != length:
        msg = f"Seal ends inside the {what} (needed {length} bytes at offset {offset}, got {len(chunk)})"
        raise LengthMismatchError(msg)
    return chunk


def _validate_byte_range(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 254:
        msg = f"{name} must be in the range between 1-254, got {value!r}"
        raise ValidationError(msg)
    return value


def _validate_feature_tag(tag: int) -> int:
    return _validate_byte_range(tag, "Document feature tag")


def _validate_feature_value(tag: int, value: bytes) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        msg = f"Document feature 0x{tag:02X} must be bytes, got {type(value).__name__}"
        raise ValidationError(msg)
    if len(value) > MAX_FEATURE_LENGTH:
        msg = f"Document feature 0x{tag:02X} is {len(value)} bytes; at most {MAX_FEATURE_LENGTH} fit"
        raise ValidationError(msg)
    return bytes(value)
