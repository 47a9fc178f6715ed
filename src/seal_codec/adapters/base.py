"""
Documents that carry their own MRZ inside a version 4 digital seal.

An adapter owns a travel document and a seal. The document is the source
of truth for the MRZ fields; ``fields_to_seal`` writes them into the seal
as a C40 feature (0x01, or 0x02 for MRV-B visas) and runs after every
change made through the adapter.
Assigning seal bytes runs the other direction: the seal is parsed and the
document rebuilt from that feature, and both are replaced only once every
check digit has been verified.
"""

from __future__ import annotations

import copy
import logging
from datetime import date
from typing import Any, ClassVar

from seal_codec.config import get_settings
from seal_codec.documents.travel_document import TravelDocument, mrz_field_to_text, verify_field
from seal_codec.seal.digital_seal import DigitalSeal, DigitalSealV4
from seal_codec.types import FILLER, FormatError, LengthMismatchError, ValidationError
from seal_codec.utils.c40 import c40_decode, c40_encode
from seal_codec.utils.dates import mrz_to_date
from seal_codec.utils.hex_codes import bytes_to_hex_code, hex_code_to_bytes
from seal_codec.utils.mrz_format import mrz_to_full_name

logger = logging.getLogger(__name__)

MRZ_FEATURE_TAG = 0x01
MRVB_MRZ_FEATURE_TAG = 0x02

SEAL_FIELDS = frozenset({"identifier_code", "cert_reference", "signature_date", "signature_data"})


class SealedDocument:
    """Base class for a travel document paired with a digital seal."""

    DOCUMENT_CLASS: ClassVar[type[TravelDocument]]
    TYPE_CATEGORY: ClassVar[int]
    SEAL_MRZ_LENGTH: ClassVar[int]
    FEATURE_DEFINITION: ClassVar[int] = 0x01
    MRZ_TAG: ClassVar[int] = MRZ_FEATURE_TAG

    def __init__(
        self,
        document: TravelDocument | None = None,
        seal: DigitalSeal | None = None,
        **fields: Any,
    ) -> None:
        self.document = document if document is not None else self.DOCUMENT_CLASS()
        self.seal = (
            seal
            if seal is not None
            else DigitalSealV4(
                authority_code=self.document.authority_code,
                type_category=self.TYPE_CATEGORY,
                feature_definition=self.FEATURE_DEFINITION,
            )
        )
        if fields:
            self.update(**fields)
        else:
            self.fields_to_seal()

    # Synchronization

    def seal_mrz_text(self) -> str:
        """The slice of the MRZ stored in the seal."""
        raise NotImplementedError

    def fields_to_seal(self) -> None:
        """Write the document's MRZ fields into the seal's MRZ feature."""
        self.seal.set_feature(self.MRZ_TAG, c40_encode(self.seal_mrz_text()))

    def seal_to_fields(self, seal: DigitalSeal) -> TravelDocument:
        """Build a document from a seal's MRZ feature without touching this adapter.

        Raises:
            FormatError: If the seal has no MRZ feature
            IntegrityError: If an embedded check digit does not match
        """
        feature = seal.get_feature(self.MRZ_TAG)
        if feature is None:
            msg = f"Seal has no MRZ document feature (0x{self.MRZ_TAG:02X})"
            raise FormatError(msg)
        text = c40_decode(feature, filler=FILLER)
        if len(text) != self.SEAL_MRZ_LENGTH:
            msg = f"Seal MRZ has {len(text)} characters; {type(self).__name__} expects {self.SEAL_MRZ_LENGTH}"
            raise LengthMismatchError(msg)
        document = self.document.copy()
        self.decode_seal_mrz(text, document)
        self.decode_seal_features(seal, document)
        return document

    def decode_seal_mrz(self, text: str, document: TravelDocument) -> None:
        raise NotImplementedError

    def decode_seal_features(self, seal: DigitalSeal, document: TravelDocument) -> None:
        """Copy document fields carried by seal features other than the MRZ."""

    def update(self, **fields: Any) -> None:
        """Set document, seal and adapter fields together, then re-sync the seal.

        Nothing changes if any value is rejected.
        """
        scratch = self._scratch()
        for name, value in fields.items():
            if _is_property(type(scratch), name):
                setattr(scratch, name, value)
            elif _is_property(type(scratch.document), name) or name in vars(scratch.document):
                setattr(scratch.document, name, value)
                if name == "authority_code":
                    scratch.seal.authority_code = scratch.document.authority_code
            elif name in SEAL_FIELDS:
                setattr(scratch.seal, name, value)
            elif name in scratch.__dict__:
                setattr(scratch, name, value)
            else:
                msg = f"{type(self).__name__} has no field {name!r}"
                raise ValidationError(msg)
        scratch.fields_to_seal()
        self._adopt(scratch)

    def _scratch(self) -> SealedDocument:
        scratch = copy.copy(self)
        scratch.document = self.document.copy()
        scratch.seal = self.seal.copy()
        return scratch

    def _adopt(self, other: SealedDocument) -> None:
        self.__dict__.update(other.__dict__)

    def _ingest(self, zone: str, value: bytes) -> None:
        seal = self.seal.copy()
        setattr(seal, zone, value)
        document = self.seal_to_fields(seal)
        self.seal = seal
        self.document = document
        logger.debug("%s fields loaded from seal %s", type(self).__name__, zone)

    # Document passthroughs

    @property
    def issue_date(self) -> date:
        return self.seal.issue_date

    @issue_date.setter
    def issue_date(self, value: date | str) -> None:
        self.seal.issue_date = value

    @property
    def mrz_lines(self) -> list[str]:
        return self.document.mrz_lines

    @property
    def machine_readable_zone(self) -> str:
        return self.document.machine_readable_zone

    @machine_readable_zone.setter
    def machine_readable_zone(self, value: str) -> None:
        scratch = self._scratch()
        scratch.document.machine_readable_zone = value
        scratch.seal.authority_code = scratch.document.authority_code
        scratch.fields_to_seal()
        self._adopt(scratch)

    # Seal zones

    @property
    def header_zone(self) -> bytes:
        return self.seal.header_zone

    @header_zone.setter
    def header_zone(self, value: bytes) -> None:
        scratch = self._scratch()
        scratch.seal.header_zone = value
        scratch.document.authority_code = scratch.seal.authority_code
        scratch.fields_to_seal()
        self._adopt(scratch)

    @property
    def message_zone(self) -> bytes:
        return self.seal.message_zone

    @message_zone.setter
    def message_zone(self, value: bytes) -> None:
        self._ingest("message_zone", value)

    @property
    def signature_zone(self) -> bytes:
        return self.seal.signature_zone

    @signature_zone.setter
    def signature_zone(self, value: bytes) -> None:
        self.seal.signature_zone = value

    @property
    def unsigned_seal(self) -> bytes:
        return self.seal.unsigned_seal

    @unsigned_seal.setter
    def unsigned_seal(self, value: bytes) -> None:
        self._ingest("unsigned_seal", value)

    @property
    def signed_seal(self) -> bytes:
        return self.seal.signed_seal

    @signed_seal.setter
    def signed_seal(self, value: bytes) -> None:
        self._ingest("signed_seal", value)

    # Feature helpers

    def _get_hex_feature(self, tag: int) -> str | None:
        data = self.seal.get_feature(tag)
        return None if data is None else bytes_to_hex_code(data)

    def _set_hex_feature(self, tag: int, code: str, field_name: str) -> None:
        self.seal.set_feature(tag, hex_code_to_bytes(code, field_name))

    def _get_c40_feature(self, tag: int) -> str | None:
        data = self.seal.get_feature(tag)
        return None if data is None else c40_decode(data, filler=" ")

    def _set_c40_feature(self, tag: int, text: str) -> None:
        self.seal.set_feature(tag, c40_encode(text))


class TD1SealedDocument(SealedDocument):
    """Adapter over a TD1 document; the seal stores line1[0:15] + line2[0:18] + line3."""

    SEAL_MRZ_LENGTH: ClassVar[int] = 63
    decode_birth_and_nationality: ClassVar[bool] = True

    def seal_mrz_text(self) -> str:
        line1, line2, line3 = self.mrz_lines
        return line1[0:15] + line2[0:18] + line3

    def decode_seal_mrz(self, text: str, document: TravelDocument) -> None:
        verify_field(text[5:14], text[14:15], "document number")
        verify_field(text[23:29], text[29:30], "date of expiration")
        document.type_code = mrz_field_to_text(text[0:2])
        document.authority_code = mrz_field_to_text(text[2:5])
        document.number = mrz_field_to_text(text[5:14])
        if self.decode_birth_and_nationality:
            verify_field(text[15:21], text[21:22], "date of birth")
            document.birth_date = seal_birth_date(text[15:21])
            document.nationality_code = mrz_field_to_text(text[30:33])
        document.gender_marker = text[22:23]
        document.expiration_date = seal_expiration_date(text[23:29])
        document.full_name = mrz_to_full_name(text[33:])


class TwoLineSealedDocument(SealedDocument):
    """
    Adapter over a two-line document (TD3, MRV-A or MRV-B).

    The seal stores line 1 followed by the first 28 characters of line 2,
    so field offsets in the seal MRZ shift with the line length.
    """

    SEAL_MRZ_LENGTH: ClassVar[int] = 72
    LINE2_PREFIX_LENGTH: ClassVar[int] = 28

    def seal_mrz_text(self) -> str:
        line1, line2 = self.mrz_lines
        return line1 + line2[0 : self.LINE2_PREFIX_LENGTH]

    def decode_seal_mrz(self, text: str, document: TravelDocument) -> None:
        n = len(text) - self.LINE2_PREFIX_LENGTH
        verify_field(text[n : n + 9], text[n + 9 : n + 10], "document number")
        verify_field(text[n + 13 : n + 19], text[n + 19 : n + 20], "date of birth")
        verify_field(text[n + 21 : n + 27], text[n + 27 : n + 28], "date of expiration")
        document.type_code = mrz_field_to_text(text[0:2])
        document.authority_code = mrz_field_to_text(text[2:5])
        document.full_name = mrz_to_full_name(text[5:n])
        self.assign_mrz_number(document, mrz_field_to_text(text[n : n + 9]))
        document.nationality_code = mrz_field_to_text(text[n + 10 : n + 13])
        document.birth_date = seal_birth_date(text[n + 13 : n + 19])
        document.gender_marker = text[n + 20 : n + 21]
        document.expiration_date = seal_expiration_date(text[n + 21 : n + 27])

    def assign_mrz_number(self, document: TravelDocument, number: str) -> None:
        document.number = number


def seal_birth_date(text: str) -> date:
    """Birth dates read back from a seal use the inclusive birth-year pivot."""
    return mrz_to_date(text, get_settings().birth_year_pivot, inclusive=True)


def seal_expiration_date(text: str) -> date:
    """Expiration dates read back from a seal are always in the 2000s."""
    return mrz_to_date(text, 0, century=2000)


def _is_property(cls: type, name: str) -> bool:
    return isinstance(getattr(cls, name, None), property)
