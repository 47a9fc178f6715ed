"""Events visas: MRV-A and MRV-B visas with a version 4 seal (type category 0x0A)."""

from __future__ import annotations

from typing import ClassVar

from seal_codec.adapters.base import MRVB_MRZ_FEATURE_TAG, TwoLineSealedDocument
from seal_codec.documents.mrva import MRVADocument, MRVBDocument
from seal_codec.documents.travel_document import TravelDocument
from seal_codec.seal.digital_seal import DigitalSeal
from seal_codec.types import ValidationError
from seal_codec.utils.c40 import c40_decode, c40_encode

NUMBER_OF_ENTRIES_TAG = 0x03
DURATION_OF_STAY_TAG = 0x04
PASSPORT_NUMBER_TAG = 0x05
VISA_TYPE_CODE_TAG = 0x06
ADDITIONAL_FEATURE_TAG = 0x07

UNLIMITED_ENTRIES = "MULTIPLE"


class EventsVisa(TwoLineSealedDocument):
    """
    Machine readable visa issued for an event.

    Seal features:
        0x01: C40 MRZ
        0x03: number of entries (one byte, 0 means unlimited)
        0x04: duration of stay as [days, months, years]
        0x05: C40 passport number
        0x06: visa type code (hex, up to 4 bytes)
        0x07: additional feature (opaque bytes)
    """

    DOCUMENT_CLASS: ClassVar[type[MRVADocument]] = MRVADocument
    TYPE_CATEGORY: ClassVar[int] = 0x0A

    @property
    def number_of_entries(self) -> str:
        """Entries allowed; 0 or any non-numeric value means unlimited."""
        return self.document.number_of_entries

    @number_of_entries.setter
    def number_of_entries(self, value: int | str) -> None:
        text = str(value).strip()
        entries = int(text) if text.isdigit() else 0
        if not 0 <= entries <= 0xFF:
            msg = f"Number of entries must be between 0 and 255, got {entries}"
            raise ValidationError(msg)
        self.seal.set_feature(NUMBER_OF_ENTRIES_TAG, bytes([entries]))
        self.document.number_of_entries = UNLIMITED_ENTRIES if entries == 0 else str(entries)

    @property
    def duration_of_stay(self) -> list[int] | None:
        data = self.seal.get_feature(DURATION_OF_STAY_TAG)
        return None if data is None else list(data)

    @duration_of_stay.setter
    def duration_of_stay(self, duration: list[int]) -> None:
        if len(duration) != 3 or any(not 0 <= part <= 254 for part in duration):
            msg = (
                "Duration of stay must be a number array [days, months, years] "
                "with each number in the range of 0-254"
            )
            raise ValidationError(msg)
        self.seal.set_feature(DURATION_OF_STAY_TAG, bytes(duration))

    @property
    def passport_number(self) -> str:
        return self.document.passport_number

    @passport_number.setter
    def passport_number(self, value: str) -> None:
        self.document.passport_number = value
        self.seal.set_feature(PASSPORT_NUMBER_TAG, c40_encode(self.document.passport_number))
        if self.document.use_passport_in_mrz:
            self.fields_to_seal()

    @property
    def use_passport_in_mrz(self) -> bool:
        return self.document.use_passport_in_mrz

    @use_passport_in_mrz.setter
    def use_passport_in_mrz(self, value: bool) -> None:
        self.document.use_passport_in_mrz = bool(value)
        self.fields_to_seal()

    @property
    def visa_type_code(self) -> str | None:
        return self._get_hex_feature(VISA_TYPE_CODE_TAG)

    @visa_type_code.setter
    def visa_type_code(self, code: str) -> None:
        self._set_hex_feature(VISA_TYPE_CODE_TAG, code, "Visa type code (visa_type_code)")

    @property
    def additional_feature(self) -> bytes | None:
        return self.seal.get_feature(ADDITIONAL_FEATURE_TAG)

    @additional_feature.setter
    def additional_feature(self, value: bytes) -> None:
        self.seal.set_feature(ADDITIONAL_FEATURE_TAG, value)

    def assign_mrz_number(self, document: TravelDocument, number: str) -> None:
        if document.use_passport_in_mrz:
            document.passport_number = number
        else:
            document.number = number

    def decode_seal_features(self, seal: DigitalSeal, document: TravelDocument) -> None:
        entries = seal.get_feature(NUMBER_OF_ENTRIES_TAG)
        if entries:
            document.number_of_entries = UNLIMITED_ENTRIES if entries[0] == 0 else str(entries[0])
        passport_number = seal.get_feature(PASSPORT_NUMBER_TAG)
        if passport_number is not None:
            document.passport_number = c40_decode(passport_number).replace("<", "")

    def viz_fields(self) -> dict[str, str]:
        fields = self.document.viz_fields()
        fields["duration_of_stay"] = " ".join(str(part) for part in self.duration_of_stay or [])
        return fields


class EventsVisaMRVB(EventsVisa):
    """
    Events visa on a 36-character MRV-B sticker.

    Same features as the MRV-A visa, except the C40 MRZ is stored under
    tag 0x02 and holds line 1 plus the first 28 characters of line 2.
    """

    DOCUMENT_CLASS: ClassVar[type[MRVADocument]] = MRVBDocument
    SEAL_MRZ_LENGTH: ClassVar[int] = 64
    MRZ_TAG: ClassVar[int] = MRVB_MRZ_FEATURE_TAG
