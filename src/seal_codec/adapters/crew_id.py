"""Crew identification card: TD1 card with a version 4 seal (type category 0x08)."""

from __future__ import annotations

from typing import Any, ClassVar

from seal_codec.adapters.base import TD1SealedDocument
from seal_codec.documents.td1 import TD1Document
from seal_codec.documents.travel_document import parse_mrz_date, verify_field
from seal_codec.utils.check_digit import compute_check_digit
from seal_codec.utils.mrz_format import date_to_mrz

EMPLOYER_CODE_TAG = 0x02


class CrewIDDocument(TD1Document):
    """TD1 layout with the birth date, gender and nationality masked on line 2.

    Line 2 reads ``<<<<<<0<`` + expiry + cd + ``XXX`` + optional[15:26] + composite cd.
    """

    MASKED_BIRTH = "<<<<<<0<"
    MASKED_NATIONALITY = "XXX"

    def _unchecked_line2(self) -> str:
        expiry = date_to_mrz(self.expiration_date)
        return (
            self.MASKED_BIRTH
            + expiry
            + compute_check_digit(expiry)
            + self.MASKED_NATIONALITY
            + self.optional_data_mrz[15:]
        )

    def _parse_line2(self, value: str) -> None:
        verify_field(value[8:14], value[14], "date of expiration")
        self.expiration_date = parse_mrz_date(value[8:14])


class CrewID(TD1SealedDocument):
    """Crew ID with the employer code (0x02) as a hex feature of the seal."""

    DOCUMENT_CLASS: ClassVar[type[TD1Document]] = CrewIDDocument
    TYPE_CATEGORY: ClassVar[int] = 0x08
    decode_birth_and_nationality: ClassVar[bool] = False

    def __init__(self, document: CrewIDDocument | None = None, seal: Any = None, **fields: Any) -> None:
        self.employer = "Unknown"
        self.url = ""
        super().__init__(document, seal, **fields)

    @property
    def employer_code(self) -> str | None:
        return self._get_hex_feature(EMPLOYER_CODE_TAG)

    @employer_code.setter
    def employer_code(self, code: str) -> None:
        self._set_hex_feature(EMPLOYER_CODE_TAG, code, "Employer code (employer_code)")
