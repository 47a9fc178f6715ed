"""TD2-sized documents: two MRZ lines of 36 characters."""

from __future__ import annotations

from typing import ClassVar

from seal_codec.documents.travel_document import (
    TravelDocument,
    mrz_field_to_text,
    parse_mrz_date,
    verify_field,
)
from seal_codec.utils.check_digit import compute_check_digit
from seal_codec.utils.mrz_format import (
    date_to_mrz,
    gender_marker_to_mrz,
    mrz_to_full_name,
    mrz_to_text,
)


class TD2Document(TravelDocument):
    """
    Official travel document in the TD2 format.

    Layout:
        line 1: type(2) authority(3) name(31)
        line 2: number(9) cd nationality(3) birth(6) cd gender expiry(6) cd
                optional(7) composite cd
    """

    LINE_LENGTH: ClassVar[int] = 36
    LINE_COUNT: ClassVar[int] = 2
    NAME_WIDTH: ClassVar[int] = 31
    OPTIONAL_DATA_WIDTH: ClassVar[int] = 7

    @property
    def mrz_line1(self) -> str:
        return self.type_code_mrz + self.authority_code_mrz + self.full_name_mrz

    @mrz_line1.setter
    def mrz_line1(self, value: str) -> None:
        self._check_line(value, 1)
        scratch = self.copy()
        scratch._parse_line1(value)
        self._adopt(scratch)

    @property
    def mrz_line2(self) -> str:
        birth = date_to_mrz(self.birth_date)
        expiry = date_to_mrz(self.expiration_date)
        unchecked = (
            self.number_mrz
            + compute_check_digit(self.number_mrz)
            + self.nationality_code_mrz
            + birth
            + compute_check_digit(birth)
            + gender_marker_to_mrz(self.gender_marker)
            + expiry
            + compute_check_digit(expiry)
            + self.optional_data_mrz
        )
        return unchecked + compute_check_digit(self._composite_source(unchecked))

    @mrz_line2.setter
    def mrz_line2(self, value: str) -> None:
        self._check_line(value, 2)
        scratch = self.copy()
        scratch._parse_line2(value)
        self._adopt(scratch)

    @property
    def mrz_lines(self) -> list[str]:
        return [self.mrz_line1, self.mrz_line2]

    @staticmethod
    def _composite_source(line2: str) -> str:
        return line2[0:10] + line2[13:20] + line2[21:35]

    def _parse_mrz(self, value: str) -> None:
        self._parse_line1(value[0:36])
        self._parse_line2(value[36:72])

    def _parse_line1(self, value: str) -> None:
        self.type_code = mrz_field_to_text(value[0:2])
        self.authority_code = mrz_field_to_text(value[2:5])
        self.full_name = mrz_to_full_name(value[5:36])

    def _parse_line2(self, value: str) -> None:
        verify_field(self._composite_source(value), value[35], "entire Machine-Readable Zone (MRZ) line 2")
        verify_field(value[0:9], value[9], "document number")
        verify_field(value[13:19], value[19], "date of birth")
        verify_field(value[21:27], value[27], "date of expiration")
        self.number = mrz_field_to_text(value[0:9])
        self.nationality_code = mrz_field_to_text(value[10:13])
        self.birth_date = parse_mrz_date(value[13:19])
        self.gender_marker = value[20]
        self.expiration_date = parse_mrz_date(value[21:27])
        self.optional_data = mrz_to_text(value[28:35])
