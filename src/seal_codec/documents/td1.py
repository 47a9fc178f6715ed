"""TD1-sized documents: three MRZ lines of 30 characters."""

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


class TD1Document(TravelDocument):
    """
    ID-card sized document.

    Layout:
        line 1: type(2) authority(3) number(9) cd optional[0:15]
        line 2: birth(6) cd gender expiry(6) cd nationality(3) optional[15:26] composite cd
        line 3: name(30)
    """

    LINE_LENGTH: ClassVar[int] = 30
    LINE_COUNT: ClassVar[int] = 3
    NAME_WIDTH: ClassVar[int] = 30
    OPTIONAL_DATA_WIDTH: ClassVar[int] = 26

    @property
    def mrz_line1(self) -> str:
        return (
            self.type_code_mrz
            + self.authority_code_mrz
            + self.number_mrz
            + compute_check_digit(self.number_mrz)
            + self.optional_data_mrz[0:15]
        )

    @mrz_line1.setter
    def mrz_line1(self, value: str) -> None:
        self._check_line(value, 1)
        scratch = self.copy()
        scratch._parse_line1(value)
        tail = self.optional_data_mrz[15:]
        scratch.optional_data = mrz_to_text(value[15:30] + tail)
        self._adopt(scratch)

    @property
    def mrz_line2(self) -> str:
        unchecked = self._unchecked_line2()
        return unchecked + compute_check_digit(self._composite_source(self.mrz_line1, unchecked))

    @mrz_line2.setter
    def mrz_line2(self, value: str) -> None:
        self._check_line(value, 2)
        scratch = self.copy()
        scratch._parse_line2(value)
        head = self.optional_data_mrz[0:15]
        scratch.optional_data = mrz_to_text(head + value[18:29])
        self._adopt(scratch)

    @property
    def mrz_line3(self) -> str:
        return self.full_name_mrz

    @mrz_line3.setter
    def mrz_line3(self, value: str) -> None:
        self._check_line(value, 3)
        self.full_name = mrz_to_full_name(value)

    @property
    def mrz_lines(self) -> list[str]:
        return [self.mrz_line1, self.mrz_line2, self.mrz_line3]

    def _unchecked_line2(self) -> str:
        birth = date_to_mrz(self.birth_date)
        expiry = date_to_mrz(self.expiration_date)
        return (
            birth
            + compute_check_digit(birth)
            + gender_marker_to_mrz(self.gender_marker)
            + expiry
            + compute_check_digit(expiry)
            + self.nationality_code_mrz
            + self.optional_data_mrz[15:]
        )

    @staticmethod
    def _composite_source(line1: str, unchecked_line2: str) -> str:
        return line1[5:] + unchecked_line2[0:7] + unchecked_line2[8:15] + unchecked_line2[18:29]

    def _parse_mrz(self, value: str) -> None:
        line1, line2, line3 = value[0:30], value[30:60], value[60:90]
        verify_field(self._composite_source(line1, line2), line2[29], "Machine-Readable Zone (MRZ) lines 1 and 2")
        self._parse_line1(line1)
        self._parse_line2(line2)
        self.full_name = mrz_to_full_name(line3)
        self.optional_data = mrz_to_text(line1[15:30] + line2[18:29])

    def _parse_line1(self, value: str) -> None:
        verify_field(value[5:14], value[14], "document number")
        self.type_code = mrz_field_to_text(value[0:2])
        self.authority_code = mrz_field_to_text(value[2:5])
        self.number = mrz_field_to_text(value[5:14])

    def _parse_line2(self, value: str) -> None:
        verify_field(value[0:6], value[6], "date of birth")
        verify_field(value[8:14], value[14], "date of expiration")
        self.birth_date = parse_mrz_date(value[0:6])
        self.gender_marker = value[7]
        self.expiration_date = parse_mrz_date(value[8:14])
        self.nationality_code = mrz_field_to_text(value[15:18])
