"""Machine readable visas: two MRZ lines without a composite check digit.

MRV-A stickers use 44-character lines, MRV-B stickers 36.
"""

from __future__ import annotations

from datetime import date
from typing import Any, ClassVar

from seal_codec.documents.travel_document import (
    TravelDocument,
    mrz_field_to_text,
    parse_mrz_date,
    verify_field,
)
from seal_codec.utils.check_digit import compute_check_digit
from seal_codec.utils.dates import parse_date
from seal_codec.utils.mrz_format import (
    date_to_mrz,
    date_to_viz,
    gender_marker_to_mrz,
    mrz_to_full_name,
    mrz_to_text,
    pad_mrz_string,
    raise_for_problems,
    validate_mrz_string,
)


class MRVADocument(TravelDocument):
    """
    Full-page machine readable visa (type A).

    The expiration date is the last day the visa is valid (``valid_thru``).
    When ``use_passport_in_mrz`` is set, the MRZ carries the holder's
    passport number instead of the visa number.
    """

    LINE_LENGTH: ClassVar[int] = 44
    LINE_COUNT: ClassVar[int] = 2
    NAME_WIDTH: ClassVar[int] = 39
    OPTIONAL_DATA_WIDTH: ClassVar[int] = 16

    def __init__(
        self,
        *,
        place_of_issue: str = "",
        valid_from: date | str = "2023-09-29",
        number_of_entries: str = "",
        visa_type: str = "",
        additional_info: str = "",
        passport_number: str = "",
        use_passport_in_mrz: bool = False,
        **document_fields: Any,
    ) -> None:
        super().__init__(**document_fields)
        self.place_of_issue = place_of_issue
        self.valid_from = valid_from
        self.number_of_entries = number_of_entries
        self.visa_type = visa_type
        self.additional_info = additional_info
        self.passport_number = passport_number
        self.use_passport_in_mrz = use_passport_in_mrz

    @property
    def valid_thru(self) -> date:
        return self.expiration_date

    @valid_thru.setter
    def valid_thru(self, value: date | str) -> None:
        self.expiration_date = value

    @property
    def valid_from(self) -> date:
        return self._valid_from

    @valid_from.setter
    def valid_from(self, value: date | str) -> None:
        self._valid_from = parse_date(value, "Valid from (valid_from)")

    @property
    def passport_number(self) -> str:
        return self._passport_number

    @passport_number.setter
    def passport_number(self, value: str) -> None:
        value = str(value).upper()
        raise_for_problems("Passport number (passport_number)", validate_mrz_string(value, 0, 9))
        self._passport_number = value

    @property
    def mrz_number(self) -> str:
        number = self.passport_number if self.use_passport_in_mrz else self.number
        return pad_mrz_string(number.replace(" ", "<"), 9)

    @property
    def mrz_line1(self) -> str:
        return self.type_code_mrz + self.authority_code_mrz + self.full_name_mrz

    @property
    def mrz_line2(self) -> str:
        birth = date_to_mrz(self.birth_date)
        valid_thru = date_to_mrz(self.valid_thru)
        return (
            self.mrz_number
            + compute_check_digit(self.mrz_number)
            + self.nationality_code_mrz
            + birth
            + compute_check_digit(birth)
            + gender_marker_to_mrz(self.gender_marker)
            + valid_thru
            + compute_check_digit(valid_thru)
            + self.optional_data_mrz
        )

    @property
    def mrz_lines(self) -> list[str]:
        return [self.mrz_line1, self.mrz_line2]

    def viz_fields(self) -> dict[str, str]:
        fields = super().viz_fields()
        fields.update(
            {
                "place_of_issue": self.place_of_issue.upper(),
                "valid_from": date_to_viz(self.valid_from),
                "valid_thru": date_to_viz(self.valid_thru),
                "number_of_entries": self.number_of_entries.upper(),
                "visa_type": self.visa_type.upper(),
                "additional_info": self.additional_info.upper(),
                "passport_number": self.passport_number,
            }
        )
        return fields

    def _parse_mrz(self, value: str) -> None:
        n = self.LINE_LENGTH
        line1, line2 = value[0:n], value[n : 2 * n]
        verify_field(line2[0:9], line2[9], "document number")
        verify_field(line2[13:19], line2[19], "date of birth")
        verify_field(line2[21:27], line2[27], "valid thru date")
        self.type_code = mrz_field_to_text(line1[0:2])
        self.authority_code = mrz_field_to_text(line1[2:5])
        self.full_name = mrz_to_full_name(line1[5:n])
        if self.use_passport_in_mrz:
            self.passport_number = mrz_field_to_text(line2[0:9])
        else:
            self.number = mrz_field_to_text(line2[0:9])
        self.nationality_code = mrz_field_to_text(line2[10:13])
        self.birth_date = parse_mrz_date(line2[13:19])
        self.gender_marker = line2[20]
        self.valid_thru = parse_mrz_date(line2[21:27])
        self.optional_data = mrz_to_text(line2[28:n])

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "place_of_issue": self.place_of_issue,
                "valid_from": self.valid_from.isoformat(),
                "number_of_entries": self.number_of_entries,
                "visa_type": self.visa_type,
                "additional_info": self.additional_info,
                "passport_number": self.passport_number,
                "use_passport_in_mrz": self.use_passport_in_mrz,
            }
        )
        return data


class MRVBDocument(MRVADocument):
    """
    Smaller machine readable visa (type B).

    Same fields and layout as MRV-A, with 36-character lines:
        line 1: type(2) authority(3) name(31)
        line 2: number(9) cd nationality(3) birth(6) cd gender valid thru(6) cd
                optional(8)
    """

    LINE_LENGTH: ClassVar[int] = 36
    NAME_WIDTH: ClassVar[int] = 31
    OPTIONAL_DATA_WIDTH: ClassVar[int] = 8
