"""
Travel document fields shared by every ICAO 9303 layout.

Values are stored raw (dates as ``datetime.date``, names as entered);
MRZ and visual-zone renderings are computed by the formatting functions
in ``seal_codec.utils.mrz_format`` when a layout asks for them.
"""

from __future__ import annotations

from datetime import date
from typing import Any, ClassVar

from seal_codec.config import get_settings
from seal_codec.types import FILLER, FormatError, GenderMarker, IntegrityError, LengthMismatchError, ValidationError
from seal_codec.utils.check_digit import compute_check_digit, verify_check_digit
from seal_codec.utils.dates import mrz_to_date, parse_date
from seal_codec.utils.mrz_format import (
    date_to_viz,
    full_name_to_mrz,
    is_mrz_alphabet,
    normalize_mrz_string,
    optional_data_to_mrz,
    pad_mrz_string,
    raise_for_problems,
    validate_mrz_string,
)
from seal_codec.utils.nationality import check_code


class TravelDocument:
    """Holder and document fields with validating setters.

    Subclasses define the MRZ layout (line count, widths and field
    positions); this class only owns the values.
    """

    LINE_LENGTH: ClassVar[int]
    LINE_COUNT: ClassVar[int]
    NAME_WIDTH: ClassVar[int]
    OPTIONAL_DATA_WIDTH: ClassVar[int]

    def __init__(
        self,
        type_code: str = "UN",
        authority_code: str = "UNK",
        number: str = "111222333",
        birth_date: date | str = "2023-09-29",
        gender_marker: str = "X",
        expiration_date: date | str = "2023-09-29",
        nationality_code: str = "UNK",
        full_name: str = "Mann, Mister",
        optional_data: str = "",
    ) -> None:
        self.type_code = type_code
        self.authority_code = authority_code
        self.number = number
        self.birth_date = birth_date
        self.gender_marker = gender_marker
        self.expiration_date = expiration_date
        self.nationality_code = nationality_code
        self.full_name = full_name
        self.optional_data = optional_data

    @property
    def type_code(self) -> str:
        """Document code, e.g. 'P' for passports or 'AC' for crew certificates."""
        return self._type_code

    @type_code.setter
    def type_code(self, value: str) -> None:
        value = str(value).upper()
        raise_for_problems("Document code (type_code)", validate_mrz_string(value, 1, 2))
        self._type_code = value

    @property
    def authority_code(self) -> str:
        return self._authority_code

    @authority_code.setter
    def authority_code(self, value: str) -> None:
        value = str(value).upper()
        raise_for_problems(
            "Issuing state or organization code (authority_code)", validate_mrz_string(value, 1, 3)
        )
        check_code(value, "Issuing state or organization code (authority_code)")
        self._authority_code = value

    @property
    def number(self) -> str:
        return self._number

    @number.setter
    def number(self, value: str) -> None:
        value = str(value).upper()
        raise_for_problems("Document number (number)", validate_mrz_string(value, 1, 9))
        self._number = value

    @property
    def birth_date(self) -> date:
        return self._birth_date

    @birth_date.setter
    def birth_date(self, value: date | str) -> None:
        self._birth_date = parse_date(value, "Date of birth (birth_date)")

    @property
    def gender_marker(self) -> str:
        return self._gender_marker

    @gender_marker.setter
    def gender_marker(self, value: str) -> None:
        value = str(value).upper()
        if value in (FILLER, " "):
            value = GenderMarker.UNSPECIFIED.value
        if value not in {marker.value for marker in GenderMarker}:
            msg = "Gender marker (gender_marker) must be [F]emale, [M]ale, or Other/Unspecified [X]"
            raise ValidationError(msg)
        self._gender_marker = value

    @property
    def expiration_date(self) -> date:
        return self._expiration_date

    @expiration_date.setter
    def expiration_date(self, value: date | str) -> None:
        self._expiration_date = parse_date(value, "Date of expiration (expiration_date)")

    @property
    def nationality_code(self) -> str:
        return self._nationality_code

    @nationality_code.setter
    def nationality_code(self, value: str) -> None:
        value = str(value).upper()
        raise_for_problems("Nationality code (nationality_code)", validate_mrz_string(value, 1, 3))
        check_code(value, "Nationality code (nationality_code)")
        self._nationality_code = value

    @property
    def full_name(self) -> str:
        """Holder name as 'PRIMARY, SECONDARY', optionally 'national/latin'."""
        return self._full_name

    @full_name.setter
    def full_name(self, value: str) -> None:
        value = str(value)
        normalize_mrz_string(value.rsplit("/", 1)[-1])
        self._full_name = value

    @property
    def optional_data(self) -> str:
        return self._optional_data

    @optional_data.setter
    def optional_data(self, value: str) -> None:
        value = str(value)
        normalize_mrz_string(value)
        self._optional_data = value

    # MRZ field renderings

    @property
    def type_code_mrz(self) -> str:
        return pad_mrz_string(self.type_code, 2)

    @property
    def authority_code_mrz(self) -> str:
        return pad_mrz_string(self.authority_code.replace(" ", FILLER), 3)

    @property
    def number_mrz(self) -> str:
        return pad_mrz_string(self.number.replace(" ", FILLER), 9)

    @property
    def nationality_code_mrz(self) -> str:
        return pad_mrz_string(self.nationality_code.replace(" ", FILLER), 3)

    @property
    def full_name_mrz(self) -> str:
        return full_name_to_mrz(self.full_name, self.NAME_WIDTH)

    @property
    def optional_data_mrz(self) -> str:
        return optional_data_to_mrz(self.optional_data, self.OPTIONAL_DATA_WIDTH)

    def viz_fields(self) -> dict[str, str]:
        """Field values as printed in the visual inspection zone."""
        return {
            "type_code": self.type_code,
            "authority_code": self.authority_code,
            "number": self.number,
            "birth_date": date_to_viz(self.birth_date),
            "gender_marker": self.gender_marker,
            "expiration_date": date_to_viz(self.expiration_date),
            "nationality_code": self.nationality_code,
            "full_name": self.full_name.upper(),
            "optional_data": self.optional_data.upper(),
        }

    # MRZ as a whole

    @property
    def mrz_lines(self) -> list[str]:
        raise NotImplementedError

    @property
    def machine_readable_zone(self) -> str:
        return "".join(self.mrz_lines)

    @machine_readable_zone.setter
    def machine_readable_zone(self, value: str) -> None:
        value = value.replace("\n", "")
        expected = self.LINE_LENGTH * self.LINE_COUNT
        if len(value) != expected:
            msg = (
                f"Length '{len(value)}' does not match the length of a {type(self).__name__} "
                f"Machine-Readable Zone ({expected})"
            )
            raise LengthMismatchError(msg)
        _check_alphabet(value)
        scratch = self.copy()
        scratch._parse_mrz(value)
        self._adopt(scratch)

    def _parse_mrz(self, value: str) -> None:
        raise NotImplementedError

    def _check_line(self, value: str, line_number: int) -> None:
        if len(value) != self.LINE_LENGTH:
            msg = (
                f"Length '{len(value)}' of line {line_number} does not match the length of a "
                f"{type(self).__name__} Machine-Readable Zone line ({self.LINE_LENGTH})"
            )
            raise LengthMismatchError(msg)
        _check_alphabet(value)

    # Bookkeeping

    def copy(self) -> TravelDocument:
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        return clone

    def _adopt(self, other: TravelDocument) -> None:
        self.__dict__.update(other.__dict__)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type_code": self.type_code,
            "authority_code": self.authority_code,
            "number": self.number,
            "birth_date": self.birth_date.isoformat(),
            "gender_marker": self.gender_marker,
            "expiration_date": self.expiration_date.isoformat(),
            "nationality_code": self.nationality_code,
            "full_name": self.full_name,
            "optional_data": self.optional_data,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TravelDocument):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(number={self.number!r}, full_name={self.full_name!r})"


def verify_field(field: str, check_digit: str, description: str) -> None:
    """Raise IntegrityError when a parsed check digit does not match its field."""
    if not verify_check_digit(field, check_digit):
        expected = compute_check_digit(field)
        msg = f"Check digit '{check_digit}' does not match for the check digit on the {description} (expected {expected})"
        raise IntegrityError(msg)


def mrz_field_to_text(field: str) -> str:
    """Strip filler from a fixed-width code field such as the number or a country code."""
    return field.replace(FILLER, "")


def parse_mrz_date(text: str) -> date:
    """Parse a YYMMDD field with the generic two-digit-year cutoff."""
    return mrz_to_date(text, get_settings().mrz_cutoff_year)


def _check_alphabet(value: str) -> None:
    if not is_mrz_alphabet(value):
        msg = "Machine-Readable Zone may only contain A-Z, 0-9 and '<'"
        raise FormatError(msg)
