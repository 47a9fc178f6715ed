from datetime import date

import pytest

from seal_codec.config import configure
from seal_codec.documents import MRVADocument, MRVBDocument, TD1Document, TD2Document, TD3Document
from seal_codec.types import FormatError, IntegrityError, LengthMismatchError, ValidationError


def _specimen_td3():
    return TD3Document(
        type_code="P",
        authority_code="UTO",
        number="L898902C3",
        birth_date="1974-08-12",
        gender_marker="F",
        expiration_date="2012-04-15",
        nationality_code="UTO",
        full_name="Eriksson, Anna Maria",
        optional_data="ZE184226B",
    )


def test_td3_mrz_generation(specimen_td3_mrz, year_policy):
    """Test that TD3 fields render as the ICAO specimen MRZ."""
    document = _specimen_td3()
    assert document.mrz_lines == specimen_td3_mrz.split("\n")
    assert document.machine_readable_zone == specimen_td3_mrz.replace("\n", "")


def test_td3_mrz_parsing(specimen_td3_mrz, year_policy):
    """Test parsing the ICAO specimen TD3 MRZ."""
    document = TD3Document()
    document.machine_readable_zone = specimen_td3_mrz

    assert document.type_code == "P"
    assert document.authority_code == "UTO"
    assert document.full_name == "ERIKSSON, ANNA MARIA"
    assert document.number == "L898902C3"
    assert document.nationality_code == "UTO"
    assert document.birth_date == date(1974, 8, 12)
    assert document.gender_marker == "F"
    assert document.expiration_date == date(2012, 4, 15)
    assert document.optional_data == "ZE184226B"


def test_td3_empty_optional_data_check_digit():
    """Test that empty optional data gets a filler check digit and parses back."""
    document = TD3Document(full_name="Mann, Mister")
    line2 = document.mrz_line2
    assert line2[28:43] == "<" * 15

    parsed = TD3Document(full_name="Someone, Else")
    parsed.machine_readable_zone = document.machine_readable_zone
    assert parsed.optional_data == ""
    assert parsed.machine_readable_zone == document.machine_readable_zone


def test_td3_corrupted_check_digit_leaves_document_unchanged(specimen_td3_mrz):
    """Test that a bad check digit raises and keeps the old values."""
    document = TD3Document()
    before = document.to_dict()
    corrupted = specimen_td3_mrz.replace("L898902C36", "L898902C37")

    with pytest.raises(IntegrityError):
        document.machine_readable_zone = corrupted

    assert document.to_dict() == before


def test_td3_wrong_length():
    """Test an MRZ of the wrong length."""
    document = TD3Document()
    with pytest.raises(LengthMismatchError):
        document.machine_readable_zone = "P<UTO"
    with pytest.raises(LengthMismatchError):
        document.mrz_line2 = "L898902C36UTO"


def test_td3_line_setters(specimen_td3_mrz, year_policy):
    """Test parsing one line at a time."""
    line1, line2 = specimen_td3_mrz.split("\n")
    document = TD3Document()
    document.mrz_line1 = line1
    assert document.full_name == "ERIKSSON, ANNA MARIA"
    assert document.number == "111222333"
    document.mrz_line2 = line2
    assert document.number == "L898902C3"
    assert document.mrz_lines == [line1, line2]


def test_two_digit_year_cutoff(specimen_td3_mrz):
    """Test that the MRZ century follows the configured cutoff."""
    configure(mrz_cutoff_year=80)
    document = TD3Document()
    document.machine_readable_zone = specimen_td3_mrz
    assert document.birth_date == date(2074, 8, 12)


def test_td1_mrz_generation_and_parsing(specimen_td1_mrz, year_policy):
    """Test the ICAO specimen TD1 MRZ in both directions."""
    document = TD1Document()
    document.machine_readable_zone = specimen_td1_mrz

    assert document.type_code == "I"
    assert document.number == "D23145890"
    assert document.birth_date == date(1974, 8, 12)
    assert document.expiration_date == date(2012, 4, 15)
    assert document.full_name == "ERIKSSON, ANNA MARIA"
    assert document.optional_data == ""
    assert document.mrz_lines == specimen_td1_mrz.split("\n")


def test_td1_optional_data_spans_two_lines(year_policy):
    """Test that TD1 optional data is split across lines 1 and 2."""
    document = TD1Document(full_name="MANN, MISTER", optional_data="ABCDEFGHIJKLMNOPQRSTUVWXYZ")
    assert document.mrz_line1[15:30] == "ABCDEFGHIJKLMNO"
    assert document.mrz_line2[18:29] == "PQRSTUVWXYZ"

    parsed = TD1Document()
    parsed.machine_readable_zone = document.machine_readable_zone
    assert parsed == document


def test_td1_line1_setter_keeps_line2_optional_data(year_policy):
    """Test that setting line 1 only replaces the first half of the optional data."""
    document = TD1Document(optional_data="ABCDEFGHIJKLMNOPQRSTUVWXYZ")
    other = TD1Document(number="X1234567", optional_data="123")

    document.mrz_line1 = other.mrz_line1

    assert document.number == "X1234567"
    assert document.optional_data == "123" + " " * 12 + "PQRSTUVWXYZ"


def test_td1_composite_check_digit(specimen_td1_mrz):
    """Test that a corrupted composite check digit is detected."""
    document = TD1Document()
    with pytest.raises(IntegrityError):
        document.machine_readable_zone = specimen_td1_mrz[:-32] + "5" + specimen_td1_mrz[-31:]


def test_mrva_mrz_round_trip(year_policy):
    """Test an MRV-A visa MRZ, which has no composite check digit."""
    document = MRVADocument(
        type_code="V",
        authority_code="UTO",
        number="VZ1234567",
        birth_date="1988-01-31",
        gender_marker="M",
        expiration_date="2025-12-31",
        nationality_code="UTO",
        full_name="DOE, JOHN",
        optional_data="EVENT2025",
        place_of_issue="Zenith",
        passport_number="P12345678",
    )
    line1, line2 = document.mrz_lines
    assert len(line1) == len(line2) == 44
    assert line1.startswith("V<UTODOE<<JOHN<")
    assert line2.startswith("VZ1234567")
    assert line2[28:44] == "EVENT2025".ljust(16, "<")
    assert document.valid_thru == date(2025, 12, 31)

    parsed = MRVADocument(place_of_issue="Zenith", passport_number="P12345678")
    parsed.machine_readable_zone = "\n".join(document.mrz_lines)
    assert parsed == document


def test_mrvb_mrz_round_trip(year_policy):
    """Test an MRV-B visa MRZ with 36-character lines."""
    document = MRVBDocument(
        type_code="V",
        authority_code="UTO",
        number="VZ1234567",
        birth_date="1988-01-31",
        gender_marker="M",
        expiration_date="2025-12-31",
        nationality_code="UTO",
        full_name="DOE, JOHN",
        optional_data="EVT25",
    )
    line1, line2 = document.mrz_lines
    assert len(line1) == len(line2) == 36
    assert line1 == "V<UTODOE<<JOHN".ljust(36, "<")
    assert line2[28:36] == "EVT25<<<"

    parsed = MRVBDocument()
    parsed.machine_readable_zone = "\n".join(document.mrz_lines)
    assert parsed == document

    with pytest.raises(LengthMismatchError):
        MRVADocument().machine_readable_zone = document.machine_readable_zone

def test_mrva_passport_number_in_mrz():
    """Test that the MRZ can carry the holder's passport number."""
    document = MRVADocument(number="VZ1234567", passport_number="P12345678", use_passport_in_mrz=True)
    assert document.mrz_line2.startswith("P12345678")

    parsed = MRVADocument(use_passport_in_mrz=True)
    parsed.machine_readable_zone = document.machine_readable_zone
    assert parsed.passport_number == "P12345678"
    assert parsed.number == "111222333"


def test_field_validation():
    """Test rejected document field values."""
    document = TD3Document()
    with pytest.raises(ValidationError):
        document.gender_marker = "Q"
    with pytest.raises(ValidationError):
        document.number = "1234567890"
    with pytest.raises(ValidationError):
        document.full_name = "Иванов, Иван"
    with pytest.raises(ValidationError):
        document.birth_date = "not a date"
    document.gender_marker = "<"
    assert document.gender_marker == "X"


def test_viz_fields():
    """Test the visual inspection zone rendering."""
    fields = _specimen_td3().viz_fields()
    assert fields["birth_date"] == "12 AUG 1974"
    assert fields["expiration_date"] == "15 APR 2012"
    assert fields["full_name"] == "ERIKSSON, ANNA MARIA"


def test_td2_specimen_mrz(year_policy):
    """Test the ICAO 9303 Part 6 TD2 specimen."""
    line1 = "I<UTOERIKSSON<<ANNA<MARIA".ljust(36, "<")
    line2 = "D231458907UTO7408122F1204159<<<<<<<6"
    document = TD2Document(
        type_code="I",
        authority_code="UTO",
        number="D23145890",
        birth_date="1974-08-12",
        gender_marker="F",
        expiration_date="2012-04-15",
        nationality_code="UTO",
        full_name="ERIKSSON, ANNA MARIA",
    )
    assert document.mrz_lines == [line1, line2]

    parsed = TD2Document()
    parsed.machine_readable_zone = line1 + "\n" + line2
    assert parsed == document
    assert parsed.expiration_date == date(2012, 4, 15)


def test_td2_composite_check_digit(year_policy):
    """Test that a wrong TD2 composite check digit is rejected without changes."""
    document = TD2Document(number="D23145890", optional_data="AB12")
    line2 = document.mrz_line2
    assert line2[28:35] == "AB12<<<"

    bad_digit = str((int(line2[35]) + 1) % 10)
    target = TD2Document()
    before = target.to_dict()
    with pytest.raises(IntegrityError):
        target.mrz_line2 = line2[:35] + bad_digit
    assert target.to_dict() == before


def test_mrz_alphabet_is_enforced(specimen_td3_mrz):
    """Test that MRZ text outside A-Z, 0-9 and '<' is rejected before parsing."""
    document = TD3Document()
    with pytest.raises(FormatError):
        document.machine_readable_zone = specimen_td3_mrz.lower()
    with pytest.raises(FormatError):
        document.mrz_line1 = specimen_td3_mrz.split("\n")[0].replace("<", " ")
