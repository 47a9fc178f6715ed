"""
ICAO Doc 9303 machine readable zone and visible digital seal codec.

This package converts identity document data into the Machine Readable
Zone (MRZ) text of TD1, TD2, TD3, MRV-A and MRV-B documents and into the
binary Visible Digital Seal (VDS) of ICAO Doc 9303 Part 13, and back again.

Key Features:
- MRZ check digits, field normalization and padding
- C40 text compaction and DER definite lengths
- Version 3 and version 4 seal header, message and signature zones
- Transactional zone parsing with check digit verification
- Crew and event document adapters that keep the MRZ and the seal in step
"""

from .adapters import CrewCertificate, CrewID, CrewLicense, EventsPassport, EventsVisa, EventsVisaMRVB, SealedDocument
from .config import CodecSettings, configure, get_settings
from .documents import MRVADocument, MRVBDocument, TD1Document, TD2Document, TD3Document, TravelDocument
from .seal import DigitalSeal, DigitalSealV3, DigitalSealV4, decode_seal
from .types import (
    FormatError,
    GenderMarker,
    IntegrityError,
    LengthMismatchError,
    SealCodecError,
    SealVersion,
    ValidationError,
)
from .utils.c40 import c40_decode, c40_encode
from .utils.check_digit import compute_check_digit
from .utils.der_length import der_to_length, length_to_der

__version__ = "1.0.0"

__all__ = [
    "CodecSettings",
    "CrewCertificate",
    "CrewID",
    "CrewLicense",
    "DigitalSeal",
    "DigitalSealV3",
    "DigitalSealV4",
    "EventsPassport",
    "EventsVisa",
    "EventsVisaMRVB",
    "FormatError",
    "GenderMarker",
    "IntegrityError",
    "LengthMismatchError",
    "MRVADocument",
    "MRVBDocument",
    "SealCodecError",
    "SealVersion",
    "SealedDocument",
    "TD1Document",
    "TD2Document",
    "TD3Document",
    "TravelDocument",
    "ValidationError",
    "c40_decode",
    "c40_encode",
    "compute_check_digit",
    "configure",
    "decode_seal",
    "der_to_length",
    "get_settings",
    "length_to_der",
]
