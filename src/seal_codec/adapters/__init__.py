"""Document adapters pairing a travel document with a version 4 digital seal."""

from .base import SealedDocument, TD1SealedDocument, TwoLineSealedDocument
from .crew_certificate import CrewCertificate
from .crew_id import CrewID, CrewIDDocument
from .crew_license import CrewLicense
from .events_passport import EventsPassport
from .events_visa import EventsVisa, EventsVisaMRVB

__all__ = [
    "CrewCertificate",
    "CrewID",
    "CrewIDDocument",
    "CrewLicense",
    "EventsPassport",
    "EventsVisa",
    "EventsVisaMRVB",
    "SealedDocument",
    "TD1SealedDocument",
    "TwoLineSealedDocument",
]
