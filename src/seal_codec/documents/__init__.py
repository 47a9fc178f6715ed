"""ICAO 9303 travel document layouts."""

from .mrva import MRVADocument, MRVBDocument
from .td1 import TD1Document
from .td2 import TD2Document
from .td3 import TD3Document
from .travel_document import TravelDocument

__all__ = ["MRVADocument", "MRVBDocument", "TD1Document", "TD2Document", "TD3Document", "TravelDocument"]
