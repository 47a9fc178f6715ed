"""Events passport: TD3 booklet with a version 4 seal (type category 0x02)."""

from __future__ import annotations

from typing import Any, ClassVar

from seal_codec.adapters.base import TwoLineSealedDocument
from seal_codec.documents.td3 import TD3Document
from seal_codec.seal.digital_seal import DigitalSeal
from seal_codec.utils.mrz_format import date_to_viz

PLACE_OF_BIRTH_TAG = 0x02
SUBAUTHORITY_CODE_TAG = 0x03
ENDORSEMENTS_TAG = 0x04


class EventsPassport(TwoLineSealedDocument):
    """
    Passport issued for an event.

    Seal features:
        0x01: C40 MRZ
        0x02: C40 place of birth
        0x03: subauthority code (hex, up to 4 bytes)
        0x04: C40 endorsements
    """

    DOCUMENT_CLASS: ClassVar[type[TD3Document]] = TD3Document
    TYPE_CATEGORY: ClassVar[int] = 0x02

    def __init__(self, document: TD3Document | None = None, seal: DigitalSeal | None = None, **fields: Any) -> None:
        self.subauthority = "Unknown"
        self.url = ""
        if seal is None:
            fields = {"place_of_birth": "UTOPIA", "endorsements": "NONE", **fields}
        super().__init__(document, seal, **fields)

    @property
    def place_of_birth(self) -> str | None:
        return self._get_c40_feature(PLACE_OF_BIRTH_TAG)

    @place_of_birth.setter
    def place_of_birth(self, value: str) -> None:
        self._set_c40_feature(PLACE_OF_BIRTH_TAG, value)

    @property
    def subauthority_code(self) -> str | None:
        return self._get_hex_feature(SUBAUTHORITY_CODE_TAG)

    @subauthority_code.setter
    def subauthority_code(self, code: str) -> None:
        self._set_hex_feature(SUBAUTHORITY_CODE_TAG, code, "Subauthority code (subauthority_code)")

    @property
    def endorsements(self) -> str | None:
        return self._get_c40_feature(ENDORSEMENTS_TAG)

    @endorsements.setter
    def endorsements(self, value: str) -> None:
        self._set_c40_feature(ENDORSEMENTS_TAG, value)

    def viz_fields(self) -> dict[str, str]:
        fields = self.document.viz_fields()
        fields.update(
            {
                "place_of_birth": self.place_of_birth or "",
                "issue_date": date_to_viz(self.issue_date),
                "subauthority": self.subauthority.upper(),
                "endorsements": self.endorsements or "",
            }
        )
        return fields
