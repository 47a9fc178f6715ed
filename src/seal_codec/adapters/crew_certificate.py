"""Crew member certificate: TD1 card with a version 4 seal (type category 0x04)."""

from __future__ import annotations

from typing import Any, ClassVar

from seal_codec.adapters.base import TD1SealedDocument
from seal_codec.documents.td1 import TD1Document
from seal_codec.utils.mrz_format import date_to_viz

EMPLOYER_CODE_TAG = 0x02
OCCUPATION_CODE_TAG = 0x03


class CrewCertificate(TD1SealedDocument):
    """
    Crew member certificate.

    Seal features:
        0x01: C40 MRZ
        0x02: employer code (hex, up to 4 bytes)
        0x03: occupation code (hex, up to 4 bytes)
    """

    DOCUMENT_CLASS: ClassVar[type[TD1Document]] = TD1Document
    TYPE_CATEGORY: ClassVar[int] = 0x04

    def __init__(self, document: TD1Document | None = None, seal: Any = None, **fields: Any) -> None:
        self.employer = "Unknown"
        self.occupation = "Unknown"
        self.declaration = "Unknown"
        self.place_of_issue = "Zenith, UTO"
        self.url = ""
        super().__init__(document, seal, **fields)

    @property
    def employer_code(self) -> str | None:
        return self._get_hex_feature(EMPLOYER_CODE_TAG)

    @employer_code.setter
    def employer_code(self, code: str) -> None:
        self._set_hex_feature(EMPLOYER_CODE_TAG, code, "Employer code (employer_code)")

    @property
    def occupation_code(self) -> str | None:
        return self._get_hex_feature(OCCUPATION_CODE_TAG)

    @occupation_code.setter
    def occupation_code(self, code: str) -> None:
        self._set_hex_feature(OCCUPATION_CODE_TAG, code, "Occupation code (occupation_code)")

    def viz_fields(self) -> dict[str, str]:
        fields = self.document.viz_fields()
        fields.update(
            {
                "employer": self.employer.upper(),
                "occupation": self.occupation.upper(),
                "declaration": self.declaration.upper(),
                "place_of_issue": self.place_of_issue.upper(),
                "issue_date": date_to_viz(self.issue_date),
            }
        )
        return fields
