"""Crew license: TD1 card with a version 4 seal (type category 0x06)."""

from __future__ import annotations

from typing import Any, ClassVar

from seal_codec.adapters.base import TD1SealedDocument
from seal_codec.documents.td1 import TD1Document
from seal_codec.utils.mrz_format import date_to_viz

SUBAUTHORITY_CODE_TAG = 0x02
PRIVILEGE_CODE_TAG = 0x03


class CrewLicense(TD1SealedDocument):
    """Crew license with subauthority (0x02) and privilege (0x03) hex codes in the seal."""

    DOCUMENT_CLASS: ClassVar[type[TD1Document]] = TD1Document
    TYPE_CATEGORY: ClassVar[int] = 0x06

    def __init__(self, document: TD1Document | None = None, seal: Any = None, **fields: Any) -> None:
        self.authority = "Unknown"
        self.privilege = "Unknown"
        self.ratings = ""
        self.limitations = ""
        self.url = ""
        super().__init__(document, seal, **fields)

    @property
    def subauthority_code(self) -> str | None:
        return self._get_hex_feature(SUBAUTHORITY_CODE_TAG)

    @subauthority_code.setter
    def subauthority_code(self, code: str) -> None:
        self._set_hex_feature(SUBAUTHORITY_CODE_TAG, code, "Subauthority code (subauthority_code)")

    @property
    def privilege_code(self) -> str | None:
        return self._get_hex_feature(PRIVILEGE_CODE_TAG)

    @privilege_code.setter
    def privilege_code(self, code: str) -> None:
        self._set_hex_feature(PRIVILEGE_CODE_TAG, code, "Privilege code (privilege_code)")

    def viz_fields(self) -> dict[str, str]:
        fields = self.document.viz_fields()
        fields.update(
            {
                "authority": self.authority.upper(),
                "privilege": self.privilege.upper(),
                "ratings": self.ratings.upper(),
                "limitations": self.limitations.upper(),
                "issue_date": date_to_viz(self.issue_date),
            }
        )
        return fields
