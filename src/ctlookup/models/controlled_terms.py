"""CDISC Controlled Terminology models.

These models represent a CT package as served by the CDISC Library:
a flat relation of codelists and a flat relation of terms, linked by
an explicit key, plus the merged (codelist x term) rows built from them.
"""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import BaseModel, Field


class StandardName(str, Enum):
    """CDISC standards that publish a controlled terminology package."""

    SDTM = "SDTM"
    ADAM = "ADAM"
    CDASH = "CDASH"
    DEFINE_XML = "DEFINE-XML"
    SEND = "SEND"
    DDF = "DDF"
    GLOSSARY = "GLOSSARY"
    MRCT = "MRCT"
    PROTOCOL = "PROTOCOL"
    QRS = "QRS"
    QS_FT = "QS-FT"
    TMF = "TMF"

    @property
    def api_id(self) -> str:
        """Identifier used in CDISC Library package paths (e.g., 'sdtmct')."""
        return f"{self.value.lower()}ct"

    @classmethod
    def from_api_id(cls, api_id: str) -> StandardName | None:
        """Map a package path identifier back to its standard, or None."""
        for member in cls:
            if member.api_id == api_id.lower():
                return member
        return None


class CodelistKeyKind(str, Enum):
    """Which codelist attribute a lookup key is matched against."""

    ID = "ID"
    CODELISTCODE = "CODELISTCODE"


class VersionDescriptor(BaseModel):
    """One dated CT package for a standard, parsed from the package listing."""

    standard: StandardName = Field(..., description="Standard the package belongs to")
    date: datetime.date = Field(..., description="Package release date")
    href: str = Field(default="", description="Package link as listed by the service")

    @property
    def version(self) -> str:
        """Return the version string used in package paths (YYYY-MM-DD)."""
        return self.date.isoformat()


class Codelist(BaseModel):
    """A CDISC controlled terminology codelist, without its terms."""

    code: str = Field(..., description="NCI codelist code (e.g., 'C66781')")
    id: str = Field(..., description="Codelist submission value (e.g., 'AGEU')")
    name: str = Field(..., description="Codelist name (e.g., 'Age Unit')")
    extensible: bool = Field(
        ..., description="Whether study-specific values are allowed beyond listed terms"
    )
    link_key: str = Field(..., description="Key referenced by this codelist's terms")


class Term(BaseModel):
    """A single term, linked to its owning codelist by ``link_key``."""

    link_key: str = Field(..., description="Key of the owning codelist")
    code: str = Field(..., description="NCI term code (e.g., 'C29848')")
    submission_value: str = Field(
        ..., description="The value to use in submissions (e.g., 'YEARS')"
    )
    decoded_value: str = Field(default="", description="NCI preferred term")
    definition: str = Field(default="", description="CDISC definition of the term")


class CTPackage(BaseModel):
    """The two relations of one fetched Controlled Terminology package."""

    standard: StandardName
    version: str = Field(..., description="CT package version (e.g., '2023-12-15')")
    codelists: list[Codelist] = Field(default_factory=list)
    terms: list[Term] = Field(default_factory=list)


class MergedRow(BaseModel):
    """One (codelist, term) pair produced by joining a package's relations."""

    codelist_code: str
    codelist_id: str
    codelist_name: str
    extensible: bool
    extensible_flag: str = Field(..., description="'Yes' or 'No', derived from extensible")
    term_code: str
    submission_value: str
    decoded_value: str = ""
