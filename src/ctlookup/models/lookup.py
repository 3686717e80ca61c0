"""Request and result models for a single codelist lookup."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from ctlookup.models.controlled_terms import CodelistKeyKind, MergedRow, StandardName


class LookupRequest(BaseModel):
    """Validated parameters of one lookup. Build with ``ctlookup.lookup.build_request``."""

    codelist_value: str = Field(..., min_length=1, description="Key to filter on")
    codelist_type: CodelistKeyKind = CodelistKeyKind.ID
    standard: StandardName = StandardName.SDTM
    version: str | None = Field(
        default=None, description="Package date (YYYY-MM-DD); None resolves the latest"
    )


class LookupResult(BaseModel):
    """Outcome of a lookup: the merged package table and the rows matching the key.

    An empty ``rows`` list is a valid "not found" outcome, not a failure.
    """

    standard: StandardName
    version: str
    key: str
    key_kind: CodelistKeyKind
    merged_rows: list[MergedRow] = Field(default_factory=list)
    rows: list[MergedRow] = Field(default_factory=list)
    extensible: bool | None = Field(
        default=None, description="Extensibility of the matched codelist; None if no match"
    )
    output_paths: list[Path] = Field(default_factory=list)

    @property
    def found(self) -> bool:
        return len(self.rows) > 0

    @property
    def extensible_flag(self) -> str | None:
        if self.extensible is None:
            return None
        return "Yes" if self.extensible else "No"

    @property
    def submission_values(self) -> list[str]:
        return [row.submission_value for row in self.rows]
