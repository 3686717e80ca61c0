"""Pydantic data models shared across all ctlookup components.

All models are re-exported here for convenient imports:
    from ctlookup.models import Codelist, Term, MergedRow, LookupResult
"""

from ctlookup.models.controlled_terms import (
    Codelist,
    CodelistKeyKind,
    CTPackage,
    MergedRow,
    StandardName,
    Term,
    VersionDescriptor,
)
from ctlookup.models.lookup import LookupRequest, LookupResult

__all__ = [
    # controlled terms
    "StandardName",
    "CodelistKeyKind",
    "VersionDescriptor",
    "Codelist",
    "Term",
    "CTPackage",
    "MergedRow",
    # lookup
    "LookupRequest",
    "LookupResult",
]
