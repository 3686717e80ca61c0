"""Join a CT package's codelist and term relations into merged rows.

The join is an inner join: a codelist without terms contributes no rows,
and a term whose link key matches no codelist is dropped. Rows are not
deduplicated.
"""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from ctlookup.models.controlled_terms import Codelist, MergedRow, Term

# SAS-style column names (<= 8 chars) so the same frame can be written as XPT
TABLE_LABELS: dict[str, str] = {
    "CLCODE": "Codelist Code",
    "CLID": "Codelist Submission Value",
    "CLNAME": "Codelist Name",
    "EXTENSIB": "Codelist Extensible (Yes/No)",
    "TERMCODE": "Term Code",
    "TERMSUBV": "Term Submission Value",
    "TERMDECD": "Term Decoded Value",
}


def extensible_flag(extensible: bool) -> str:
    """Map the extensible boolean to its report form."""
    return "Yes" if extensible else "No"


def build_merged_rows(codelists: Iterable[Codelist], terms: Iterable[Term]) -> list[MergedRow]:
    """Inner join codelists and terms on ``link_key``.

    Returns:
        One MergedRow per (codelist, term) pair, ordered by codelist id and
        then term submission value (case-sensitive).
    """
    by_key: dict[str, list[Codelist]] = {}
    for cl in codelists:
        by_key.setdefault(cl.link_key, []).append(cl)

    rows: list[MergedRow] = []
    for term in terms:
        for cl in by_key.get(term.link_key, []):
            rows.append(
                MergedRow(
                    codelist_code=cl.code,
                    codelist_id=cl.id,
                    codelist_name=cl.name,
                    extensible=cl.extensible,
                    extensible_flag=extensible_flag(cl.extensible),
                    term_code=term.code,
                    submission_value=term.submission_value,
                    decoded_value=term.decoded_value,
                )
            )

    rows.sort(key=lambda r: (r.codelist_id, r.submission_value))
    return rows


def to_dataframe(rows: Iterable[MergedRow]) -> pd.DataFrame:
    """Tabulate merged rows with the columns in ``TABLE_LABELS``."""
    records = [
        {
            "CLCODE": r.codelist_code,
            "CLID": r.codelist_id,
            "CLNAME": r.codelist_name,
            "EXTENSIB": r.extensible_flag,
            "TERMCODE": r.term_code,
            "TERMSUBV": r.submission_value,
            "TERMDECD": r.decoded_value,
        }
        for r in rows
    ]
    return pd.DataFrame(records, columns=list(TABLE_LABELS))
