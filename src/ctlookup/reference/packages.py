"""CT package fetching and parsing.

The CDISC Library returns a package as codelists with their terms nested
inside. ``parse_package`` flattens that into two relations, Codelist and
Term, and links each term to its codelist through the codelist's concept
id rather than its position in the payload.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from ctlookup.errors import LibraryRequestError, PackageFetchError
from ctlookup.library.client import CDISCLibraryClient
from ctlookup.models.controlled_terms import Codelist, CTPackage, StandardName, Term


def _as_bool(raw: object) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() == "true"


def _text(raw: object) -> str:
    return "" if raw is None else str(raw).strip()


def parse_package(payload: Any, standard: StandardName, version: str) -> CTPackage:
    """Parse a raw package payload into codelist and term relations.

    Only the fields used downstream are read. Terms inherit ``link_key``
    from the codelist they are nested under.

    Raises:
        PackageFetchError: If the payload has no ``codelists`` array, or a
            codelist's ``terms`` is not an array. Entries that are not
            objects are skipped.
    """
    raw_codelists = payload.get("codelists") if isinstance(payload, dict) else None
    if not isinstance(raw_codelists, list):
        raise PackageFetchError(
            "Package payload has no 'codelists' array", standard=standard.value, version=version
        )

    codelists: list[Codelist] = []
    terms: list[Term] = []
    for raw in raw_codelists:
        if not isinstance(raw, dict):
            continue
        code = _text(raw.get("conceptId"))
        codelists.append(
            Codelist(
                code=code,
                id=_text(raw.get("submissionValue")),
                name=_text(raw.get("name")),
                extensible=_as_bool(raw.get("extensible")),
                link_key=code,
            )
        )
        raw_terms = raw.get("terms") or []
        if not isinstance(raw_terms, list):
            raise PackageFetchError(
                f"Codelist {code or '<unknown>'} has a 'terms' value that is not an array",
                standard=standard.value,
                version=version,
            )
        for raw_term in raw_terms:
            if not isinstance(raw_term, dict):
                continue
            terms.append(
                Term(
                    link_key=code,
                    code=_text(raw_term.get("conceptId")),
                    submission_value=_text(raw_term.get("submissionValue")),
                    decoded_value=_text(raw_term.get("preferredTerm")),
                    definition=_text(raw_term.get("definition")),
                )
            )

    return CTPackage(standard=standard, version=version, codelists=codelists, terms=terms)


def fetch_package(client: CDISCLibraryClient, standard: StandardName, version: str) -> CTPackage:
    """Fetch and parse the CT package for a standard and version.

    Raises:
        PackageFetchError: On network, authentication, or missing-package
            failures, and on payloads that cannot be parsed.
    """
    try:
        payload = client.get_package(standard.api_id, version)
    except LibraryRequestError as e:
        reason = "Package not found" if e.status_code == 404 else "Package fetch failed"
        raise PackageFetchError(
            f"{reason}: {e}", standard=standard.value, version=version
        ) from e

    package = parse_package(payload, standard, version)
    logger.info(
        "Fetched {}-{}: {} codelists, {} terms",
        standard.api_id,
        version,
        len(package.codelists),
        len(package.terms),
    )
    return package
