"""CT package version resolution.

The CDISC Library lists every published CT package as a link whose last
path segment encodes the standard and release date, e.g.
``/mdr/ct/packages/sdtmct-2023-12-15``. Resolution parses those links and
picks the most recent date for one standard.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from typing import Any

from loguru import logger

from ctlookup.errors import VersionResolutionError
from ctlookup.library.client import CDISCLibraryClient
from ctlookup.models.controlled_terms import StandardName, VersionDescriptor

_DATE_LEN = len("YYYY-MM-DD")


def parse_package_link(href: str) -> VersionDescriptor | None:
    """Parse one package link into a descriptor, or None if it does not parse."""
    segment = href.rstrip("/").rsplit("/", 1)[-1]
    # "<api_id>-YYYY-MM-DD"; api_id itself may contain hyphens (qs-ftct)
    if len(segment) <= _DATE_LEN + 1 or segment[-_DATE_LEN - 1] != "-":
        return None
    api_id, raw_date = segment[: -_DATE_LEN - 1], segment[-_DATE_LEN:]

    standard = StandardName.from_api_id(api_id)
    if standard is None:
        return None
    try:
        release = datetime.date.fromisoformat(raw_date)
    except ValueError:
        return None
    return VersionDescriptor(standard=standard, date=release, href=href)


def parse_package_links(links: Iterable[dict[str, Any]]) -> list[VersionDescriptor]:
    """Parse the listing's package links, skipping any that are not CT packages."""
    descriptors: list[VersionDescriptor] = []
    for link in links:
        href = str(link.get("href") or "")
        descriptor = parse_package_link(href)
        if descriptor is None:
            logger.debug("Skipping unrecognized package link: {}", href)
            continue
        descriptors.append(descriptor)
    return descriptors


def select_latest(
    descriptors: Iterable[VersionDescriptor], standard: StandardName
) -> VersionDescriptor:
    """Return the descriptor with the most recent date for a standard.

    If several descriptors share the latest date, the first one seen wins.

    Raises:
        VersionResolutionError: If no descriptor belongs to the standard.
    """
    matching = [d for d in descriptors if d.standard == standard]
    if not matching:
        raise VersionResolutionError(
            f"No versions found for standard {standard.value} in the CT package listing"
        )
    return max(matching, key=lambda d: d.date)


def list_versions(client: CDISCLibraryClient, standard: StandardName) -> list[VersionDescriptor]:
    """Return all published packages for a standard, newest first."""
    descriptors = parse_package_links(client.list_packages())
    matching = [d for d in descriptors if d.standard == standard]
    return sorted(matching, key=lambda d: d.date, reverse=True)


def resolve_latest_version(client: CDISCLibraryClient, standard: StandardName) -> datetime.date:
    """Fetch the package listing and return the latest release date for a standard."""
    descriptors = parse_package_links(client.list_packages())
    logger.info(
        "Package listing: {} CT packages across all standards", len(descriptors)
    )
    latest = select_latest(descriptors, standard)
    logger.info("Latest {} CT package: {}", standard.value, latest.version)
    return latest.date
