"""CT package version resolution and retrieval.

Re-exports for convenient imports:
    from ctlookup.reference import resolve_latest_version, fetch_package
"""

from ctlookup.reference.packages import fetch_package, parse_package
from ctlookup.reference.versions import (
    list_versions,
    parse_package_links,
    resolve_latest_version,
    select_latest,
)

__all__ = [
    "fetch_package",
    "parse_package",
    "list_versions",
    "parse_package_links",
    "resolve_latest_version",
    "select_latest",
]
