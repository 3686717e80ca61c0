"""Exception hierarchy for codelist lookups.

Every failure the pipeline can raise derives from ``CTLookupError`` so the
CLI can report it uniformly. A codelist that is simply not present in a
valid package is not an error -- see ``LookupResult.found``.
"""

from __future__ import annotations


class CTLookupError(Exception):
    """Base class for all ctlookup failures."""


class RequestValidationError(CTLookupError):
    """Raised when lookup parameters are invalid, before any network call."""


class ConfigurationError(CTLookupError):
    """Raised when the CDISC Library connection cannot be configured."""


class LibraryRequestError(CTLookupError):
    """Raised when a CDISC Library request fails at transport or HTTP level."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class VersionResolutionError(CTLookupError):
    """Raised when no package version exists for the requested standard."""


class PackageFetchError(CTLookupError):
    """Raised when a CT package cannot be fetched or parsed."""

    def __init__(self, message: str, *, standard: str, version: str) -> None:
        self.standard = standard
        self.version = version
        super().__init__(f"{message} (standard={standard}, version={version})")


class OutputWriteError(CTLookupError):
    """Raised when result tables cannot be written to the output directory."""
