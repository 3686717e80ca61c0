"""CDISC Library API access."""

from ctlookup.library.client import CDISCLibraryClient

__all__ = ["CDISCLibraryClient"]
