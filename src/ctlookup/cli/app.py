"""ctlookup CLI application entry point.

Provides commands for looking up a CDISC controlled terminology codelist
in the CDISC Library, listing published CT package versions, and listing
the supported standards.

Usage:
    ctlookup lookup <codelist-value> [--type ID|CODELISTCODE] [--standard SDTM]
    ctlookup packages [--standard SDTM]
    ctlookup standards
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from loguru import logger
from rich.console import Console

from ctlookup.errors import CTLookupError

if TYPE_CHECKING:
    from ctlookup.library.client import CDISCLibraryClient

app = typer.Typer(
    name="ctlookup",
    help="Look up CDISC controlled terminology codelists in the CDISC Library.",
    no_args_is_help=True,
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _make_client(api_key: str | None) -> CDISCLibraryClient:
    """Create a CDISC Library client from options and environment."""
    from ctlookup.config import LibraryConfig
    from ctlookup.library.client import CDISCLibraryClient

    return CDISCLibraryClient(LibraryConfig.from_env(api_key=api_key))


def _fail(error: Exception) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {error}")
    return typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show the current version."""
    from ctlookup import __version__

    console.print(f"ctlookup {__version__}")


@app.command()
def lookup(
    codelist_value: Annotated[
        str,
        typer.Argument(help="Codelist submission value (e.g., AGEU) or code (e.g., C66781)"),
    ],
    codelist_type: Annotated[
        str,
        typer.Option("--type", "-t", help="Match the value against ID or CODELISTCODE"),
    ] = "ID",
    standard: Annotated[
        str,
        typer.Option("--standard", "-s", help="CDISC standard (e.g., SDTM, ADAM, SEND)"),
    ] = "SDTM",
    package_version: Annotated[
        str | None,
        typer.Option("--version", "-V", help="CT package date YYYY-MM-DD (default: latest)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Directory for the result tables"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Table format: csv, xlsx or xpt"),
    ] = "csv",
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", help="CDISC Library API key (default: $CDISC_API_KEY)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log pipeline steps to stderr"),
    ] = False,
) -> None:
    """Look up a codelist and list its term values.

    Resolves the latest CT package for the standard unless --version is
    given, writes the merged and filtered tables, and prints the terms of
    the matching codelist.
    """
    from ctlookup.cli.display import (
        display_lookup_result,
        display_not_found,
        display_output_paths,
    )
    from ctlookup.io.table_writer import OutputFormat
    from ctlookup.io.xpt_writer import XPTValidationError
    from ctlookup.lookup import build_request, lookup_codelist

    _configure_logging(verbose)

    # Validation happens before any network call
    try:
        request = build_request(codelist_value, codelist_type, standard, package_version)
        fmt = OutputFormat(output_format.lower())
    except CTLookupError as e:
        raise _fail(e) from e
    except ValueError as e:
        valid = ", ".join(f.value for f in OutputFormat)
        console.print(
            f"[bold red]Error:[/bold red] Invalid format '{output_format}'. "
            f"Valid formats: {valid}"
        )
        raise typer.Exit(code=1) from e

    try:
        with _make_client(api_key) as client:
            result = lookup_codelist(request, client, output_dir=output, output_format=fmt)
    except (CTLookupError, XPTValidationError) as e:
        raise _fail(e) from e

    console.print()
    if result.found:
        display_lookup_result(result, console)
    else:
        display_not_found(result, console)
    display_output_paths(result, console)


@app.command()
def packages(
    standard: Annotated[
        str,
        typer.Option("--standard", "-s", help="CDISC standard (e.g., SDTM, ADAM, SEND)"),
    ] = "SDTM",
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", help="CDISC Library API key (default: $CDISC_API_KEY)"),
    ] = None,
) -> None:
    """List the published CT package versions for a standard."""
    from ctlookup.cli.display import display_versions
    from ctlookup.lookup import parse_standard
    from ctlookup.reference.versions import list_versions

    _configure_logging(False)
    try:
        std = parse_standard(standard)
        with _make_client(api_key) as client:
            versions = list_versions(client, std)
    except CTLookupError as e:
        raise _fail(e) from e

    if not versions:
        console.print(f"[bold yellow]No CT packages found for {std.value}.[/bold yellow]")
        return
    display_versions(std, versions, console)


@app.command()
def standards() -> None:
    """List the standards that publish controlled terminology."""
    from ctlookup.cli.display import display_standards

    display_standards(console)
