"""Rich display helpers for terminal output.

Provides the lookup report, the not-found notice, and listings of
package versions and standards.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ctlookup.models.controlled_terms import StandardName, VersionDescriptor
from ctlookup.models.lookup import LookupResult


def report_title(result: LookupResult) -> str:
    """Header text naming the key, standard, and resolved version."""
    return (
        f"Codelist {result.key_kind.value}={result.key} "
        f"({result.standard.value} CT {result.version})"
    )


def display_lookup_result(result: LookupResult, console: Console) -> None:
    """Print the report for a lookup that matched at least one term.

    Args:
        result: A LookupResult with ``found`` True.
        console: Rich Console for output.
    """
    first = result.rows[0]
    ext_str = "[green]Yes[/green]" if result.extensible else "[red]No[/red]"
    info_lines = [
        f"[bold]Code:[/bold] {first.codelist_code}",
        f"[bold]ID:[/bold] {first.codelist_id}",
        f"[bold]Name:[/bold] {first.codelist_name}",
        f"[bold]Extensible:[/bold] {ext_str}",
    ]
    console.print(Panel("\n".join(info_lines), title=report_title(result)))

    table = Table(title=f"{first.codelist_name} Terms ({len(result.rows)} terms)")
    table.add_column("Submission Value", style="bold cyan")
    for value in result.submission_values:
        table.add_row(value)
    console.print(table)


def display_not_found(result: LookupResult, console: Console) -> None:
    """Print the notice for a lookup whose key matched no codelist."""
    console.print(
        f"[bold yellow]Not found:[/bold yellow] No codelist with "
        f"{result.key_kind.value}={result.key} in {result.standard.value} CT "
        f"{result.version} ({len(result.merged_rows)} terms searched)."
    )


def display_output_paths(result: LookupResult, console: Console) -> None:
    for path in result.output_paths:
        console.print(f"[green]Table written to {path}[/green]")


def display_versions(
    standard: StandardName, versions: list[VersionDescriptor], console: Console
) -> None:
    """Print the available package versions for a standard, newest first."""
    table = Table(title=f"{standard.value} CT Packages ({len(versions)})")
    table.add_column("Version", style="bold cyan")
    table.add_column("Package")
    for d in versions:
        table.add_row(d.version, d.href)
    console.print(table)


def display_standards(console: Console) -> None:
    table = Table(title="Standards")
    table.add_column("Standard", style="bold cyan")
    table.add_column("Package ID")
    for s in StandardName:
        table.add_row(s.value, s.api_id)
    console.print(table)
