"""Codelist lookup pipeline.

Runs the steps in order: validate the request, resolve the package version
(only when none was given), fetch the package, join codelists to terms,
filter by the requested key, and write the merged and filtered tables.
Each step gets its input as arguments and returns its output. Nothing is
shared between runs.
"""

from __future__ import annotations

import datetime
import re
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path

import pandas as pd
from loguru import logger

from ctlookup.errors import OutputWriteError, RequestValidationError
from ctlookup.io.table_writer import (
    FILTERED_TABLE_NAME,
    FILTERED_TABLE_PREFIX,
    MERGED_TABLE_NAME,
    OutputFormat,
    table_stem,
    write_table,
)
from ctlookup.library.client import CDISCLibraryClient
from ctlookup.models.controlled_terms import CodelistKeyKind, MergedRow, StandardName
from ctlookup.models.lookup import LookupRequest, LookupResult
from ctlookup.reference.packages import fetch_package
from ctlookup.reference.versions import resolve_latest_version
from ctlookup.tables import build_merged_rows, to_dataframe

_VERSION_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _is_iso_date(value: str) -> bool:
    if not _VERSION_RE.match(value):
        return False
    try:
        datetime.date.fromisoformat(value)
    except ValueError:
        return False
    return True


def valid_standards() -> list[str]:
    return [s.value for s in StandardName]


def parse_standard(value: str) -> StandardName:
    """Parse a standard name case-insensitively.

    Raises:
        RequestValidationError: If the name is not a known standard; the
            message lists the valid names.
    """
    try:
        return StandardName(value.strip().upper())
    except ValueError as e:
        raise RequestValidationError(
            f"Invalid standard '{value}'. Valid standards: {', '.join(valid_standards())}"
        ) from e


def parse_key_kind(value: str) -> CodelistKeyKind:
    try:
        return CodelistKeyKind(value.strip().upper())
    except ValueError as e:
        valid = ", ".join(k.value for k in CodelistKeyKind)
        raise RequestValidationError(
            f"Invalid codelist type '{value}'. Valid types: {valid}"
        ) from e


def build_request(
    codelist_value: str,
    codelist_type: str = "ID",
    standard: str = "SDTM",
    version: str | None = None,
) -> LookupRequest:
    """Validate raw lookup parameters into a LookupRequest.

    Raises:
        RequestValidationError: On a missing key, unknown standard, unknown
            codelist type, or a version that is not a YYYY-MM-DD date.
    """
    key = (codelist_value or "").strip()
    if not key:
        raise RequestValidationError("A codelist value is required")

    if version is not None:
        version = version.strip()
        if not _is_iso_date(version):
            raise RequestValidationError(
                f"Invalid version '{version}'. Expected a date as YYYY-MM-DD"
            )

    return LookupRequest(
        codelist_value=key,
        codelist_type=parse_key_kind(codelist_type),
        standard=parse_standard(standard),
        version=version,
    )


def _write_tables(
    tables: list[tuple[pd.DataFrame, str, str]],
    output_dir: Path,
    output_format: OutputFormat,
    table_label: str,
) -> list[Path]:
    """Write all tables into a staging directory, then move them into ``output_dir``.

    Either every table lands in ``output_dir`` or none does.

    Raises:
        OutputWriteError: If the directory or any table cannot be written.
    """
    staging: Path | None = None
    paths: list[Path] = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=".ctlookup_staging_", dir=output_dir))
        staged = [
            write_table(df, staging, stem, name, output_format, table_label=table_label)
            for df, stem, name in tables
        ]
        for path in staged:
            target = output_dir / path.name
            path.replace(target)
            paths.append(target)
    except OSError as e:
        for path in paths:
            path.unlink(missing_ok=True)
        raise OutputWriteError(f"Could not write tables to {output_dir}: {e}") from e
    finally:
        if staging is not None:
            shutil.rmtree(staging, ignore_errors=True)
    return paths


def filter_rows(
    rows: Iterable[MergedRow], key: str, key_kind: CodelistKeyKind
) -> list[MergedRow]:
    """Return the rows whose codelist id or code equals ``key``, ignoring case."""
    wanted = key.strip().upper()
    if key_kind is CodelistKeyKind.ID:
        return [r for r in rows if r.codelist_id.upper() == wanted]
    return [r for r in rows if r.codelist_code.upper() == wanted]


def lookup_codelist(
    request: LookupRequest,
    client: CDISCLibraryClient,
    output_dir: Path | None = None,
    output_format: OutputFormat = OutputFormat.CSV,
) -> LookupResult:
    """Run a full lookup and write its tables.

    Args:
        request: Validated lookup parameters.
        client: Open CDISC Library client.
        output_dir: Where the merged and filtered tables are written. A new
            temporary directory is used when omitted.
        output_format: File format of the written tables.

    Returns:
        LookupResult. ``result.found`` is False when no codelist matched the
        key; that is a normal outcome, not an error.

    Raises:
        VersionResolutionError: No package exists for the standard.
        PackageFetchError: The package could not be fetched or parsed.
        OutputWriteError: The tables could not be written; none are left behind.
    """
    standard = request.standard
    version = request.version
    if version is None:
        version = resolve_latest_version(client, standard).isoformat()

    package = fetch_package(client, standard, version)
    merged = build_merged_rows(package.codelists, package.terms)
    matched = filter_rows(merged, request.codelist_value, request.codelist_type)

    logger.info(
        "{} {} {}={}: {} of {} rows matched",
        standard.value,
        version,
        request.codelist_type.value,
        request.codelist_value,
        len(matched),
        len(merged),
    )

    if output_dir is None:
        output_dir = Path(tempfile.mkdtemp(prefix="ctlookup_"))
    paths = _write_tables(
        [
            (
                to_dataframe(merged),
                table_stem(standard.value, version, "merged"),
                MERGED_TABLE_NAME,
            ),
            (
                to_dataframe(matched),
                table_stem(
                    standard.value, version, f"{FILTERED_TABLE_PREFIX}_{request.codelist_value}"
                ),
                FILTERED_TABLE_NAME,
            ),
        ],
        output_dir,
        output_format,
        table_label=f"{standard.value} CT {version}",
    )

    return LookupResult(
        standard=standard,
        version=version,
        key=request.codelist_value,
        key_kind=request.codelist_type,
        merged_rows=merged,
        rows=matched,
        extensible=matched[0].extensible if matched else None,
        output_paths=paths,
    )
