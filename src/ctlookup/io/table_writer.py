"""Materialize lookup tables to disk as CSV, Excel, or XPT."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

import pandas as pd
from loguru import logger

from ctlookup.io.xpt_writer import write_xpt_v5
from ctlookup.tables import TABLE_LABELS

MERGED_TABLE_NAME = "CTMERGED"
FILTERED_TABLE_NAME = "CTFILTER"
# Filtered file stems carry this prefix so a key can never collide with "merged"
FILTERED_TABLE_PREFIX = "filter"


class OutputFormat(str, Enum):
    """File formats a lookup can write its tables in."""

    CSV = "csv"
    XLSX = "xlsx"
    XPT = "xpt"


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9.-]+", "_", text.lower()).strip("_") or "key"


def table_stem(standard: str, version: str, suffix: str) -> str:
    """File stem for a lookup table, e.g. ``sdtm_2023-12-15_merged``."""
    return f"{_slug(standard)}_{version}_{_slug(suffix)}"


def write_table(
    df: pd.DataFrame,
    output_dir: Path,
    stem: str,
    table_name: str,
    output_format: OutputFormat = OutputFormat.CSV,
    table_label: str | None = None,
) -> Path:
    """Write one table into ``output_dir`` and return the file path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{stem}.{output_format.value}"

    if output_format is OutputFormat.CSV:
        df.to_csv(path, index=False)
    elif output_format is OutputFormat.XLSX:
        df.to_excel(path, index=False, sheet_name=table_name, engine="openpyxl")
    else:
        write_xpt_v5(df, path, table_name, TABLE_LABELS, table_label=table_label)

    logger.info("Wrote {} ({} rows) to {}", table_name, len(df), path)
    return path
