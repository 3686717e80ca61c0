"""SAS Transport (XPT v5) output for CT tables.

CT tables are written as XPT so they can be used alongside SAS-based
submission tooling. pyreadstat silently truncates values that break the
v5 format, so every constraint is checked before writing:

- Dataset and column names: <= 8 characters, start with a letter
- Dataset and column labels: <= 40 characters
- Character values: <= 200 bytes, ASCII only
"""

from __future__ import annotations

import re
from pathlib import Path

import pandas as pd
import pyreadstat
from loguru import logger

_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]{0,7}$")
_MAX_LABEL = 40
_MAX_VALUE_BYTES = 200


class XPTValidationError(Exception):
    """Raised when a table violates XPT v5 constraints.

    Contains every problem found, not just the first.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        msg = f"XPT v5 validation failed with {len(errors)} error(s):\n" + "\n".join(
            f"  - {e}" for e in errors
        )
        super().__init__(msg)


def validate_for_xpt_v5(
    df: pd.DataFrame,
    column_labels: dict[str, str],
    table_name: str,
    table_label: str | None = None,
) -> list[str]:
    """Return a list of XPT v5 violations for a table (empty if valid)."""
    errors: list[str] = []

    if not _NAME_RE.match(table_name):
        errors.append(
            f"Table name '{table_name}' must be 1-8 characters, start with a letter, "
            f"and contain only letters, digits or underscores"
        )
    if table_label is not None and len(table_label) > _MAX_LABEL:
        errors.append(f"Table label exceeds {_MAX_LABEL} characters: '{table_label}'")

    for col in df.columns:
        name = str(col)
        if not _NAME_RE.match(name):
            errors.append(
                f"Column name '{name}' must be 1-8 characters, start with a letter, "
                f"and contain only letters, digits or underscores"
            )
        label = column_labels.get(name)
        if label is None:
            errors.append(f"Column '{name}' has no label defined")
        elif len(label) > _MAX_LABEL:
            errors.append(f"Label for '{name}' exceeds {_MAX_LABEL} characters: '{label}'")

        values = df[col].dropna().astype(str)
        if values.empty:
            continue
        too_long = values[values.map(lambda v: len(v.encode("utf-8")) > _MAX_VALUE_BYTES)]
        if not too_long.empty:
            errors.append(
                f"Column '{name}' has {len(too_long)} value(s) longer than "
                f"{_MAX_VALUE_BYTES} bytes"
            )
        non_ascii = values[~values.map(str.isascii)]
        if not non_ascii.empty:
            errors.append(f"Column '{name}' contains {len(non_ascii)} non-ASCII value(s)")

    return errors


def write_xpt_v5(
    df: pd.DataFrame,
    path: str | Path,
    table_name: str,
    column_labels: dict[str, str],
    table_label: str | None = None,
) -> Path:
    """Validate and write a table as an XPT v5 file, then read it back.

    Raises:
        XPTValidationError: If the table violates XPT v5 constraints.
        RuntimeError: If the read-back does not match what was written.
    """
    path = Path(path)
    errors = validate_for_xpt_v5(df, column_labels, table_name, table_label=table_label)
    if errors:
        raise XPTValidationError(errors)

    logger.info(
        "Writing XPT v5: {} ({} rows x {} cols) -> {}",
        table_name.upper(),
        len(df),
        len(df.columns),
        path,
    )
    write_kwargs: dict[str, object] = {
        "table_name": table_name.upper(),
        "column_labels": {str(c): column_labels[str(c)] for c in df.columns},
        "file_format_version": 5,
    }
    if table_label is not None:
        write_kwargs["file_label"] = table_label
    pyreadstat.write_xport(df, str(path), **write_kwargs)

    df_readback, _meta = pyreadstat.read_xport(str(path))
    if list(df_readback.columns) != [str(c) for c in df.columns] or len(df_readback) != len(df):
        msg = (
            f"Read-back mismatch for {path.name}: wrote {len(df)} rows "
            f"{list(df.columns)}, read {len(df_readback)} rows {list(df_readback.columns)}"
        )
        raise RuntimeError(msg)
    return path
