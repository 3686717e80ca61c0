"""Table output: CSV, Excel, and XPT v5 writers."""

from ctlookup.io.table_writer import OutputFormat, table_stem, write_table
from ctlookup.io.xpt_writer import XPTValidationError, validate_for_xpt_v5, write_xpt_v5

__all__ = [
    "OutputFormat",
    "table_stem",
    "write_table",
    "write_xpt_v5",
    "validate_for_xpt_v5",
    "XPTValidationError",
]
