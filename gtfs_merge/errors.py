"""Error taxonomy for the GTFS merge.

"Nothing to merge" (no feeds, no archives) is not an error: the feed-set
entry points return False for it.
"""
from __future__ import annotations


class GtfsMergeError(RuntimeError): ...


class ConfigurationError(GtfsMergeError, ValueError):
    """Bad arguments (missing paths, output inside input). Fix and re-invoke."""


class NoHeaderFound(GtfsMergeError):
    """Every candidate file for a table had an empty or missing first row."""

    def __init__(self, table: str | None = None, files=()):
        self.table = table
        self.files = [str(f) for f in files]
        label = table or "table"
        super().__init__(f"No valid headers found for {label} in {len(self.files)} input file(s)")


class CsvReadError(GtfsMergeError):
    """Malformed tabular text in one input file."""

    def __init__(self, path, line: int | None, reason: str):
        self.path = str(path)
        self.line = line
        where = f"{self.path}:{line}" if line is not None else self.path
        super().__init__(f"Failed to parse {where}: {reason}")


class ZipOpenError(GtfsMergeError): ...
