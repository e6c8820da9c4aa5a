"""Merge same-named table files into one table.

Rows from every file are aligned to one reference header and stored in an
insertion-ordered dict keyed by their merge key. A repeated key replaces the
stored row but keeps its original position, so output order follows the
first time each key was seen while content follows the last file that had it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from gtfs_merge.common.io import table_reader
from gtfs_merge.merge.align import make_aligner
from gtfs_merge.merge.header import select_header
from gtfs_merge.merge.keys import MergeKey, make_key_builder

logger = logging.getLogger(__name__)


@dataclass
class MergedTable:
    """Reference header plus merged rows for one table name."""
    header: List[str]
    rows: List[List[str]] = field(default_factory=list)
    name: Optional[str] = None
    files: int = 0
    rows_read: int = 0
    rows_dropped: int = 0
    rows_replaced: int = 0

    def summary(self) -> Dict:
        return {
            "table": self.name,
            "files": self.files,
            "columns": len(self.header),
            "rows_read": self.rows_read,
            "rows_written": len(self.rows),
            "rows_dropped": self.rows_dropped,
            "rows_replaced": self.rows_replaced,
        }


def merge_table(
    table_files: Iterable[Path],
    id_fields: Sequence[str],
    header_mode: Optional[str] = None,
    *,
    name: Optional[str] = None,
    encoding: str = "utf-8-sig",
) -> MergedTable:
    """Merge `table_files` deduplicating on `id_fields`.

    Raises NoHeaderFound if no file has a header, CsvReadError on malformed
    text. Later files win key conflicts.
    """
    files = [Path(f) for f in table_files]
    ref_header = select_header(files, header_mode, table=name, encoding=encoding)
    key_of = make_key_builder(ref_header, id_fields)

    merged: Dict[MergeKey, List[str]] = {}
    result = MergedTable(header=list(ref_header), name=name)

    for f in files:
        with table_reader(f, encoding=encoding) as rows:
            file_header = next(rows, None)
            if not file_header:
                logger.debug(f"skipping {f}: no header")
                continue
            result.files += 1
            align = make_aligner(file_header, ref_header)
            for row in rows:
                if not row:
                    continue
                result.rows_read += 1
                aligned = align(row)
                key = key_of(aligned)
                if key is None:
                    result.rows_dropped += 1
                    continue
                if key in merged:
                    result.rows_replaced += 1
                merged[key] = aligned

    result.rows = list(merged.values())
    logger.debug(
        f"{name or 'table'}: {result.rows_read} read, {len(result.rows)} kept, "
        f"{result.rows_replaced} replaced, {result.rows_dropped} dropped"
    )
    return result
