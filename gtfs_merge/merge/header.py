"""Reference header selection.

Only the first row of each file is read. The file is closed again before
returning, so the table merger reopens it from the start for the data rows.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from gtfs_merge.common.io import table_reader
from gtfs_merge.config import normalize_header_mode
from gtfs_merge.errors import NoHeaderFound

logger = logging.getLogger(__name__)


def read_header(path: Path, encoding: str = "utf-8-sig") -> Optional[List[str]]:
    """Return the first row of `path`, or None when it is missing or empty."""
    with table_reader(path, encoding=encoding) as rows:
        header = next(rows, None)
    if not header:
        return None
    return header


def select_header(
    table_files: Iterable[Path],
    mode: Optional[str] = None,
    *,
    table: Optional[str] = None,
    encoding: str = "utf-8-sig",
) -> List[str]:
    """Pick the reference header across `table_files`.

    mode:
        "long"  -> the header with the most columns (first one wins ties)
        "short" -> the header with the fewest columns (first one wins ties)
        other / None -> the first header found, in input order

    Raises NoHeaderFound when no file has a usable first row.
    """
    files = list(table_files)
    headers: List[List[str]] = []
    for f in files:
        header = read_header(f, encoding=encoding)
        if header is None:
            logger.debug(f"no header in {f}")
            continue
        headers.append(header)

    if not headers:
        raise NoHeaderFound(table, files)

    choice = normalize_header_mode(mode)
    # max()/min() return the first extreme element, which gives the tie-break
    if choice == "long":
        return max(headers, key=len)
    if choice == "short":
        return min(headers, key=len)
    return headers[0]
