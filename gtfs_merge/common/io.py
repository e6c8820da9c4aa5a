from __future__ import annotations

import csv
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from gtfs_merge.errors import CsvReadError


def _checked_rows(reader, path: Path) -> Iterator[list[str]]:
    try:
        for row in reader:
            yield row
    except (csv.Error, UnicodeDecodeError) as e:
        raise CsvReadError(path, reader.line_num, str(e)) from e


@contextmanager
def table_reader(path: str | os.PathLike[str], encoding: str = "utf-8-sig"):
    """Open a table file and yield an iterator of rows (lists of field strings).

    The file is closed when the block exits, including on parse errors.
    `utf-8-sig` strips a leading byte order mark so the first column name
    compares equal to the plain GTFS name.
    """
    p = Path(path)
    with open(p, newline="", encoding=encoding) as fh:
        yield _checked_rows(csv.reader(fh), p)


def has_table(feed_dir: Path, table_name: str) -> bool:
    return (Path(feed_dir) / table_name).is_file()
