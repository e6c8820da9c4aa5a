"""Output path guards and atomic table writes.

Purpose
-------
Keep the merge from writing into the feeds it is reading, and make each
output table appear on disk in one step:

- `ensure_output_outside()` rejects an output directory that is equal to or
  nested inside any input root. It runs before the output directory is
  created, so a rejected run leaves nothing behind.
- `write_table()` builds a string-typed DataFrame from the merged rows and
  writes it to a temporary file next to the target, then renames it into
  place.
"""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd

from gtfs_merge.errors import ConfigurationError


def _is_within(child: Path, parent: Path) -> bool:
    return child == parent or parent in child.parents


def ensure_output_outside(output_dir: Path | str, input_roots: Iterable[Path | str]) -> Path:
    """Return the resolved output dir, or raise ConfigurationError.

    Containment is checked on resolved path components: `/data/feeds2` is
    not inside `/data/feeds`.
    """
    out = Path(output_dir).resolve()
    for root in input_roots:
        r = Path(root).resolve()
        if _is_within(out, r):
            raise ConfigurationError(f"Output folder {out} cannot be inside input folder {r}")
    return out


def write_table(
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    path: Path | str,
    *,
    encoding: str = "utf-8",
) -> Path:
    """Atomically write `header` + `rows` as comma-separated text to `path`."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(list(rows), columns=list(header), dtype=str)

    fd, tmp_name = tempfile.mkstemp(dir=str(p.parent), prefix=p.name + ".tmp.")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", newline="", encoding=encoding) as fh:
            df.to_csv(fh, index=False, lineterminator="\n")
        os.chmod(tmp, 0o644)
        tmp.replace(p)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return p
