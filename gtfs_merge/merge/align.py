from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence


def _column_index(header: Sequence[str]) -> Dict[str, int]:
    # duplicate names resolve to their last position
    return {name: i for i, name in enumerate(header)}


def make_aligner(
    source_header: Sequence[str], reference_header: Sequence[str]
) -> Callable[[Sequence[str]], List[str]]:
    """Precompute where each reference column lives in the source file.

    The returned function maps a source row onto the reference layout:
    columns missing from the source, or past the end of a short row, become
    "". Source columns outside the reference header are dropped.
    """
    src_index = _column_index(source_header)
    plan: List[Optional[int]] = [src_index.get(col) for col in reference_header]

    def align(row: Sequence[str]) -> List[str]:
        n = len(row)
        return [row[k] if k is not None and k < n else "" for k in plan]

    return align


def align_row(
    row: Sequence[str], source_header: Sequence[str], reference_header: Sequence[str]
) -> List[str]:
    return make_aligner(source_header, reference_header)(row)
