"""Deduplication keys for aligned rows.

Key kinds:
    str        -> identifier value(s); equal keys overwrite each other
    uuid.UUID  -> synthetic key, one per row; never equal to a string key
    None       -> the row has an empty single identifier and is dropped

Single and composite identifiers treat empty values differently. A single
empty id drops the row. A composite key made only of empty values is kept,
so such rows collapse onto each other (last one wins).
"""
from __future__ import annotations

import uuid
from typing import Callable, Optional, Sequence, Union

MergeKey = Union[str, uuid.UUID]

KEY_SEPARATOR = "_"


def synthetic_key() -> uuid.UUID:
    return uuid.uuid4()


def make_key_builder(
    reference_header: Sequence[str], id_fields: Sequence[str]
) -> Callable[[Sequence[str]], Optional[MergeKey]]:
    positions = {name: i for i, name in enumerate(reference_header)}

    if not id_fields:
        return lambda _row: synthetic_key()

    if len(id_fields) == 1:
        idx = positions.get(id_fields[0])
        if idx is None:
            return lambda _row: synthetic_key()

        def single(row: Sequence[str]) -> Optional[MergeKey]:
            value = row[idx]
            return value if value else None

        return single

    # absent columns contribute nothing, not even the separator
    idxs = [positions[f] for f in id_fields if f in positions]

    def composite(row: Sequence[str]) -> MergeKey:
        return "".join(row[i] + KEY_SEPARATOR for i in idxs)

    return composite


def build_key(
    aligned_row: Sequence[str], reference_header: Sequence[str], id_fields: Sequence[str]
) -> Optional[MergeKey]:
    return make_key_builder(reference_header, id_fields)(aligned_row)
