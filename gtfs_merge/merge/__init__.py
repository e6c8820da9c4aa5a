from gtfs_merge.merge.align import align_row, make_aligner
from gtfs_merge.merge.header import read_header, select_header
from gtfs_merge.merge.keys import build_key, make_key_builder
from gtfs_merge.merge.table import MergedTable, merge_table

__all__ = [
    "align_row",
    "make_aligner",
    "read_header",
    "select_header",
    "build_key",
    "make_key_builder",
    "MergedTable",
    "merge_table",
]
