"""Merge several GTFS feeds into one, deduplicating each table on its identifier columns."""
from gtfs_merge.catalog import PRIMARY_ID_FIELDS
from gtfs_merge.config import MergeCfg
from gtfs_merge.errors import (
    ConfigurationError,
    CsvReadError,
    GtfsMergeError,
    NoHeaderFound,
    ZipOpenError,
)
from gtfs_merge.merge.feeds import (
    MergeReport,
    merge_feed_dirs,
    merge_feeds,
    merge_feeds_from_folders,
    merge_feeds_from_zips,
)

__version__ = "0.1.0"

__all__ = [
    "PRIMARY_ID_FIELDS",
    "MergeCfg",
    "MergeReport",
    "ConfigurationError",
    "CsvReadError",
    "GtfsMergeError",
    "NoHeaderFound",
    "ZipOpenError",
    "merge_feed_dirs",
    "merge_feeds",
    "merge_feeds_from_folders",
    "merge_feeds_from_zips",
]
