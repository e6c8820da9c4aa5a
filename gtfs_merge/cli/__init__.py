"""CLI entrypoint package.

Run as `python -m gtfs_merge.cli.merge_runner` or through the `gtfs-merge`
console script.

Modules:
    merge_runner: merge GTFS feeds from folders or zip archives
"""

__all__ = ["merge_runner"]
