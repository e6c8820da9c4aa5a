#!/usr/bin/env python3
"""Command line runner for the GTFS merge.

Subcommands:
    folders  every immediate subdirectory of --input is one feed
    zips     every *.zip directly under --input is one feed

Exit codes: 0 merged, 2 nothing to merge / no subcommand,
3 bad arguments, 4 merge failed.
"""
from __future__ import annotations
import argparse
import json
import logging
import os
import sys

from gtfs_merge.common.progress import Timer
from gtfs_merge.config import MergeCfg
from gtfs_merge.errors import ConfigurationError, GtfsMergeError
from gtfs_merge.merge.feeds import merge_folders, merge_zips

logger = logging.getLogger("gtfs_merge.cli")


def _configure_logging() -> None:
    lvl_name = os.getenv("GTFS_MERGE_LOG_LEVEL", "INFO")
    lvl = getattr(logging, lvl_name.upper(), logging.INFO)
    if not isinstance(lvl, int):
        lvl = logging.INFO
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gtfs-merge", description="Merge several GTFS feeds into one")
    sub = parser.add_subparsers(dest="cmd")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--input", "-i", required=True, help="Root folder holding the feeds")
    common.add_argument("--output", "-o", required=True, help="Folder for the merged tables (must be outside --input)")
    common.add_argument(
        "--header",
        default=None,
        help="Reference header: 'long' (most columns), 'short' (fewest) or anything else for the first found",
    )
    common.add_argument(
        "--on-missing-header",
        choices=["abort", "skip"],
        default="abort",
        help="What to do when no file of a table has a header row",
    )
    common.add_argument("--dry-run", action="store_true", help="Merge and report, but write nothing")
    common.add_argument("--no-progress", action="store_true", help="Never draw progress bars")
    common.add_argument("--json", action="store_true", help="Print the merge report as JSON")

    sub.add_parser("folders", parents=[common], help="Merge feeds stored as subfolders")
    p_zip = sub.add_parser("zips", parents=[common], help="Merge feeds stored as zip archives")
    p_zip.add_argument("--password", default=None, help="Password for encrypted archives")
    return parser


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    _configure_logging()

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.cmd not in ("folders", "zips"):
        parser.print_help()
        return 2

    cfg = MergeCfg(
        header_mode=args.header,
        on_missing_header=args.on_missing_header,
        dry_run=args.dry_run,
        progress=not args.no_progress,
    )

    try:
        with Timer(f"gtfs-merge {args.cmd} [{args.input} -> {args.output}]"):
            if args.cmd == "folders":
                report = merge_folders(args.input, args.output, cfg=cfg)
            else:
                report = merge_zips(args.input, args.output, password=args.password, cfg=cfg)
    except ConfigurationError as e:
        logger.error(str(e))
        return 3
    except (GtfsMergeError, OSError) as e:
        logger.error(f"Merge failed: {e}")
        return 4

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, default=str))

    if not report.ok:
        print(f"Merge operation failed: {report.reason}")
        return 2
    print(f"Merge operation is successful: {len(report.tables)} table(s) merged into {report.output_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
