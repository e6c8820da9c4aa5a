"""Feed-set merge: one output file per catalog table found in any feed.

Entry points:
    merge_feeds_from_folders(root, out, mode) -> bool   feeds are root's subdirectories
    merge_feeds_from_zips(root, out, mode)    -> bool   feeds are root's *.zip archives
    merge_feed_dirs(feed_dirs, out, mode)     -> bool   feeds already resolved

The `merge_folders` / `merge_zips` / `merge_feed_set` variants return the full
MergeReport instead of a bool. A False result means "nothing to merge"
(missing root, no feeds, no archives); bad arguments raise ConfigurationError.
"""
from __future__ import annotations

import functools
import logging
import tempfile
from contextlib import ExitStack
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from gtfs_merge.catalog import id_fields_for, table_names
from gtfs_merge.common.io import has_table
from gtfs_merge.common.progress import progress_bar
from gtfs_merge.config import MergeCfg
from gtfs_merge.errors import ConfigurationError, NoHeaderFound
from gtfs_merge.io.zip_extractor import discover_zips, extract_zip
from gtfs_merge.lib.io_guards import ensure_output_outside, write_table
from gtfs_merge.merge.table import merge_table

logger = logging.getLogger(__name__)

Expand = Callable[[Path, Path], Optional[Path]]


@dataclass
class MergeReport:
    ok: bool
    output_dir: str
    sources: List[str] = field(default_factory=list)
    tables: List[Dict] = field(default_factory=list)
    written: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    dry_run: bool = False
    reason: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


def _require_paths(**paths) -> None:
    for label, value in paths.items():
        if value is None or str(value).strip() == "":
            raise ConfigurationError(f"{label} cannot be empty")


def discover_feed_dirs(root: Path) -> List[Path]:
    """Immediate subdirectories of `root`, sorted by name."""
    return sorted((p for p in Path(root).iterdir() if p.is_dir()), key=lambda p: p.name)


def merge_feed_set(
    feed_dirs: Sequence[Path],
    output_dir: Path,
    header_mode: Optional[str] = None,
    *,
    input_roots: Optional[Iterable[Path]] = None,
    cfg: Optional[MergeCfg] = None,
) -> MergeReport:
    cfg = (cfg or MergeCfg()).validate()
    _require_paths(output_dir=output_dir)
    feed_dirs = [Path(d) for d in feed_dirs]
    mode = header_mode if header_mode is not None else cfg.header_mode
    report = MergeReport(
        ok=False,
        output_dir=str(output_dir),
        sources=[str(d) for d in feed_dirs],
        dry_run=cfg.dry_run,
    )

    if not feed_dirs:
        logger.warning("No feeds found!")
        report.reason = "no feeds found"
        return report

    roots = list(input_roots) if input_roots is not None else sorted({d.parent for d in feed_dirs})
    out = ensure_output_outside(output_dir, [*roots, *feed_dirs])
    if not cfg.dry_run:
        out.mkdir(parents=True, exist_ok=True)

    names = table_names()
    with progress_bar(total=len(names), desc="merge tables", unit="tables", enabled=cfg.progress) as bar:
        for table_name in names:
            files = [d / table_name for d in feed_dirs if has_table(d, table_name)]
            if not files:
                logger.debug(f"{table_name}: not present in any feed")
                report.skipped.append(table_name)
                bar.update(1)
                continue

            try:
                merged = merge_table(
                    files,
                    id_fields_for(table_name),
                    mode,
                    name=table_name,
                    encoding=cfg.encoding,
                )
            except NoHeaderFound:
                if cfg.on_missing_header != "skip":
                    raise
                logger.warning(f"{table_name}: no header in any of {len(files)} file(s); skipped")
                report.skipped.append(table_name)
                bar.update(1)
                continue

            report.tables.append(merged.summary())
            if cfg.dry_run:
                logger.info(f"DRY RUN: would write {len(merged.rows)} rows -> {out / table_name}")
            else:
                path = write_table(merged.header, merged.rows, out / table_name, encoding=cfg.output_encoding)
                report.written.append(str(path))
                logger.info(f"{table_name}: {len(files)} file(s), {len(merged.rows)} rows -> {path}")
            bar.update(1)

    report.ok = True
    return report


def merge_feed_dirs(
    feed_dirs: Sequence[Path],
    output_dir: Path,
    header_mode: Optional[str] = None,
    *,
    input_roots: Optional[Iterable[Path]] = None,
    cfg: Optional[MergeCfg] = None,
) -> bool:
    return merge_feed_set(feed_dirs, output_dir, header_mode, input_roots=input_roots, cfg=cfg).ok


def merge_folders(
    root: Path, output_dir: Path, header_mode: Optional[str] = None, *, cfg: Optional[MergeCfg] = None
) -> MergeReport:
    _require_paths(root=root, output_dir=output_dir)
    root = Path(root)
    if not root.is_dir():
        logger.warning(f"Root folder does not exist or is not a directory: {root}")
        return MergeReport(ok=False, output_dir=str(output_dir), reason="root folder not found")

    ensure_output_outside(output_dir, [root])
    feed_dirs = discover_feed_dirs(root)
    logger.info(f"Discovered {len(feed_dirs)} feed folder(s) in {root}")
    return merge_feed_set(feed_dirs, output_dir, header_mode, input_roots=[root], cfg=cfg)


def merge_zips(
    root: Path,
    output_dir: Path,
    header_mode: Optional[str] = None,
    *,
    expand: Optional[Expand] = None,
    password: Optional[str] = None,
    cfg: Optional[MergeCfg] = None,
) -> MergeReport:
    """Expand every archive under `root` into a temporary folder and merge them.

    `expand(archive, target_dir)` extracts one archive and returns the feed
    directory (None means `target_dir` itself). Temporary folders are removed
    when the merge finishes or fails.
    """
    _require_paths(root=root, output_dir=output_dir)
    cfg = (cfg or MergeCfg()).validate()
    root = Path(root)
    if not root.is_dir():
        logger.warning(f"Root folder does not exist or is not a directory: {root}")
        return MergeReport(ok=False, output_dir=str(output_dir), reason="root folder not found")

    ensure_output_outside(output_dir, [root])
    zips = discover_zips(root)
    if not zips:
        logger.warning("No ZIP files found!")
        return MergeReport(ok=False, output_dir=str(output_dir), reason="no archives found")

    if expand is None:
        expand = functools.partial(extract_zip, password=password, progress=cfg.progress)

    with ExitStack() as stack:
        feed_dirs: List[Path] = []
        for z in zips:
            tmp = Path(stack.enter_context(tempfile.TemporaryDirectory(prefix=z.stem + "_")))
            expanded = expand(z, tmp)
            feed_dirs.append(Path(expanded) if expanded is not None else tmp)
        report = merge_feed_set(feed_dirs, output_dir, header_mode, input_roots=[root], cfg=cfg)

    report.sources = [str(z) for z in zips]
    return report


def merge_feeds_from_folders(
    root: Path, output_dir: Path, header_mode: Optional[str] = None, *, cfg: Optional[MergeCfg] = None
) -> bool:
    return merge_folders(root, output_dir, header_mode, cfg=cfg).ok


def merge_feeds_from_zips(
    root: Path,
    output_dir: Path,
    header_mode: Optional[str] = None,
    *,
    expand: Optional[Expand] = None,
    password: Optional[str] = None,
    cfg: Optional[MergeCfg] = None,
) -> bool:
    return merge_zips(root, output_dir, header_mode, expand=expand, password=password, cfg=cfg).ok


merge_feeds = merge_feeds_from_folders
