"""
ZIP Discovery & Extraction Utility

Purpose:
    Find one GTFS archive per feed under a root directory and expand each
    archive into a directory that the feed-set merger reads like any other
    feed folder. Handles standard (ZipCrypto or unencrypted) and
    AES-encrypted archives via pyzipper.

`extract_zip(zip_path, target_dir)` is the default `expand` collaborator of
`gtfs_merge.merge.feeds.merge_feeds_from_zips`.
"""

import logging
import zipfile
from pathlib import Path, PurePosixPath
from typing import List, Optional

import pyzipper

from gtfs_merge.common.progress import progress_bar
from gtfs_merge.errors import ZipOpenError

logger = logging.getLogger(__name__)


def discover_zips(root: Path) -> List[Path]:
    """Return the `*.zip` files directly under `root`, sorted by name."""
    root = Path(root)
    if not root.is_dir():
        logger.warning(f"Root directory not found: {root}")
        return []
    zips = sorted(
        (p for p in root.iterdir() if p.is_file() and p.suffix.lower() == ".zip"),
        key=lambda p: p.name,
    )
    logger.info(f"Discovered {len(zips)} ZIP file(s) in {root}")
    return zips


def _open_zip_any(zip_path: Path, password: Optional[str]):
    """Open a ZIP with AES (pyzipper) or ZipCrypto/plain (zipfile) support."""
    zp = Path(zip_path)
    pwd = password.encode("utf-8") if password else None
    try:
        zf = pyzipper.AESZipFile(zp, mode="r")
        if pwd:
            zf.setpassword(pwd)
        _ = zf.namelist()
        return zf
    except Exception as e_py:
        try:
            zf2 = zipfile.ZipFile(zp, mode="r")
            if pwd:
                zf2.setpassword(pwd)
            _ = zf2.namelist()
            return zf2
        except Exception as e_zip:
            raise ZipOpenError(f"Failed to open ZIP '{zp}': {e_py!r} / {e_zip!r}") from e_zip


def _safe_target(target_dir: Path, member: str) -> Path:
    rel = PurePosixPath(member.replace("\\", "/"))
    if rel.is_absolute() or ".." in rel.parts:
        raise ZipOpenError(f"Refusing to extract member outside target dir: {member}")
    return target_dir.joinpath(*rel.parts)


def extract_zip(
    zip_path: Path,
    target_dir: Path,
    password: Optional[str] = None,
    progress: bool = True,
) -> Path:
    """Extract every member of `zip_path` into `target_dir` and return it.

    Raises ZipOpenError for unreadable archives, a bad password, or members
    that would land outside `target_dir`.
    """
    zip_path = Path(zip_path)
    target_dir = Path(target_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    num_files = 0
    zf = _open_zip_any(zip_path, password)
    try:
        members = zf.namelist()
        desc = f"unzip {zip_path.name[:30]}"
        with progress_bar(total=len(members), desc=desc, unit="files", enabled=progress) as bar:
            for member in members:
                target = _safe_target(target_dir, member)
                if member.endswith("/"):
                    target.mkdir(parents=True, exist_ok=True)
                    bar.update(1)
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                try:
                    data = zf.read(member)
                except RuntimeError as e:
                    # zipfile/pyzipper signal a missing or wrong password this way
                    raise ZipOpenError(f"ZIP password error for {zip_path} ({member}): {e}") from e
                with open(target, "wb") as f:
                    f.write(data)
                num_files += 1
                bar.update(1)
    finally:
        zf.close()

    logger.debug(f"Extracted {num_files} file(s) from {zip_path.name} to {target_dir}")
    return target_dir
