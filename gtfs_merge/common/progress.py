# gtfs_merge/common/progress.py
from __future__ import annotations
import os
import sys
import time
from contextlib import contextmanager
from typing import Optional

from tqdm import tqdm


def _should_show_tqdm() -> bool:
    """Determine if tqdm should be shown.

    - GTFS_MERGE_TQDM=1 forces display
    - GTFS_MERGE_TQDM=0 disables
    - CI environment disables
    - Otherwise show only when stderr (where tqdm draws) is a TTY
    """
    if os.getenv("GTFS_MERGE_TQDM") == "1":
        return True
    if os.getenv("GTFS_MERGE_TQDM") == "0":
        return False

    if os.getenv("CI"):
        return False

    isatty = getattr(sys.stderr, "isatty", None)
    return bool(isatty and isatty())


class Timer:
    def __init__(self, label: str = "task"):
        self.label = label
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        print(f">>> {self.label} ...")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        status = "OK" if exc is None else "ERROR"
        print(f"[{status}] {self.label}: {self.elapsed:.2f}s")


@contextmanager
def progress_bar(total: Optional[int], desc: str = "", unit: str = "items", enabled: bool = True):
    """Context manager that returns a tqdm bar.

    The bar is always a real tqdm instance; it is disabled (renders nothing)
    when `enabled` is False or the environment says not to draw.
    """
    disable = not (enabled and _should_show_tqdm())
    with tqdm(total=total, desc=desc, unit=unit, leave=False, disable=disable) as bar:
        yield bar
