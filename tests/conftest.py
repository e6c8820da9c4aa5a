import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path so tests can import local modules
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _no_progress_bars(monkeypatch):
    monkeypatch.setenv("GTFS_MERGE_TQDM", "0")
    yield


def write_feed_file(feed_dir: Path, name: str, text: str) -> Path:
    feed_dir.mkdir(parents=True, exist_ok=True)
    p = feed_dir / name
    p.write_text(text, encoding="utf-8")
    return p


@pytest.fixture
def feed_file():
    return write_feed_file
