from __future__ import annotations

from dataclasses import dataclass

from gtfs_merge.errors import ConfigurationError

HEADER_MODES = ("long", "short")
MISSING_HEADER_POLICIES = ("abort", "skip")


@dataclass
class MergeCfg:
    # None or any value other than "long"/"short" keeps the first header found
    header_mode: str | None = None
    # "abort": NoHeaderFound stops the whole feed set; "skip": move on to the next table
    on_missing_header: str = "abort"
    encoding: str = "utf-8-sig"
    output_encoding: str = "utf-8"
    dry_run: bool = False
    progress: bool = True

    def validate(self) -> "MergeCfg":
        if self.on_missing_header not in MISSING_HEADER_POLICIES:
            raise ConfigurationError(
                f"on_missing_header must be one of {MISSING_HEADER_POLICIES}, got {self.on_missing_header!r}"
            )
        return self


def normalize_header_mode(mode: str | None) -> str | None:
    """Lower-case 'long'/'short'; everything else maps to None (first header)."""
    if mode is None:
        return None
    m = str(mode).strip().lower()
    return m if m in HEADER_MODES else None
