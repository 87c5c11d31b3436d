"""
Summary: Locate previously converted PCM copies of library audio.
Why: Let entries point at cached PCM so the apply engine never converts.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from msupack.config.settings import TRACK_EXTENSION


class PcmCache:
    """Read-only view over a directory of converted PCM files."""

    def __init__(self, cache_dir: Path) -> None:
        self._cache_dir: Path = cache_dir

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def cache_path_for(self, source: Path) -> Path:
        """Return where the converted copy of ``source`` lives (whether or not it exists)."""

        digest = hashlib.sha1(str(source.resolve()).encode("utf-8")).hexdigest()[:12]
        return self._cache_dir / f"{source.stem}-{digest}{TRACK_EXTENSION}"

    def lookup(self, source: Path) -> Path | None:
        """Return the cached PCM path when it exists and is not older than ``source``."""

        cached = self.cache_path_for(source)
        try:
            cached_mtime = cached.stat().st_mtime
        except FileNotFoundError:
            return None
        try:
            source_mtime = source.stat().st_mtime
        except FileNotFoundError:
            return cached
        if source_mtime > cached_mtime:
            return None
        return cached


__all__ = ["PcmCache"]
