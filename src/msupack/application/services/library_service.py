"""Application service listing audio files that can be assigned to track slots."""

from __future__ import annotations

from pathlib import Path
from typing import final

from msupack.config.settings import PCM_CACHE_DIR
from msupack.features.library import LibraryEntry, PcmCache, scan_library


@final
class LibraryService:
    """Scan directories against the shared PCM conversion cache."""

    def __init__(self, *, cache: PcmCache | None = None) -> None:
        self._cache: PcmCache = cache or PcmCache(PCM_CACHE_DIR)

    @property
    def cache(self) -> PcmCache:
        return self._cache

    def scan(self, directory: Path) -> list[LibraryEntry]:
        return scan_library(directory, cache=self._cache)
