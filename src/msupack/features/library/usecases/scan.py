"""
Summary: Build library entries from a folder of audio files.
Why: Give slot assignment a ready list with format and cache status resolved.
"""

from __future__ import annotations

from pathlib import Path

import mutagen
from mutagen import MutagenError

from msupack.config.settings import SUPPORTED_AUDIO_EXTENSIONS, TARGET_AUDIO_FORMAT
from msupack.platform.logging import logger

from ..domain.models import LibraryEntry
from .pcm_cache import PcmCache


def read_display_name(path: Path) -> str:
    """Return the ``title`` tag of ``path`` or, failing that, its stem."""

    if path.suffix.lower().lstrip(".") == TARGET_AUDIO_FORMAT:
        # Raw MSU-1 PCM carries no tags.
        return path.stem
    try:
        audio = mutagen.File(path, easy=True)
    except (MutagenError, OSError) as exc:
        logger.debug("Could not read tags from %s: %s", path, exc)
        return path.stem
    if audio is None or audio.tags is None:
        return path.stem
    titles = audio.tags.get("title") or []
    title = str(titles[0]).strip() if titles else ""
    return title or path.stem


def build_entry(path: Path, cache: PcmCache | None = None) -> LibraryEntry:
    """Create a ``LibraryEntry`` for ``path`` with its cache state resolved."""

    cached = None
    if cache is not None and path.suffix.lower().lstrip(".") != TARGET_AUDIO_FORMAT:
        cached = cache.lookup(path)
    return LibraryEntry(name=read_display_name(path), source_path=path, cached_pcm_path=cached)


def scan_library(directory: Path, cache: PcmCache | None = None) -> list[LibraryEntry]:
    """Scan ``directory`` (non-recursively) for supported audio files."""

    if not directory.is_dir():
        raise NotADirectoryError(f"Library path is not a directory: {directory}")

    files = sorted(
        (
            entry
            for entry in directory.iterdir()
            if entry.is_file() and entry.suffix.lower() in SUPPORTED_AUDIO_EXTENSIONS
        ),
        key=lambda entry: entry.name.lower(),
    )
    entries = [build_entry(path, cache) for path in files]
    logger.debug("Scanned %d audio file(s) in %s", len(entries), directory)
    return entries


__all__ = ["build_entry", "read_display_name", "scan_library"]
