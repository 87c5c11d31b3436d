"""Summary: Remote sprite catalog with an instance-scoped list cache.
Why: Fetch the list once per owner and keep downloaded sprites on local disk."""

from __future__ import annotations

import re
import threading
from collections.abc import Sequence
from pathlib import Path

from msupack.config.settings import SPRITE_CACHE_DIR, SPRITE_CATALOG_URL
from msupack.platform.filesystem import ensure_directory
from msupack.platform.http import HTTPClient, RequestsHTTPClient
from msupack.platform.logging import logger

from ..domain.models import SpriteEntry

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


class SpriteCatalogError(RuntimeError):
    """Raised when the catalog list or a sprite file cannot be fetched."""


def sanitize_file_name(name: str) -> str:
    """Drop characters that are invalid in file names on common platforms."""

    cleaned = _INVALID_FILENAME_CHARS.sub("", name).strip().rstrip(".")
    return cleaned or "sprite"


class SpriteCatalog:
    """Catalog client whose cached list lives and dies with the instance."""

    def __init__(
        self,
        *,
        http: HTTPClient | None = None,
        cache_dir: Path = SPRITE_CACHE_DIR,
        url: str = SPRITE_CATALOG_URL,
    ) -> None:
        self._http: HTTPClient = http or RequestsHTTPClient()
        self._cache_dir: Path = cache_dir
        self._url: str = url
        self._lock: threading.Lock = threading.Lock()
        self._entries: list[SpriteEntry] | None = None

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def entries(self) -> list[SpriteEntry]:
        """Return the catalog, fetching it on first use."""

        with self._lock:
            if self._entries is None:
                self._entries = self._fetch_entries()
            return list(self._entries)

    def invalidate(self) -> None:
        """Forget the cached list so the next call refetches it."""

        with self._lock:
            self._entries = None

    def search(self, query: str) -> list[SpriteEntry]:
        return [entry for entry in self.entries() if entry.matches(query)]

    def find(self, name: str) -> SpriteEntry | None:
        """Return the entry whose name equals ``name`` ignoring case."""

        wanted = name.strip().casefold()
        for entry in self.entries():
            if entry.name.casefold() == wanted:
                return entry
        return None

    def local_path_for(self, entry: SpriteEntry) -> Path:
        return self._cache_dir / f"{sanitize_file_name(entry.name)}.zspr"

    def download(self, entry: SpriteEntry) -> Path:
        """Return a local copy of ``entry``'s sprite, downloading it when absent."""

        local_path = self.local_path_for(entry)
        if local_path.is_file():
            logger.debug("Using cached sprite %s", local_path)
            return local_path
        if not entry.file:
            raise SpriteCatalogError(f"Sprite '{entry.name}' has no download URL")

        logger.info(
            "Downloading sprite '%s' from %s",
            entry.name,
            entry.file,
            extra={"apply_event": "sprites.download", "source_path": entry.name},
        )
        result = self._http.get(entry.file)
        if not result.ok or result.content is None:
            raise SpriteCatalogError(
                f"Download failed for sprite '{entry.name}' (status={result.status})"
            )

        _ = ensure_directory(self._cache_dir)
        partial = local_path.with_suffix(".part")
        _ = partial.write_bytes(result.content)
        _ = partial.replace(local_path)
        return local_path

    def _fetch_entries(self) -> list[SpriteEntry]:
        result = self._http.get(self._url)
        if not result.ok:
            raise SpriteCatalogError(
                f"Failed to load sprite list from {self._url} (status={result.status})"
            )
        try:
            payload = result.json()
        except ValueError as exc:
            raise SpriteCatalogError(f"Malformed sprite list from {self._url}: {exc}") from exc
        if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes)):
            raise SpriteCatalogError(f"Unexpected sprite list payload from {self._url}")

        entries = [
            SpriteEntry.from_json(item)
            for item in payload
            if isinstance(item, dict)
        ]
        entries = [entry for entry in entries if entry.name]
        logger.debug("Loaded %d sprite(s) from %s", len(entries), self._url)
        return entries


__all__ = ["SpriteCatalog", "SpriteCatalogError", "sanitize_file_name"]
