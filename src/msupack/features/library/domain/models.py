"""Summary: Library entry model describing one candidate audio source.
Why: Keep format/cache derivations pure and consistent with the source path."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from msupack.config.settings import TARGET_AUDIO_FORMAT


@dataclass(slots=True, frozen=True)
class SourceFormat:
    """Lower-case extension (without dot) derived from a source path."""

    extension: str

    @classmethod
    def from_path(cls, path: Path) -> "SourceFormat":
        return cls(extension=path.suffix.lstrip(".").lower())

    @property
    def tag(self) -> str:
        return self.extension.upper()

    @property
    def is_target_format(self) -> bool:
        return self.extension == TARGET_AUDIO_FORMAT


class LibraryEntry:
    """An audio file the user can assign to a playback slot.

    ``cached_pcm_path`` is ``None`` when no converted copy exists or the
    source is newer than the cached one.
    """

    __slots__ = ("name", "_source", "cached_pcm_path")

    name: str
    cached_pcm_path: Path | None
    _source: tuple[Path, SourceFormat]

    def __init__(
        self,
        name: str,
        source_path: Path | str,
        cached_pcm_path: Path | str | None = None,
    ) -> None:
        self.name = name
        self.source_path = Path(source_path)
        self.cached_pcm_path = Path(cached_pcm_path) if cached_pcm_path is not None else None

    @property
    def source_path(self) -> Path:
        return self._source[0]

    @source_path.setter
    def source_path(self, value: Path | str) -> None:
        path = Path(value)
        # Path and format are swapped in one assignment.
        self._source = (path, SourceFormat.from_path(path))

    @property
    def source_format(self) -> SourceFormat:
        return self._source[1]

    @property
    def format_tag(self) -> str:
        return self.source_format.tag

    @property
    def is_pcm(self) -> bool:
        return self.source_format.is_target_format

    @property
    def assignable_path(self) -> Path:
        return self.cached_pcm_path if self.cached_pcm_path is not None else self.source_path

    @property
    def needs_conversion(self) -> bool:
        return not self.is_pcm and self.cached_pcm_path is None

    @property
    def is_cached(self) -> bool:
        return self.cached_pcm_path is not None

    def __repr__(self) -> str:
        return (
            f"LibraryEntry(name={self.name!r}, source_path={self.source_path!r}, "
            f"cached_pcm_path={self.cached_pcm_path!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LibraryEntry):
            return NotImplemented
        return (self.name, self.source_path, self.cached_pcm_path) == (
            other.name,
            other.source_path,
            other.cached_pcm_path,
        )

    __hash__ = None  # type: ignore[assignment]


__all__ = ["LibraryEntry", "SourceFormat"]
