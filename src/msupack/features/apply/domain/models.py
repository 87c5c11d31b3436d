"""Data structures that describe an MSU pack apply run."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Final


class OverwriteMode(StrEnum):
    """How to treat destination files that already exist.

    ``ASK`` defers to a conflict resolver; as a resolver answer it means
    the user declined to choose.
    """

    ASK = "ask"
    OVERWRITE = "overwrite"
    SKIP = "skip"

    @staticmethod
    def from_user_input(value: str) -> "OverwriteMode":
        """Translate raw CLI/config input into the matching mode."""

        normalized = value.strip().lower()
        for mode in OverwriteMode:
            if mode.value == normalized:
                return mode
        valid: Final[str] = ", ".join(m.value for m in OverwriteMode)
        msg = f"Unsupported overwrite mode '{value}'. Valid options: {valid}"
        raise ValueError(msg)


class ApplyEvent(StrEnum):
    """Structured event identifiers for apply logs."""

    RUN_START = "apply.run.start"
    RUN_COMPLETE = "apply.run.complete"
    RUN_CANCELLED = "apply.run.cancelled"
    RUN_ERROR = "apply.run.error"
    CONFLICTS_DETECTED = "apply.conflicts.detected"
    CONFLICTS_RESOLVED = "apply.conflicts.resolved"
    FILE_WRITE = "apply.file.write"
    FILE_SKIP = "apply.file.skip"
    SPRITE_APPLY = "apply.sprite.apply"


def _is_slot_id(value: object) -> bool:
    return isinstance(value, str) and value.isascii() and value.isdigit()


@dataclass(slots=True, frozen=True)
class ApplyRequest:
    """The unit of work handed to the apply engine.

    Attributes:
        rom_source_path: ROM image to copy.
        output_dir: Directory receiving every produced file.
        tracks: Slot identifier (digits) to resolved audio path.
        overwrite_mode: Policy for destination files that already exist.
        output_base_name: Overrides the ROM stem for every produced file.
        sprite_source_path: Optional sprite injected into the copied ROM.
    """

    rom_source_path: Path
    output_dir: Path
    tracks: Mapping[str, Path] = field(default_factory=dict)
    overwrite_mode: OverwriteMode = OverwriteMode.ASK
    output_base_name: str | None = None
    sprite_source_path: Path | None = None

    def __post_init__(self) -> None:
        bad_slots = [slot for slot in self.tracks if not _is_slot_id(slot)]
        if bad_slots:
            raise ValueError(
                "Track slot identifiers must be non-negative integers, got: "
                + ", ".join(repr(slot) for slot in bad_slots)
            )
        object.__setattr__(
            self,
            "tracks",
            MappingProxyType({slot: Path(path) for slot, path in self.tracks.items()}),
        )
        object.__setattr__(self, "rom_source_path", Path(self.rom_source_path))
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        sprite = self.sprite_source_path
        if isinstance(sprite, str) and not sprite.strip():
            sprite = None
        object.__setattr__(
            self, "sprite_source_path", Path(sprite) if sprite is not None else None
        )

    @property
    def has_sprite(self) -> bool:
        return self.sprite_source_path is not None

    def sorted_tracks(self) -> list[tuple[str, Path]]:
        """Return ``(slot, path)`` pairs ordered by the numeric slot value."""

        return sorted(self.tracks.items(), key=lambda item: int(item[0]))


@dataclass(slots=True, frozen=True)
class ApplyConflict:
    """A planned destination that already exists on disk."""

    file_name: str
    dest_path: Path


@dataclass(slots=True, frozen=True)
class ApplySuccess:
    """Destinations actually written by a run, in execution order."""

    files_written: tuple[Path, ...]


__all__ = [
    "ApplyConflict",
    "ApplyEvent",
    "ApplyRequest",
    "ApplySuccess",
    "OverwriteMode",
]
