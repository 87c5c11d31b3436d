"""
Summary: Compute destination paths and step counts for an apply request.
Why: Keep naming rules pure so the engine only sequences side effects.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from msupack.config.settings import MARKER_EXTENSION, TRACK_EXTENSION

from ..domain.models import ApplyConflict, ApplyRequest

# validate, conflict check, mkdir, ROM copy, marker write
_FIXED_STEPS: int = 4


@dataclass(slots=True, frozen=True)
class TrackDestination:
    """One track copy: slot text as given, its source and its destination."""

    slot: str
    source: Path
    dest: Path


@dataclass(slots=True, frozen=True)
class ApplyPlan:
    """Destinations for every file a request produces."""

    base_name: str
    rom_dest: Path
    marker_dest: Path
    track_dests: tuple[TrackDestination, ...]
    has_sprite: bool

    @property
    def total_steps(self) -> int:
        return _FIXED_STEPS + len(self.track_dests) + (1 if self.has_sprite else 0)

    def all_destinations(self) -> Iterator[ApplyConflict]:
        """Yield every planned destination as a conflict candidate, in write order."""

        yield ApplyConflict(self.rom_dest.name, self.rom_dest)
        yield ApplyConflict(self.marker_dest.name, self.marker_dest)
        for track in self.track_dests:
            yield ApplyConflict(track.dest.name, track.dest)


def resolve_base_name(request: ApplyRequest) -> str:
    """Trimmed ``output_base_name`` when set, otherwise the ROM file stem."""

    if request.output_base_name and request.output_base_name.strip():
        return request.output_base_name.strip()
    return request.rom_source_path.stem


def build_plan(request: ApplyRequest) -> ApplyPlan:
    """Compute all destination paths for ``request``."""

    base_name = resolve_base_name(request)
    output_dir = request.output_dir
    rom_ext = request.rom_source_path.suffix

    tracks = tuple(
        TrackDestination(
            slot=slot,
            source=source,
            dest=output_dir / f"{base_name}-{slot}{TRACK_EXTENSION}",
        )
        for slot, source in request.sorted_tracks()
    )
    return ApplyPlan(
        base_name=base_name,
        rom_dest=output_dir / f"{base_name}{rom_ext}",
        marker_dest=output_dir / f"{base_name}{MARKER_EXTENSION}",
        track_dests=tracks,
        has_sprite=request.has_sprite,
    )


__all__ = ["ApplyPlan", "TrackDestination", "build_plan", "resolve_base_name"]
