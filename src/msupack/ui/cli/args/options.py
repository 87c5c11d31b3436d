"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from msupack.features.apply import OverwriteMode


@final
@dataclass(slots=True)
class ApplyArgs:
    """Command line arguments for the ``apply`` subcommand."""

    command: Literal["apply"]
    rom_path: Path
    output_dir: Path
    tracks: dict[str, Path]
    overwrite_mode: OverwriteMode
    base_name: str | None
    sprite_path: Path | None
    sprite_name: str | None
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class SpritesArgs:
    """Command line arguments for the ``sprites`` subcommand."""

    command: Literal["sprites"]
    search: str | None
    download: str | None


@final
@dataclass(slots=True)
class LibraryArgs:
    """Command line arguments for the ``library`` subcommand."""

    command: Literal["library"]
    directory: Path


CLIArgs = ApplyArgs | SpritesArgs | LibraryArgs

__all__ = ["ApplyArgs", "CLIArgs", "LibraryArgs", "SpritesArgs"]
