"""
Summary: Ports defining apply use case dependencies.
Why: Decouple the engine from concrete adapters so tests and swaps stay simple.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Protocol, runtime_checkable

ProgressSink = Callable[[str, int, int], None]
"""Receives ``(step description, current, total)`` before each step."""


@runtime_checkable
class SpriteApplierPort(Protocol):
    """Validate sprite files and inject them into ROM images in place."""

    def validate(self, path: Path) -> str | None:
        """Return an error description, or ``None`` when ``path`` is a usable sprite."""
        ...

    def apply(self, sprite_path: Path, rom_path: Path) -> str | None:
        """Patch ``rom_path`` with ``sprite_path``; return an error description or ``None``."""
        ...


@runtime_checkable
class ApplyFilesystemPort(Protocol):
    """Filesystem operations the engine performs on inputs and destinations."""

    def is_file(self, path: Path) -> bool:
        """Return True when ``path`` is an existing regular file."""
        ...

    def exists(self, path: Path) -> bool:
        """Return True when anything exists at ``path``."""
        ...

    def ensure_directory(self, path: Path) -> Path:
        """Create ``path`` (and parents) if needed and return it."""
        ...

    def copy_file(self, source: Path, destination: Path, *, overwrite: bool) -> None:
        """Copy ``source`` to ``destination``; refuse existing targets unless ``overwrite``."""
        ...

    def write_empty_file(self, path: Path, *, overwrite: bool) -> None:
        """Create ``path`` with zero bytes; refuse an existing target unless ``overwrite``."""
        ...


__all__ = ["ApplyFilesystemPort", "ProgressSink", "SpriteApplierPort"]
