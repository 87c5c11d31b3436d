"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import shutil
from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    return ensure_directory(path.parent)


def copy_file(source: Path, destination: Path, *, overwrite: bool) -> None:
    """Copy ``source`` to ``destination``.

    Raises:
        FileExistsError: ``destination`` exists and ``overwrite`` is False.
    """

    if not overwrite and destination.exists():
        raise FileExistsError(f"Destination already exists: {destination}")
    _ = shutil.copyfile(source, destination)


def write_empty_file(path: Path, *, overwrite: bool) -> None:
    """Create ``path`` as a zero-byte file.

    Raises:
        FileExistsError: ``path`` exists and ``overwrite`` is False.
    """

    with open(path, "wb" if overwrite else "xb"):
        pass


def write_text_file(path: Path, content: str) -> None:
    """Persist textual content ensuring parent directories exist."""

    _ = ensure_parent_directory(path)
    _ = path.write_text(content, encoding="utf-8")


__all__ = [
    "ensure_directory",
    "ensure_parent_directory",
    "copy_file",
    "write_empty_file",
    "write_text_file",
]
