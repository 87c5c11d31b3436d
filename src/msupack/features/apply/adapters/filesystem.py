"""Filesystem adapter for apply use cases."""

from __future__ import annotations

from pathlib import Path

from msupack.platform.filesystem import copy_file, ensure_directory, write_empty_file

from ..usecases.ports import ApplyFilesystemPort


class LocalApplyFilesystem(ApplyFilesystemPort):
    """Thin wrapper around the local filesystem."""

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def exists(self, path: Path) -> bool:
        return path.exists()

    def ensure_directory(self, path: Path) -> Path:
        return ensure_directory(path)

    def copy_file(self, source: Path, destination: Path, *, overwrite: bool) -> None:
        copy_file(source, destination, overwrite=overwrite)

    def write_empty_file(self, path: Path, *, overwrite: bool) -> None:
        write_empty_file(path, overwrite=overwrite)


__all__ = ["LocalApplyFilesystem"]
