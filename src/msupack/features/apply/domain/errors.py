"""Exceptions raised by apply runs.

Every failure aborts the whole run. ``OSError`` from copy/write/mkdir steps
propagates unchanged and is not wrapped here.
"""

from __future__ import annotations

from pathlib import Path


class ApplyError(Exception):
    """Base class for apply failures carrying a human-readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message


class MissingInputError(ApplyError):
    """An input file (ROM, track source or sprite) does not exist."""

    def __init__(self, path: Path, role: str) -> None:
        super().__init__(f"{role} not found: {path}")
        self.path: Path = path
        self.role: str = role


class InvalidSpriteError(ApplyError):
    """The sprite file exists but fails format validation."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid sprite file {path}: {reason}")
        self.path: Path = path
        self.reason: str = reason


class SpriteInjectionError(ApplyError):
    """Injecting the sprite into the copied ROM failed.

    The copied ROM is left on disk.
    """

    def __init__(self, rom_path: Path, reason: str) -> None:
        super().__init__(f"Sprite injection failed for {rom_path}: {reason}")
        self.rom_path: Path = rom_path
        self.reason: str = reason


class ApplyCancelledError(ApplyError):
    """The run was cancelled, either cooperatively or by declining a conflict prompt."""

    def __init__(self, message: str = "Apply cancelled by user.") -> None:
        super().__init__(message)


__all__ = [
    "ApplyError",
    "ApplyCancelledError",
    "InvalidSpriteError",
    "MissingInputError",
    "SpriteInjectionError",
]
