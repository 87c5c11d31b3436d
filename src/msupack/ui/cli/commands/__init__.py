"""Command execution package for CLI."""

from msupack.ui.cli.commands.apply import ApplyCommand
from msupack.ui.cli.commands.library import LibraryCommand
from msupack.ui.cli.commands.sprites import SpritesCommand

__all__ = ["ApplyCommand", "LibraryCommand", "SpritesCommand"]
