"""Command line argument handling package."""

from msupack.ui.cli.args.parser import ArgumentParser
from msupack.ui.cli.args.options import ApplyArgs, CLIArgs, LibraryArgs, SpritesArgs

__all__ = ["ArgumentParser", "ApplyArgs", "CLIArgs", "LibraryArgs", "SpritesArgs"]
