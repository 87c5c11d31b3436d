"""Command line interface package."""

from msupack.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
