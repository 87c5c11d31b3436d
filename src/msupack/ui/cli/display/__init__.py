"""Display management for CLI interface."""

from msupack.ui.cli.display.progress import ApplyProgressDisplay
from msupack.ui.cli.display.prompt import ConflictPrompt
from msupack.ui.cli.display.result import ApplyResultDisplay

__all__ = ["ApplyProgressDisplay", "ApplyResultDisplay", "ConflictPrompt"]
