"""Display utilities for apply results."""

from __future__ import annotations

from pathlib import Path
from typing import final

from rich.console import Console

from msupack.features.apply import ApplySuccess


@final
class ApplyResultDisplay:
    """Render the outcome of an apply run in the CLI."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_result(
        self,
        result: ApplySuccess,
        output_dir: Path,
        *,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        """Print a summary of the files written into ``output_dir``."""

        if quiet:
            return

        written = result.files_written
        self.console.print("\n[bold]Apply Summary:[/bold]")
        self.console.print(f"Output folder: {output_dir}")
        self.console.print(f"[green]Files written: {len(written)}[/green]")
        if not written:
            self.console.print("[yellow]Nothing was written; every destination was skipped.[/yellow]")
            return
        if verbose:
            for path in written:
                self.console.print(f"[green]  • {path.name}[/green]")


__all__ = ["ApplyResultDisplay"]
