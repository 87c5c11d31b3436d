"""Library listing for the CLI."""

from __future__ import annotations

from typing import final

from rich import box
from rich.console import Console
from rich.table import Table

from msupack.application.services.library_service import LibraryService
from msupack.features.library import LibraryEntry
from msupack.ui.cli.args.options import LibraryArgs


@final
class LibraryCommand:
    """Render scanned audio files with their format and PCM cache state."""

    def __init__(
        self,
        args: LibraryArgs,
        *,
        service: LibraryService | None = None,
        console: Console | None = None,
    ) -> None:
        self._args = args
        self._service = service or LibraryService()
        self._console = console or Console()

    def execute(self) -> list[LibraryEntry]:
        entries = self._service.scan(self._args.directory)
        if not entries:
            self._console.print(f"[yellow]No supported audio files in {self._args.directory}[/yellow]")
            return entries

        table = Table(box=box.SIMPLE_HEAVY, header_style="bold cyan")
        table.add_column("Name", style="bold")
        table.add_column("File")
        table.add_column("Format", justify="center")
        table.add_column("Status")
        for entry in entries:
            if entry.is_pcm:
                status = "[green]ready[/green]"
            elif entry.is_cached:
                status = "[green]cached[/green]"
            else:
                status = "[yellow]needs conversion[/yellow]"
            table.add_row(entry.name, entry.source_path.name, entry.format_tag, status)
        self._console.print(table)
        return entries
