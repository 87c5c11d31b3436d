"""Sprite catalog listing and download for the CLI."""

from __future__ import annotations

from pathlib import Path
from typing import final

from rich import box
from rich.console import Console
from rich.table import Table

from msupack.features.sprites import (
    SpriteCatalog,
    SpriteCatalogError,
    SpriteEntry,
    ZsprSpriteApplier,
)
from msupack.ui.cli.args.options import SpritesArgs


@final
class SpritesCommand:
    """Render catalog entries in a Rich table or fetch one of them."""

    def __init__(
        self,
        args: SpritesArgs,
        *,
        catalog: SpriteCatalog | None = None,
        console: Console | None = None,
        applier: ZsprSpriteApplier | None = None,
    ) -> None:
        self._args = args
        self._catalog = catalog or SpriteCatalog()
        self._applier = applier or ZsprSpriteApplier()
        self._console = console or Console()

    def execute(self) -> list[SpriteEntry]:
        """List matching sprites, or download the one named by ``--download``."""

        if self._args.download:
            entry = self._catalog.find(self._args.download)
            if entry is None:
                raise SpriteCatalogError(f"Unknown sprite: {self._args.download}")
            path = self._catalog.download(entry)
            self._console.print(f"[green]Sprite '{entry.name}' saved to {path}[/green]")
            metadata = self._applier.read_metadata(path)
            if metadata is not None:
                display_name, author = metadata
                self._console.print(f"  Embedded name: {display_name or '-'} by {author or 'unknown'}")
            return [entry]

        entries = self._catalog.search(self._args.search or "")
        if not entries:
            self._console.print("[yellow]No sprites matched.[/yellow]")
            return entries
        self._console.print(self._build_table(entries))
        return entries

    def _build_table(self, entries: list[SpriteEntry]) -> Table:
        table = Table(box=box.SIMPLE_HEAVY, header_style="bold cyan")
        table.add_column("Name", style="bold")
        table.add_column("Author")
        table.add_column("Tags")
        table.add_column("Cached", justify="center")
        for entry in entries:
            cached = self._is_cached(self._catalog.local_path_for(entry))
            table.add_row(
                entry.name,
                entry.author or "-",
                ", ".join(entry.tags) or "-",
                "[green]yes[/green]" if cached else "[dim]no[/dim]",
            )
        return table

    @staticmethod
    def _is_cached(path: Path) -> bool:
        return path.is_file()
