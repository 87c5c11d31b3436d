"""Interactive conflict prompt for apply runs."""

from __future__ import annotations

import queue
from typing import Final, final

from rich.console import Console
from rich.prompt import Prompt

from msupack.features.apply import ConflictNegotiation, OverwriteMode

_CANCEL: Final[str] = "cancel"
_CONFLICT_PREVIEW_LIMIT: Final[int] = 10


@final
class ConflictPrompt:
    """Conflict resolver that defers the question to the CLI's main thread.

    The engine calls the instance from its worker thread; the negotiation is
    queued and answered by ``ask`` once the main thread picks it up.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)
        self._pending: queue.Queue[ConflictNegotiation] = queue.Queue()

    def __call__(self, negotiation: ConflictNegotiation) -> None:
        self._pending.put(negotiation)

    def next_pending(self, timeout: float) -> ConflictNegotiation | None:
        """Return a queued negotiation, waiting up to ``timeout`` seconds."""

        try:
            return self._pending.get(timeout=timeout)
        except queue.Empty:
            return None

    def ask(self, negotiation: ConflictNegotiation) -> None:
        """Show the conflicts and answer ``negotiation`` with the user's choice."""

        # Cancelling the run declines a negotiation that may still sit in the queue.
        if negotiation.done:
            return

        conflicts = negotiation.conflicts
        self.console.print(
            f"\n[bold yellow]{len(conflicts)} file(s) already exist in the output folder:[/bold yellow]"
        )
        for conflict in conflicts[:_CONFLICT_PREVIEW_LIMIT]:
            self.console.print(f"  [yellow]- {conflict.file_name}[/yellow]")
        if len(conflicts) > _CONFLICT_PREVIEW_LIMIT:
            self.console.print(f"  ... and {len(conflicts) - _CONFLICT_PREVIEW_LIMIT} more")

        try:
            answer = Prompt.ask(
                "Overwrite them, skip them, or cancel",
                choices=[OverwriteMode.OVERWRITE.value, OverwriteMode.SKIP.value, _CANCEL],
                default=OverwriteMode.SKIP.value,
                console=self.console,
            )
        except EOFError:
            _ = negotiation.decline()
            return

        if answer == _CANCEL:
            _ = negotiation.decline()
            return
        _ = negotiation.respond(OverwriteMode.from_user_input(answer))


__all__ = ["ConflictPrompt"]
