"""Progress display functionality for CLI."""

from __future__ import annotations

from concurrent.futures import Future, wait
from typing import Any, Callable, final

from rich.console import Console
from rich.progress import Progress

from msupack.features.apply import ApplySuccess, CancellationToken, ProgressSink
from msupack.platform.logging import ApplyRichHandler, logger
from msupack.ui.cli.display.prompt import ConflictPrompt


def shared_console() -> Console | None:
    """Return the console used by the rich log handler, if one is installed."""

    for handler in logger.handlers:
        if isinstance(handler, ApplyRichHandler):
            return handler.console
    return None


@final
class ApplyProgressDisplay:
    """Drive an apply run from the main thread while it executes on a worker."""

    POLL_SECONDS: float = 0.1

    def __init__(self, console: Console | None = None, *, quiet: bool = False) -> None:
        self._console = console or shared_console()
        self._quiet = quiet

    def run(
        self,
        start: Callable[[ProgressSink], Future[ApplySuccess]],
        token: CancellationToken,
        prompt: ConflictPrompt | None = None,
    ) -> ApplySuccess:
        """Start the run through ``start`` and wait for it.

        Ctrl-C cancels ``token``; the run then finishes with
        ``ApplyCancelledError`` at its next step boundary.
        """

        progress_kwargs: dict[str, Any] = {
            "transient": True,
            "redirect_stdout": False,
            "redirect_stderr": False,
            "disable": self._quiet,
        }
        if self._console is not None:
            progress_kwargs["console"] = self._console

        with Progress(**progress_kwargs) as progress:
            task_id = progress.add_task("[cyan]Starting...", total=None)

            def _sink(description: str, current: int, total: int) -> None:
                progress.update(
                    task_id,
                    description=f"[cyan]{description}",
                    completed=current,
                    total=total,
                )

            future = start(_sink)
            while not future.done():
                try:
                    if prompt is not None:
                        negotiation = prompt.next_pending(self.POLL_SECONDS)
                        if negotiation is not None:
                            progress.stop()
                            prompt.ask(negotiation)
                            progress.start()
                            continue
                    # Only the wait times out here; a TimeoutError raised by the run
                    # itself is an OSError and must reach the caller.
                    _ = wait([future], timeout=self.POLL_SECONDS)
                except KeyboardInterrupt:
                    logger.warning("Cancelling apply run...")
                    token.cancel()
            return future.result()


__all__ = ["ApplyProgressDisplay", "shared_console"]
