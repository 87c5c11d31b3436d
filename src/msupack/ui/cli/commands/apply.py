"""Apply command implementation for the CLI."""

from __future__ import annotations

import sys
from typing import Callable, final

from msupack.application.services.apply_service import ApplyPackService, ApplyServiceRequest
from msupack.features.apply import (
    ApplySuccess,
    CancellationToken,
    ConflictResolver,
    OverwriteMode,
    fixed_resolver,
)
from msupack.ui.cli.args.options import ApplyArgs
from msupack.ui.cli.display.progress import ApplyProgressDisplay
from msupack.ui.cli.display.prompt import ConflictPrompt
from msupack.ui.cli.display.result import ApplyResultDisplay


def _default_service_factory(resolver: ConflictResolver) -> ApplyPackService:
    return ApplyPackService(conflict_resolver=resolver)


@final
class ApplyCommand:
    """Command that assembles an MSU pack with progress and conflict prompts."""

    def __init__(
        self,
        args: ApplyArgs,
        *,
        service_factory: Callable[[ConflictResolver], ApplyPackService] | None = None,
        interactive: bool | None = None,
    ) -> None:
        self.args = args
        self._service_factory = service_factory or _default_service_factory
        self._interactive = sys.stdin.isatty() if interactive is None else interactive
        self.progress_display = ApplyProgressDisplay(quiet=args.quiet)
        self.result_display = ApplyResultDisplay()

    def execute(self) -> ApplySuccess:
        """Execute the apply command."""

        prompt: ConflictPrompt | None = None
        if self._interactive and self.args.overwrite_mode is OverwriteMode.ASK:
            prompt = ConflictPrompt()
            resolver: ConflictResolver = prompt
        else:
            resolver = fixed_resolver(OverwriteMode.SKIP)

        service = self._service_factory(resolver)
        token = CancellationToken()
        request = ApplyServiceRequest(
            rom_path=self.args.rom_path,
            output_dir=self.args.output_dir,
            tracks=dict(self.args.tracks),
            overwrite_mode=self.args.overwrite_mode,
            base_name=self.args.base_name,
            sprite_path=self.args.sprite_path,
            sprite_name=self.args.sprite_name,
        )
        try:
            result = self.progress_display.run(
                lambda sink: service.submit(request, sink, token),
                token,
                prompt,
            )
        finally:
            service.shutdown()

        self.result_display.show_result(
            result,
            self.args.output_dir,
            quiet=self.args.quiet,
            verbose=self.args.verbose,
        )
        return result
