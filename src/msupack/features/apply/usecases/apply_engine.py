"""
Summary: Output assembly engine writing ROM, marker and tracks into a pack folder.
Why: Sequence validation, conflict negotiation and file writes in one ordered run.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from logging import Logger, getLogger
from pathlib import Path
from typing import Any, Callable

from ..adapters.filesystem import LocalApplyFilesystem
from ..domain.errors import (
    ApplyCancelledError,
    InvalidSpriteError,
    MissingInputError,
    SpriteInjectionError,
)
from ..domain.models import (
    ApplyConflict,
    ApplyEvent,
    ApplyRequest,
    ApplySuccess,
    OverwriteMode,
)
from .cancellation import CancellationToken
from .negotiation import ConflictNegotiation, ConflictResolution, ConflictResolver
from .planning import ApplyPlan, build_plan
from .ports import ApplyFilesystemPort, ProgressSink, SpriteApplierPort


def _path_key(path: Path) -> str:
    return os.path.normcase(str(path))


@dataclass(slots=True)
class _RunContext:
    """State carried through the steps of a single run."""

    request: ApplyRequest
    plan: ApplyPlan
    token: CancellationToken
    progress: ProgressSink | None
    overwrite: bool = False
    skip_keys: set[str] = field(default_factory=set)
    written: list[Path] = field(default_factory=list)
    skipped: int = 0
    start_time: float = field(default_factory=time.perf_counter)

    def report(self, description: str, current: int) -> None:
        if self.progress is not None:
            self.progress(description, current, self.plan.total_steps)


class ApplyEngine:
    """Assemble an MSU pack for an ``ApplyRequest``.

    One run at a time per instance; ``submit`` queues runs on a private
    single-thread executor so the caller is never blocked by file I/O.
    """

    _sprite_applier: SpriteApplierPort
    _filesystem: ApplyFilesystemPort
    _conflict_resolver: ConflictResolver | None
    _logger: Logger

    def __init__(
        self,
        *,
        sprite_applier: SpriteApplierPort,
        filesystem: ApplyFilesystemPort | None = None,
        conflict_resolver: ConflictResolver | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._sprite_applier = sprite_applier
        self._filesystem = filesystem or LocalApplyFilesystem()
        self._conflict_resolver = conflict_resolver
        self._logger = logger or getLogger(__name__)
        self._run_lock: threading.Lock = threading.Lock()
        self._executor: ThreadPoolExecutor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="msu-apply"
        )

    def submit(
        self,
        request: ApplyRequest,
        progress: ProgressSink | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Future[ApplySuccess]:
        """Run ``request`` on the engine's worker thread."""

        return self._executor.submit(self.run, request, progress, cancellation)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker thread once queued runs finish."""

        self._executor.shutdown(wait=wait)

    def run(
        self,
        request: ApplyRequest,
        progress: ProgressSink | None = None,
        cancellation: CancellationToken | None = None,
    ) -> ApplySuccess:
        """Execute ``request`` on the calling thread.

        Raises:
            MissingInputError, InvalidSpriteError: before any file is touched.
            ApplyCancelledError: cancellation observed or conflicts left undecided.
            SpriteInjectionError: after the ROM copy, which stays on disk.
            OSError: copy/write/mkdir failures, unchanged.
            RuntimeError: another run is in flight on this instance.
        """

        if not self._run_lock.acquire(blocking=False):
            raise RuntimeError("An apply run is already in progress on this engine")
        try:
            ctx = _RunContext(
                request=request,
                plan=build_plan(request),
                token=cancellation or CancellationToken(),
                progress=progress,
            )
            return self._run_steps(ctx)
        finally:
            self._run_lock.release()

    def _run_steps(self, ctx: _RunContext) -> ApplySuccess:
        request = ctx.request
        plan = ctx.plan
        self._log(
            logging.INFO,
            ApplyEvent.RUN_START,
            "Apply started [rom=%s, output=%s, tracks=%d, mode=%s]",
            request.rom_source_path,
            request.output_dir,
            len(plan.track_dests),
            request.overwrite_mode,
            output_dir=request.output_dir,
            tracks=len(plan.track_dests),
            mode=str(request.overwrite_mode),
        )
        try:
            ctx.report("Validating inputs...", 0)
            ctx.token.raise_if_cancelled()
            self._validate(request, plan)

            ctx.report("Checking for conflicts...", 1)
            conflicts = self._detect_conflicts(plan)
            mode = self._resolve_mode(request.overwrite_mode, conflicts, ctx.token)
            ctx.token.raise_if_cancelled()
            ctx.overwrite = mode is OverwriteMode.OVERWRITE
            if mode is OverwriteMode.SKIP:
                ctx.skip_keys = {_path_key(conflict.dest_path) for conflict in conflicts}

            ctx.report("Creating output directory...", 2)
            _ = self._filesystem.ensure_directory(request.output_dir)

            ctx.report("Copying ROM...", 3)
            ctx.token.raise_if_cancelled()
            rom_written = self._write_step(
                ctx,
                plan.rom_dest,
                lambda: self._filesystem.copy_file(
                    request.rom_source_path, plan.rom_dest, overwrite=ctx.overwrite
                ),
                source=request.rom_source_path,
                step=3,
            )

            marker_step = 4
            if request.sprite_source_path is not None and rom_written:
                ctx.report("Applying sprite...", 4)
                ctx.token.raise_if_cancelled()
                self._inject_sprite(request.sprite_source_path, plan.rom_dest, ctx)
                marker_step = 5

            ctx.report("Writing .msu marker...", marker_step)
            ctx.token.raise_if_cancelled()
            _ = self._write_step(
                ctx,
                plan.marker_dest,
                lambda: self._filesystem.write_empty_file(
                    plan.marker_dest, overwrite=ctx.overwrite
                ),
                source=None,
                step=marker_step,
            )

            for index, track in enumerate(plan.track_dests):
                step = marker_step + 1 + index
                ctx.report(f"Copying track {track.slot}...", step)
                ctx.token.raise_if_cancelled()
                _ = self._write_step(
                    ctx,
                    track.dest,
                    lambda track=track: self._filesystem.copy_file(
                        track.source, track.dest, overwrite=ctx.overwrite
                    ),
                    source=track.source,
                    step=step,
                )

            ctx.report("Done.", plan.total_steps)
        except ApplyCancelledError as exc:
            self._log(
                logging.WARNING,
                ApplyEvent.RUN_CANCELLED,
                "Apply cancelled [output=%s, written=%d]: %s",
                request.output_dir,
                len(ctx.written),
                exc.message,
                output_dir=request.output_dir,
                written=len(ctx.written),
            )
            raise
        except Exception as exc:
            self._log(
                logging.ERROR,
                ApplyEvent.RUN_ERROR,
                "Apply failed [output=%s, written=%d]: %s",
                request.output_dir,
                len(ctx.written),
                exc,
                output_dir=request.output_dir,
                written=len(ctx.written),
                error_message=str(exc) or exc.__class__.__name__,
            )
            raise

        duration = time.perf_counter() - ctx.start_time
        self._log(
            logging.INFO,
            ApplyEvent.RUN_COMPLETE,
            "Apply complete [output=%s, written=%d, skipped=%d, duration=%.2fs]",
            request.output_dir,
            len(ctx.written),
            ctx.skipped,
            duration,
            output_dir=request.output_dir,
            written=len(ctx.written),
            skipped=ctx.skipped,
            duration_seconds=round(duration, 4),
        )
        return ApplySuccess(files_written=tuple(ctx.written))

    def _validate(self, request: ApplyRequest, plan: ApplyPlan) -> None:
        if not self._filesystem.is_file(request.rom_source_path):
            raise MissingInputError(request.rom_source_path, "ROM file")

        for track in plan.track_dests:
            if not self._filesystem.is_file(track.source):
                raise MissingInputError(track.source, f"PCM file for slot {track.slot}")

        sprite = request.sprite_source_path
        if sprite is not None:
            if not self._filesystem.is_file(sprite):
                raise MissingInputError(sprite, "Sprite file")
            error = self._sprite_applier.validate(sprite)
            if error is not None:
                raise InvalidSpriteError(sprite, error)

    def _detect_conflicts(self, plan: ApplyPlan) -> list[ApplyConflict]:
        return [
            candidate
            for candidate in plan.all_destinations()
            if self._filesystem.exists(candidate.dest_path)
        ]

    def _resolve_mode(
        self,
        requested: OverwriteMode,
        conflicts: list[ApplyConflict],
        token: CancellationToken,
    ) -> OverwriteMode:
        """Return the effective mode, negotiating when ``ASK`` meets existing files."""

        if not conflicts or requested is not OverwriteMode.ASK:
            return requested

        self._log(
            logging.INFO,
            ApplyEvent.CONFLICTS_DETECTED,
            "%d destination file(s) already exist: %s",
            len(conflicts),
            ", ".join(conflict.file_name for conflict in conflicts),
            conflicts=len(conflicts),
        )

        negotiation = ConflictNegotiation(conflicts)
        # Cancelling the token declines an open negotiation.
        unregister = token.register(negotiation.close)
        try:
            if self._conflict_resolver is None:
                negotiation.close()
            else:
                try:
                    self._conflict_resolver(negotiation)
                except BaseException:
                    negotiation.close()
                    raise
            resolution = negotiation.wait()
        finally:
            unregister()

        self._log(
            logging.INFO,
            ApplyEvent.CONFLICTS_RESOLVED,
            "Conflict negotiation resolved: %s",
            resolution,
            resolution=str(resolution),
        )
        mode = resolution.to_overwrite_mode()
        if mode is None:
            raise ApplyCancelledError()
        return mode

    def _write_step(
        self,
        ctx: _RunContext,
        dest: Path,
        action: Callable[[], None],
        *,
        source: Path | None,
        step: int,
    ) -> bool:
        """Perform ``action`` unless ``dest`` is in the skip set; return whether it ran."""

        if _path_key(dest) in ctx.skip_keys:
            ctx.skipped += 1
            self._log(
                logging.INFO,
                ApplyEvent.FILE_SKIP,
                "Skipping existing file %s",
                dest,
                target_path=dest,
                output_dir=ctx.request.output_dir,
                step=step,
                total_steps=ctx.plan.total_steps,
            )
            return False

        self._log(
            logging.INFO,
            ApplyEvent.FILE_WRITE,
            "Writing %s%s",
            f"{source} → " if source is not None else "",
            dest,
            source_path=source,
            target_path=dest,
            output_dir=ctx.request.output_dir,
            step=step,
            total_steps=ctx.plan.total_steps,
        )
        action()
        ctx.written.append(dest)
        return True

    def _inject_sprite(self, sprite: Path, rom_dest: Path, ctx: _RunContext) -> None:
        self._log(
            logging.INFO,
            ApplyEvent.SPRITE_APPLY,
            "Applying sprite %s → %s",
            sprite,
            rom_dest,
            source_path=sprite,
            target_path=rom_dest,
            output_dir=ctx.request.output_dir,
        )
        error = self._sprite_applier.apply(sprite, rom_dest)
        if error is not None:
            raise SpriteInjectionError(rom_dest, error)

    def _log(
        self,
        level: int,
        event: ApplyEvent,
        message: str,
        *args: object,
        **extra: Any,
    ) -> None:
        payload: dict[str, Any] = {"apply_event": event.value}
        payload.update({key: value for key, value in extra.items() if value is not None})
        self._logger.log(level, message, *args, extra=payload)


__all__ = ["ApplyEngine"]
