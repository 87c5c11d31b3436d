"""Application service that assembles MSU packs from CLI-level requests."""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from logging import Logger, getLogger
from pathlib import Path
from typing import final

from msupack.features.apply import (
    ApplyEngine,
    ApplyFilesystemPort,
    ApplyRequest,
    ApplySuccess,
    CancellationToken,
    ConflictResolver,
    LocalApplyFilesystem,
    OverwriteMode,
    ProgressSink,
    SpriteApplierPort,
)
from msupack.features.sprites import SpriteCatalog, SpriteCatalogError, ZsprSpriteApplier


@dataclass(slots=True)
class ApplyServiceRequest:
    """Parameters describing one pack assembly.

    ``sprite_name`` names a catalog entry and is only consulted when
    ``sprite_path`` is not given.
    """

    rom_path: Path
    output_dir: Path
    tracks: dict[str, Path] = field(default_factory=dict)
    overwrite_mode: OverwriteMode = OverwriteMode.ASK
    base_name: str | None = None
    sprite_path: Path | None = None
    sprite_name: str | None = None


@final
class ApplyPackService:
    """Application façade owning the engine and the sprite catalog."""

    _engine: ApplyEngine
    _catalog: SpriteCatalog
    _logger: Logger

    def __init__(
        self,
        *,
        conflict_resolver: ConflictResolver | None = None,
        sprite_applier: SpriteApplierPort | None = None,
        filesystem: ApplyFilesystemPort | None = None,
        catalog: SpriteCatalog | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._logger = logger or getLogger(__name__)
        self._catalog = catalog or SpriteCatalog()
        self._engine = ApplyEngine(
            sprite_applier=sprite_applier or ZsprSpriteApplier(),
            filesystem=filesystem or LocalApplyFilesystem(),
            conflict_resolver=conflict_resolver,
            logger=self._logger,
        )

    @property
    def catalog(self) -> SpriteCatalog:
        return self._catalog

    def resolve_sprite_name(self, name: str) -> Path:
        """Download (or reuse) the catalog sprite called ``name``.

        Raises:
            SpriteCatalogError: The name is unknown or the download failed.
        """

        entry = self._catalog.find(name)
        if entry is None:
            raise SpriteCatalogError(f"Unknown sprite: {name}")
        return self._catalog.download(entry)

    def build_request(self, request: ApplyServiceRequest) -> ApplyRequest:
        """Translate ``request`` into the engine's request, fetching a named sprite."""

        sprite_path = request.sprite_path
        if sprite_path is None and request.sprite_name:
            sprite_path = self.resolve_sprite_name(request.sprite_name)

        return ApplyRequest(
            rom_source_path=request.rom_path,
            output_dir=request.output_dir,
            tracks=dict(request.tracks),
            overwrite_mode=request.overwrite_mode,
            output_base_name=request.base_name,
            sprite_source_path=sprite_path,
        )

    def run(
        self,
        request: ApplyServiceRequest,
        progress: ProgressSink | None = None,
        cancellation: CancellationToken | None = None,
    ) -> ApplySuccess:
        """Assemble the pack on the calling thread."""

        return self._engine.run(self.build_request(request), progress, cancellation)

    def submit(
        self,
        request: ApplyServiceRequest,
        progress: ProgressSink | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Future[ApplySuccess]:
        """Assemble the pack on the engine's worker thread.

        A named sprite is fetched before submission, on the calling thread.
        """

        return self._engine.submit(self.build_request(request), progress, cancellation)

    def shutdown(self, wait: bool = True) -> None:
        self._engine.shutdown(wait=wait)
