"""Tests for CLI command implementations."""

from __future__ import annotations

from concurrent.futures import Future
from io import StringIO
from pathlib import Path

import pytest
from pytest_mock import MockerFixture
from rich.console import Console

from msupack.application.services import ApplyPackService, LibraryService
from msupack.features.apply import ApplySuccess, ConflictNegotiation, OverwriteMode
from msupack.features.library import PcmCache
from msupack.features.sprites import SpriteCatalogError, SpriteEntry
from msupack.ui.cli.args.options import ApplyArgs, LibraryArgs, SpritesArgs
from msupack.ui.cli.commands import ApplyCommand, LibraryCommand, SpritesCommand
from msupack.ui.cli.display.prompt import ConflictPrompt


def _console() -> Console:
    return Console(file=StringIO(), width=120, color_system=None)


def _apply_args(tmp_path: Path, mode: OverwriteMode = OverwriteMode.ASK) -> ApplyArgs:
    rom = tmp_path / "game.sfc"
    _ = rom.write_bytes(b"ROM")
    track = tmp_path / "a.pcm"
    _ = track.write_bytes(b"PCM")
    return ApplyArgs(
        command="apply",
        rom_path=rom,
        output_dir=tmp_path / "out",
        tracks={"1": track},
        overwrite_mode=mode,
        base_name=None,
        sprite_path=None,
        sprite_name=None,
        verbose=False,
        quiet=True,
    )


def test_apply_command_writes_pack(tmp_path: Path) -> None:
    args = _apply_args(tmp_path)

    result = ApplyCommand(args, interactive=False).execute()

    assert [p.name for p in result.files_written] == ["game.sfc", "game.msu", "game-1.pcm"]


def test_non_interactive_ask_skips_conflicts(tmp_path: Path) -> None:
    args = _apply_args(tmp_path)
    args.output_dir.mkdir()
    _ = (args.output_dir / "game.sfc").write_bytes(b"old")

    result = ApplyCommand(args, interactive=False).execute()

    assert [p.name for p in result.files_written] == ["game.msu", "game-1.pcm"]
    assert (args.output_dir / "game.sfc").read_bytes() == b"old"


def test_interactive_ask_uses_prompt(tmp_path: Path, mocker: MockerFixture) -> None:
    args = _apply_args(tmp_path)
    args.output_dir.mkdir()
    _ = (args.output_dir / "game.sfc").write_bytes(b"old")

    def _answer(self: ConflictPrompt, negotiation: ConflictNegotiation) -> None:
        _ = self
        _ = negotiation.respond(OverwriteMode.OVERWRITE)

    _ = mocker.patch.object(ConflictPrompt, "ask", _answer)

    result = ApplyCommand(args, interactive=True).execute()

    assert len(result.files_written) == 3
    assert (args.output_dir / "game.sfc").read_bytes() == b"ROM"


def test_apply_command_passes_resolver_and_shuts_down(tmp_path: Path, mocker: MockerFixture) -> None:
    args = _apply_args(tmp_path, OverwriteMode.OVERWRITE)
    service = mocker.Mock(spec=ApplyPackService)
    future: Future[ApplySuccess] = Future()
    future.set_result(ApplySuccess(files_written=()))
    service.submit.return_value = future
    factory = mocker.Mock(return_value=service)

    result = ApplyCommand(args, service_factory=factory, interactive=True).execute()

    assert result.files_written == ()
    resolver = factory.call_args.args[0]
    assert not isinstance(resolver, ConflictPrompt)
    request = service.submit.call_args.args[0]
    assert request.overwrite_mode is OverwriteMode.OVERWRITE
    assert request.tracks == args.tracks
    service.shutdown.assert_called_once_with()


def test_sprites_command_lists_matches(mocker: MockerFixture, tmp_path: Path) -> None:
    catalog = mocker.Mock()
    catalog.search.return_value = [SpriteEntry(name="Link", author="Nintendo", tags=["Official"])]
    catalog.local_path_for.return_value = tmp_path / "Link.zspr"
    console = _console()

    entries = SpritesCommand(
        SpritesArgs(command="sprites", search="link", download=None),
        catalog=catalog,
        console=console,
    ).execute()

    assert [e.name for e in entries] == ["Link"]
    catalog.search.assert_called_once_with("link")
    output = console.file.getvalue()  # pyright: ignore[reportAttributeAccessIssue]
    assert "Link" in output
    assert "Nintendo" in output
    assert "Cached" in output


def test_sprites_command_downloads_named_entry(mocker: MockerFixture, tmp_path: Path) -> None:
    entry = SpriteEntry(name="Link", file="https://example.invalid/link.zspr")
    catalog = mocker.Mock()
    catalog.find.return_value = entry
    catalog.download.return_value = tmp_path / "Link.zspr"
    applier = mocker.Mock()
    applier.read_metadata.return_value = ("Link (Classic)", "Nintendo")
    console = _console()

    _ = SpritesCommand(
        SpritesArgs(command="sprites", search=None, download="link"),
        catalog=catalog,
        console=console,
        applier=applier,
    ).execute()

    catalog.download.assert_called_once_with(entry)
    applier.read_metadata.assert_called_once_with(tmp_path / "Link.zspr")
    output = console.file.getvalue()  # pyright: ignore[reportAttributeAccessIssue]
    assert "Link.zspr" in output
    assert "Embedded name: Link (Classic) by Nintendo" in output


def test_sprites_command_download_without_metadata(mocker: MockerFixture, tmp_path: Path) -> None:
    catalog = mocker.Mock()
    catalog.find.return_value = SpriteEntry(name="Old", file="https://example.invalid/old.spr")
    catalog.download.return_value = tmp_path / "Old.zspr"
    console = _console()

    _ = SpritesCommand(
        SpritesArgs(command="sprites", search=None, download="old"),
        catalog=catalog,
        console=console,
    ).execute()

    output = console.file.getvalue()  # pyright: ignore[reportAttributeAccessIssue]
    assert "Old.zspr" in output
    assert "Embedded name" not in output


def test_sprites_command_unknown_download(mocker: MockerFixture) -> None:
    catalog = mocker.Mock()
    catalog.find.return_value = None

    with pytest.raises(SpriteCatalogError):
        _ = SpritesCommand(
            SpritesArgs(command="sprites", search=None, download="nobody"),
            catalog=catalog,
            console=_console(),
        ).execute()


def test_library_command_renders_status(tmp_path: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch("msupack.features.library.usecases.scan.mutagen.File", return_value=None)
    music = tmp_path / "music"
    music.mkdir()
    _ = (music / "ready.pcm").write_bytes(b"PCM")
    _ = (music / "raw.flac").write_bytes(b"FLAC")
    console = _console()

    entries = LibraryCommand(
        LibraryArgs(command="library", directory=music),
        service=LibraryService(cache=PcmCache(tmp_path / "cache")),
        console=console,
    ).execute()

    assert [e.source_path.name for e in entries] == ["raw.flac", "ready.pcm"]
    output = console.file.getvalue()  # pyright: ignore[reportAttributeAccessIssue]
    assert "needs conversion" in output
    assert "ready" in output
    assert "FLAC" in output
