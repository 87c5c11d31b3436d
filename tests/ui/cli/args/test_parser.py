"""Tests for command line argument parser."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from msupack.features.apply import OverwriteMode
from msupack.platform.logging import DEFAULT_LOG_FILE
from msupack.ui.cli.args import ApplyArgs, ArgumentParser, LibraryArgs, SpritesArgs


@pytest.fixture
def mock_setup_logger(mocker: MockerFixture) -> MagicMock:
    """Keep argument processing from reconfiguring the real logger."""

    mock_config = mocker.patch("msupack.ui.cli.args.parser.Config")
    mock_config.load.return_value.log_file = None
    mock_config.load.return_value.output_dir = None
    return mocker.patch("msupack.ui.cli.args.parser.setup_logger")


def test_create_parser_exposes_subcommands() -> None:
    parser = ArgumentParser.create_parser()

    apply_args = parser.parse_args(["apply", "game.sfc", "out", "--track", "1=a.pcm"])
    assert apply_args.command == "apply"
    assert apply_args.rom_path == "game.sfc"
    assert apply_args.tracks == ["1=a.pcm"]

    sprites_args = parser.parse_args(["sprites", "--search", "link"])
    assert sprites_args.search == "link"

    library_args = parser.parse_args(["library", "music"])
    assert library_args.directory == "music"


def test_sprite_options_are_mutually_exclusive() -> None:
    parser = ArgumentParser.create_parser()
    with pytest.raises(SystemExit):
        _ = parser.parse_args(["apply", "game.sfc", "out", "--sprite", "a.zspr", "--sprite-name", "Link"])


def test_overwrite_choices_are_validated() -> None:
    parser = ArgumentParser.create_parser()
    with pytest.raises(SystemExit):
        _ = parser.parse_args(["apply", "game.sfc", "out", "--overwrite", "backup"])


def test_process_apply_args(mock_setup_logger: MagicMock) -> None:
    args = ArgumentParser.process_args(
        [
            "apply",
            "roms/game.sfc",
            "packs",
            "--track",
            "2=music/b.pcm",
            "--track",
            " 10 = music/c.pcm ",
            "--base-name",
            "custom",
            "--sprite",
            "link.zspr",
            "--overwrite",
            "skip",
            "--verbose",
        ]
    )

    assert isinstance(args, ApplyArgs)
    assert args.rom_path == Path("roms/game.sfc")
    assert args.output_dir == Path("packs")
    assert args.tracks == {"2": Path("music/b.pcm"), "10": Path("music/c.pcm")}
    assert args.base_name == "custom"
    assert args.sprite_path == Path("link.zspr")
    assert args.sprite_name is None
    assert args.overwrite_mode is OverwriteMode.SKIP
    assert mock_setup_logger.call_args.kwargs["console_level"] == logging.DEBUG
    assert mock_setup_logger.call_args.kwargs["log_file"] == DEFAULT_LOG_FILE


def test_quiet_lowers_console_level(mock_setup_logger: MagicMock) -> None:
    _ = ArgumentParser.process_args(["apply", "game.sfc", "out", "--quiet"])
    assert mock_setup_logger.call_args.kwargs["console_level"] == logging.ERROR


def test_output_dir_falls_back_to_config(mocker: MockerFixture, mock_setup_logger: MagicMock) -> None:
    _ = mock_setup_logger
    config = mocker.patch("msupack.ui.cli.args.parser.Config")
    config.load.return_value.log_file = None
    config.load.return_value.output_dir = Path("/configured/out")

    args = ArgumentParser.process_args(["apply", "game.sfc"])

    assert isinstance(args, ApplyArgs)
    assert args.output_dir == Path("/configured/out")


def test_missing_output_dir_exits(mock_setup_logger: MagicMock) -> None:
    _ = mock_setup_logger
    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(["apply", "game.sfc"])
    assert excinfo.value.code == 1


@pytest.mark.parametrize("track", ["1", "=a.pcm", "x=a.pcm", "1=", "1.5=a.pcm"])
def test_malformed_track_exits(mock_setup_logger: MagicMock, track: str) -> None:
    _ = mock_setup_logger
    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(["apply", "game.sfc", "out", "--track", track])
    assert excinfo.value.code == 1


def test_duplicate_slot_exits(mock_setup_logger: MagicMock) -> None:
    _ = mock_setup_logger
    with pytest.raises(SystemExit):
        _ = ArgumentParser.process_args(
            ["apply", "game.sfc", "out", "--track", "1=a.pcm", "--track", "1=b.pcm"]
        )


def test_parse_track_keeps_slot_text() -> None:
    assert ArgumentParser.parse_track("01=song=final.pcm") == ("01", Path("song=final.pcm"))


def test_process_sprites_args(mock_setup_logger: MagicMock) -> None:
    _ = mock_setup_logger
    args = ArgumentParser.process_args(["sprites", "--download", "Link"])
    assert args == SpritesArgs(command="sprites", search=None, download="Link")


def test_process_library_args(mock_setup_logger: MagicMock, tmp_path: Path) -> None:
    _ = mock_setup_logger
    args = ArgumentParser.process_args(["library", str(tmp_path)])
    assert args == LibraryArgs(command="library", directory=tmp_path.resolve())


def test_library_requires_directory(mock_setup_logger: MagicMock, tmp_path: Path) -> None:
    _ = mock_setup_logger
    with pytest.raises(SystemExit):
        _ = ArgumentParser.process_args(["library", str(tmp_path / "missing")])
