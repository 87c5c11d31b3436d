"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from msupack.config.config import Config
from msupack.config.settings import DEFAULT_OVERWRITE_MODE, OVERWRITE_MODE_CHOICES
from msupack.features.apply import OverwriteMode
from msupack.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from msupack.ui.cli.args.options import ApplyArgs, CLIArgs, LibraryArgs, SpritesArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            description="msupack - assemble MSU-1 packs from a ROM and PCM tracks.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        apply_parser = subparsers.add_parser(
            "apply",
            help="Copy the ROM, write the .msu marker and copy numbered tracks",
        )
        _ = apply_parser.add_argument(
            "rom_path",
            type=str,
            help="ROM image to copy into the pack",
            metavar="ROM",
        )
        _ = apply_parser.add_argument(
            "output_dir",
            type=str,
            nargs="?",
            help="Directory receiving the pack (defaults to the configured output_dir)",
            metavar="OUTPUT_DIR",
        )
        _ = apply_parser.add_argument(
            "--track",
            dest="tracks",
            action="append",
            default=[],
            metavar="SLOT=PATH",
            help="Assign an audio file to a numbered slot (repeatable)",
        )
        _ = apply_parser.add_argument(
            "--base-name",
            type=str,
            help="Base name for every produced file (defaults to the ROM name)",
        )
        sprite_group = apply_parser.add_mutually_exclusive_group()
        _ = sprite_group.add_argument(
            "--sprite",
            type=str,
            metavar="PATH",
            help="Sprite file (.zspr or .spr) to inject into the copied ROM",
        )
        _ = sprite_group.add_argument(
            "--sprite-name",
            type=str,
            metavar="NAME",
            help="Catalog sprite to download and inject into the copied ROM",
        )
        _ = apply_parser.add_argument(
            "--overwrite",
            type=str,
            choices=OVERWRITE_MODE_CHOICES,
            default=DEFAULT_OVERWRITE_MODE,
            help="How to handle files that already exist in OUTPUT_DIR",
        )
        _ = apply_parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed progress information",
        )
        _ = apply_parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

        sprites_parser = subparsers.add_parser(
            "sprites",
            help="List or download sprites from the remote catalog",
        )
        sprites_group = sprites_parser.add_mutually_exclusive_group()
        _ = sprites_group.add_argument(
            "--search",
            type=str,
            metavar="TEXT",
            help="Only list sprites whose name, author or tags contain TEXT",
        )
        _ = sprites_group.add_argument(
            "--download",
            type=str,
            metavar="NAME",
            help="Download the named sprite into the sprite cache",
        )

        library_parser = subparsers.add_parser(
            "library",
            help="List audio files in a directory with format and cache status",
        )
        _ = library_parser.add_argument(
            "directory",
            type=str,
            help="Directory to scan",
            metavar="DIRECTORY",
        )

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If arguments are malformed or required paths are missing.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command

        if command == "apply":
            return ArgumentParser._process_apply(parsed_args, configuration)

        if command == "sprites":
            return SpritesArgs(
                command="sprites",
                search=parsed_args.search,
                download=parsed_args.download,
            )

        if command == "library":
            return ArgumentParser._process_library(parsed_args)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def parse_track(value: str) -> tuple[str, Path]:
        """Split a ``SLOT=PATH`` assignment.

        Raises:
            ValueError: The slot is missing, not a non-negative integer, or the path is empty.
        """
        slot, separator, path = value.partition("=")
        slot = slot.strip()
        path = path.strip()
        if not separator or not path:
            raise ValueError(f"Track assignment must look like SLOT=PATH, got '{value}'")
        if not (slot.isascii() and slot.isdigit()):
            raise ValueError(f"Track slot must be a non-negative integer, got '{slot}'")
        return slot, Path(path)

    @staticmethod
    def _process_apply(parsed_args: argparse.Namespace, configuration: Config) -> ApplyArgs:
        if parsed_args.output_dir:
            output_dir = Path(parsed_args.output_dir)
        elif configuration.output_dir is not None:
            output_dir = configuration.output_dir
        else:
            logger.error("OUTPUT_DIR is required when no output_dir is configured")
            sys.exit(1)

        tracks: dict[str, Path] = {}
        for raw in parsed_args.tracks:
            try:
                slot, path = ArgumentParser.parse_track(raw)
            except ValueError as exc:
                logger.error("%s", exc)
                sys.exit(1)
            if slot in tracks:
                logger.error("Track slot %s is assigned more than once", slot)
                sys.exit(1)
            tracks[slot] = path

        return ApplyArgs(
            command="apply",
            rom_path=Path(parsed_args.rom_path),
            output_dir=output_dir,
            tracks=tracks,
            overwrite_mode=OverwriteMode.from_user_input(parsed_args.overwrite),
            base_name=parsed_args.base_name,
            sprite_path=Path(parsed_args.sprite) if parsed_args.sprite else None,
            sprite_name=parsed_args.sprite_name,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )

    @staticmethod
    def _process_library(parsed_args: argparse.Namespace) -> LibraryArgs:
        directory = Path(parsed_args.directory)
        if not directory.is_dir():
            logger.error("Library path does not exist or is not a directory: %s", directory)
            sys.exit(1)
        return LibraryArgs(command="library", directory=directory.resolve())
